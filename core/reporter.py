#!/usr/bin/env python3
"""
PDF Reporter
Renders an AnalysisReport into a paginated A4 PDF (title, disclaimer, five sections).
Pure rendering: no workflow state is touched.
"""

import io
import os
from typing import Dict, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from core.models import AnalysisReport, Language
from utils.helpers import safe_log

PDF_FILENAME = "MediAssist_Report_Analysis.pdf"
REPORT_TITLE = "MediAssist - AI Medical Report Analysis"
DISCLAIMER = ("Disclaimer: This is an AI-generated summary for informational purposes only. "
              "Please consult a qualified doctor for any medical advice.")

# (heading, attribute, numbered)
SECTIONS = [
    ("Simple Summary", "simple_summary", False),
    ("Key Findings", "key_findings", False),
    ("Possible Causes & Risk Factors", "possible_causes", False),
    ("Cure & Care Suggestions", "cure_and_care", False),
    ("Recommended Action Steps", "action_steps", True),
]

MARGIN = 50
LINE_HEIGHT = 14
TITLE_COLOR = colors.HexColor("#2c7a7b")
HEADING_COLOR = colors.HexColor("#1a202c")
BODY_COLOR = colors.HexColor("#4a5568")
MUTED_COLOR = colors.HexColor("#a0aec0")


class PDFReportWriter:

    def __init__(self, font_paths: Optional[Dict[Language, str]] = None):
        self.font_paths = font_paths or {}

    def render(self, report: AnalysisReport, language: Language = Language.ENGLISH) -> bytes:
        buffer = io.BytesIO()
        self.canvas = canvas.Canvas(buffer, pagesize=A4)
        self.canvas.setTitle(REPORT_TITLE)
        self.width, self.height = A4
        self.y = self.height - MARGIN
        self.body_font, self.bold_font, self.unicode_ok = self._resolve_fonts(language)

        self._draw_header()
        for heading, attr, numbered in SECTIONS:
            value = getattr(report, attr)
            self._draw_section(heading, value, numbered)

        self.canvas.save()
        return buffer.getvalue()

    def _resolve_fonts(self, language: Language):
        path = self.font_paths.get(language)
        if path and os.path.exists(path):
            font_name = f"MediAssist-{language.value}"
            if font_name not in pdfmetrics.getRegisteredFontNames():
                pdfmetrics.registerFont(TTFont(font_name, path))
            return font_name, font_name, True
        if path:
            safe_log(f"Reporter: Font for {language.value} not found at {path}", "WARNING")
        elif language != Language.ENGLISH:
            safe_log(f"Reporter: No font configured for {language.value}, non-Latin text will be replaced", "WARNING")
        return "Helvetica", "Helvetica-Bold", False

    def _safe(self, text: str) -> str:
        if self.unicode_ok:
            return text
        # Standard Type 1 fonts cover Latin-1 plus the bullet
        return ''.join(ch if ch == '•' or ord(ch) < 256 else '?' for ch in text)

    def _ensure_space(self, needed: float):
        if self.y - needed < MARGIN:
            self.canvas.showPage()
            self.y = self.height - MARGIN

    def _draw_lines(self, text: str, font: str, size: int, color, indent: float = 0, centered: bool = False):
        available = self.width - 2 * MARGIN - indent
        for line in simpleSplit(self._safe(text), font, size, available):
            self._ensure_space(LINE_HEIGHT)
            self.canvas.setFont(font, size)
            self.canvas.setFillColor(color)
            if centered:
                self.canvas.drawCentredString(self.width / 2, self.y, line)
            else:
                self.canvas.drawString(MARGIN + indent, self.y, line)
            self.y -= LINE_HEIGHT

    def _draw_header(self):
        self._draw_lines(REPORT_TITLE, "Helvetica-Bold", 18, TITLE_COLOR, centered=True)
        self.y -= 4
        self._draw_lines(DISCLAIMER, "Helvetica-Oblique", 9, MUTED_COLOR, centered=True)
        self.y -= 16

    def _draw_section(self, heading: str, value, numbered: bool):
        self._ensure_space(LINE_HEIGHT * 3)
        self._draw_lines(heading, "Helvetica-Bold", 13, HEADING_COLOR)
        self.y -= 2

        if isinstance(value, str):
            self._draw_lines(value, self.body_font, 10, BODY_COLOR)
        else:
            for i, item in enumerate(value, start=1):
                marker = f"{i}. " if numbered else "• "
                font = self.bold_font if numbered else self.body_font
                self._draw_lines(marker + item, font, 10, BODY_COLOR, indent=8)
                self.y -= 2

        self.y -= 10
        self.canvas.setStrokeColor(colors.HexColor("#eeeeee"))
        self.canvas.line(MARGIN, self.y + 6, self.width - MARGIN, self.y + 6)


def generate_pdf_report(report: AnalysisReport,
                        language: Language = Language.ENGLISH,
                        font_paths: Optional[Dict[Language, str]] = None) -> bytes:
    writer = PDFReportWriter(font_paths)
    pdf_bytes = writer.render(report, language)
    safe_log(f"Reporter: Generated {language.value} PDF ({len(pdf_bytes)} bytes)")
    return pdf_bytes
