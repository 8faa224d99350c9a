"""
Tests for the PDF export.
"""

from core.models import AnalysisReport, Language
from core.reporter import PDFReportWriter, SECTIONS, generate_pdf_report
from fakes import HINDI_REPORT_DICT, anemia_report


class TestPDFReport:

    def test_produces_pdf_bytes(self):
        pdf = generate_pdf_report(anemia_report())
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 500

    def test_section_order(self):
        assert [heading for heading, _, _ in SECTIONS] == [
            "Simple Summary",
            "Key Findings",
            "Possible Causes & Risk Factors",
            "Cure & Care Suggestions",
            "Recommended Action Steps",
        ]
        assert [numbered for _, _, numbered in SECTIONS] == [False, False, False, False, True]

    def test_long_report_paginates(self):
        short_writer = PDFReportWriter()
        short_writer.render(anemia_report())

        long_report = AnalysisReport(
            simple_summary="A very long explanation. " * 200,
            key_findings=[f"Finding number {i}" for i in range(80)],
            possible_causes=["Cause"] * 10,
            cure_and_care=["Care"] * 10,
            action_steps=[f"Step {i}" for i in range(40)],
        )
        long_writer = PDFReportWriter()
        pdf = long_writer.render(long_report)

        assert pdf.startswith(b"%PDF")
        assert long_writer.canvas.getPageNumber() > short_writer.canvas.getPageNumber()

    def test_non_latin_without_font_falls_back(self):
        report = AnalysisReport.from_dict(HINDI_REPORT_DICT)
        pdf = generate_pdf_report(report, Language.HINDI)
        assert pdf.startswith(b"%PDF")

    def test_missing_font_file_falls_back(self, tmp_path):
        writer = PDFReportWriter({Language.HINDI: str(tmp_path / "missing.ttf")})
        pdf = writer.render(AnalysisReport.from_dict(HINDI_REPORT_DICT), Language.HINDI)

        assert pdf.startswith(b"%PDF")
        assert writer.body_font == "Helvetica"

    def test_empty_sections(self):
        report = AnalysisReport("Nothing unusual.", [], [], [], [])
        assert generate_pdf_report(report).startswith(b"%PDF")
