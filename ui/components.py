#!/usr/bin/env python3
"""
Presentation Components
Small render helpers shared by the layouts. No workflow logic lives here.
"""

import streamlit as st

from core.models import AnalysisReport
from core.reporter import DISCLAIMER


def render_header():
    st.title("🩺 MediAssist")
    st.caption("Easy Medical Report Analyzer")
    st.divider()


def render_footer():
    st.divider()
    st.caption("MediAssist – making medical reports easy for everyone.")


def render_loader(container, message: str):
    container.info(f"⏳ {message or 'Working...'}")


def render_error(message: str):
    st.error(f"**Error**\n\n{message}")


def render_disclaimer():
    st.warning(f"**{DISCLAIMER}**")


def _card(title: str, icon: str, items=None, text: str = None, numbered: bool = False):
    with st.container(border=True):
        st.markdown(f"### {icon} {title}")
        if text is not None:
            st.write(text)
            return
        if not items:
            st.caption("Nothing reported.")
            return
        if numbered:
            st.markdown("\n".join(f"{i}. **{item}**" for i, item in enumerate(items, start=1)))
        else:
            st.markdown("\n".join(f"- {item}" for item in items))


def render_report(report: AnalysisReport):
    """The five analysis cards, in the same order as the PDF export"""
    col1, col2 = st.columns(2)
    with col1:
        _card("Simple Summary", "📋", text=report.simple_summary)
        _card("Possible Causes & Risk Factors", "💡", items=report.possible_causes)
    with col2:
        _card("Key Findings", "🫀", items=report.key_findings)
        _card("Cure & Care Suggestions", "✅", items=report.cure_and_care)
    _card("Recommended Action Steps", "✅", items=report.action_steps, numbered=True)
