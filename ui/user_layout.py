#!/usr/bin/env python3
"""
User Layout
Upload page, then the analysis page (language switch, PDF download, cards).
Every action is handed to the WorkflowController; this module only renders state.
"""

import streamlit as st

from core.extractor import ACCEPTED_EXTENSIONS
from core.models import Language, UploadedFile
from core.processor import run_workflow
from core.reporter import PDF_FILENAME, generate_pdf_report
from core.state import state_manager
from ui import components
from utils.helpers import safe_log


class UserLayout:

    def render(self):
        if state_manager.workflow.selected_file is None:
            self._render_upload_page()
        else:
            self._render_analysis_page()

    # --- Upload ---

    def _render_upload_page(self):
        uploaded = st.file_uploader(
            "**Upload your medical report:**",
            type=ACCEPTED_EXTENSIONS,
            key=state_manager.uploader_key,
            disabled=state_manager.is_processing,
            help="Supports: PDF, PNG, JPG, TXT"
        )

        if uploaded and state_manager.is_new_upload(uploaded.file_id):
            state_manager.mark_upload(uploaded.file_id)
            report_file = UploadedFile(
                name=uploaded.name,
                mime_type=uploaded.type or "",
                data=uploaded.getvalue()
            )
            safe_log(f"UI: Received {report_file.name} ({report_file.size} bytes)")
            controller = state_manager.controller
            self._run(lambda: controller.select_file(report_file), "Analysis")
            st.rerun()

    # --- Analysis ---

    def _render_analysis_page(self):
        if st.button("← Analyze Another Report"):
            state_manager.reset_all()
            st.rerun()

        workflow = state_manager.workflow

        if workflow.last_error and not workflow.is_busy:
            components.render_error(workflow.last_error)

        if workflow.is_busy:
            components.render_loader(st, workflow.status_message)

        report = workflow.displayed_analysis
        if report and not workflow.is_busy:
            self._render_toolbar()
            components.render_disclaimer()
            components.render_report(report)

    def _render_toolbar(self):
        controller = state_manager.controller
        workflow = controller.state

        with st.container(border=True):
            label_col, *lang_cols, pdf_col = st.columns([2, 1, 1, 1, 2])
            label_col.markdown("**Report Language:**")

            for col, lang in zip(lang_cols, Language):
                label = lang.native_label
                if lang != Language.ENGLISH and controller.is_translation_available(lang):
                    label += " ✓"
                clicked = col.button(
                    label,
                    key=f"lang_{lang.value}",
                    type="primary" if workflow.current_language == lang else "secondary",
                    disabled=workflow.is_busy,
                    use_container_width=True
                )
                if clicked:
                    self._run(lambda lang=lang: controller.change_language(lang), "Translation")
                    st.rerun()

            pdf_bytes = generate_pdf_report(
                workflow.displayed_analysis,
                workflow.displayed_language,
                state_manager.settings.font_paths
            )
            pdf_col.download_button(
                "📄 Download PDF",
                data=pdf_bytes,
                file_name=PDF_FILENAME,
                mime="application/pdf",
                type="primary",
                use_container_width=True
            )

    # --- Runner ---

    def _run(self, make_coroutine, task_name: str):
        """Drive one controller operation, streaming status messages into a placeholder."""
        controller = state_manager.controller
        placeholder = st.empty()

        def _show(state):
            if state.is_busy:
                components.render_loader(placeholder, state.status_message)
            else:
                placeholder.empty()

        controller.on_change = _show
        try:
            run_workflow(make_coroutine, task_name, state_manager.settings.request_timeout)
        except Exception as e:
            safe_log(f"UI: {task_name} crashed - {e}", "ERROR")
            st.error(f"❌ {task_name} failed: {str(e)}")
        finally:
            controller.on_change = None
