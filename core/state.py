#!/usr/bin/env python3
"""
State Manager Module
Centralizes all Streamlit session state interactions.
Each browser session gets exactly one WorkflowController.
"""

import streamlit as st
from typing import Optional

from core.config import Settings, load_settings
from core.controller import WorkflowController
from core.models import WorkflowState


class StateManager:
    """
    Wrapper around st.session_state to provide type-safe access to app data.
    """

    # Internal Storage Keys
    _KEY_CONTROLLER = "state_controller"
    _KEY_SETTINGS = "state_settings"
    _KEY_UPLOADER_NONCE = "state_uploader_nonce"
    _KEY_LAST_UPLOAD = "state_last_upload_id"

    def __init__(self):
        """Initialize session state structure if not present"""
        if self._KEY_UPLOADER_NONCE not in st.session_state:
            st.session_state[self._KEY_UPLOADER_NONCE] = 0

    # --- Controller ---

    @property
    def settings(self) -> Settings:
        if self._KEY_SETTINGS not in st.session_state:
            st.session_state[self._KEY_SETTINGS] = load_settings()
        return st.session_state[self._KEY_SETTINGS]

    @property
    def controller(self) -> WorkflowController:
        if self._KEY_CONTROLLER not in st.session_state:
            st.session_state[self._KEY_CONTROLLER] = WorkflowController(self.settings)
        return st.session_state[self._KEY_CONTROLLER]

    @property
    def workflow(self) -> WorkflowState:
        return self.controller.state

    @property
    def is_processing(self) -> bool:
        return self.workflow.is_busy

    # --- Uploader bookkeeping ---

    @property
    def uploader_key(self) -> str:
        """Changing the key is the only way to clear st.file_uploader"""
        return f"report_upload_{st.session_state.get(self._KEY_UPLOADER_NONCE, 0)}"

    def is_new_upload(self, upload_id: str) -> bool:
        return st.session_state.get(self._KEY_LAST_UPLOAD) != upload_id

    def mark_upload(self, upload_id: Optional[str]):
        st.session_state[self._KEY_LAST_UPLOAD] = upload_id

    # --- Utility ---

    def reset_all(self):
        """Blank workflow and a fresh uploader widget"""
        self.controller.reset()
        self.mark_upload(None)
        st.session_state[self._KEY_UPLOADER_NONCE] = st.session_state.get(self._KEY_UPLOADER_NONCE, 0) + 1


# Singleton Instance
state_manager = StateManager()
