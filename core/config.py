#!/usr/bin/env python3
"""
Configuration Module
Loads the API credential and tuning knobs once, as an explicit Settings value.
Environment variables win; Streamlit secrets are the fallback for the key.
"""

from typing import Dict, Optional

import streamlit as st
from pydantic import Field
from pydantic_settings import BaseSettings

from core.models import Language
from utils.helpers import safe_log

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 600.0


class Settings(BaseSettings):
    """Environment configuration for MediAssist."""

    # OpenAI
    api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    model: str = Field(default=DEFAULT_MODEL, alias="OPENAI_MODEL")

    # Application
    request_timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0, alias="MEDIASSIST_REQUEST_TIMEOUT")

    # TrueType fonts for the PDF export
    font_hindi: Optional[str] = Field(default=None, alias="MEDIASSIST_FONT_HINDI")
    font_gujarati: Optional[str] = Field(default=None, alias="MEDIASSIST_FONT_GUJARATI")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @property
    def font_paths(self) -> Dict[Language, str]:
        paths = {Language.HINDI: self.font_hindi, Language.GUJARATI: self.font_gujarati}
        return {lang: path for lang, path in paths.items() if path}

    model_config = {
        "extra": "ignore",
        "frozen": True,
        "populate_by_name": True,
        "env_ignore_empty": True,
    }


def _read_secret(name: str) -> Optional[str]:
    try:
        if name in st.secrets:
            return st.secrets[name]
    except Exception as e:
        # No secrets.toml at all is normal outside deployments
        safe_log(f"Config: Streamlit secrets unavailable ({e})", "DEBUG")
    return None


def load_settings() -> Settings:
    """Load and validate settings. Raises ValidationError on malformed values."""
    settings = Settings()
    if not settings.is_configured:
        secret = _read_secret("openai_api_key")
        if secret:
            settings = settings.model_copy(update={"api_key": str(secret)})
        else:
            safe_log("Config: OPENAI_API_KEY not set", "WARNING")
    return settings
