#!/usr/bin/env python3
"""
Helper Utilities
Common functions for logging and MIME detection.
"""

import logging
import mimetypes
import re
from typing import Optional

# Setup simple logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("mediassist")

# Used when the upload carries no MIME type
_EXTENSION_TYPES = {
    '.pdf': 'application/pdf',
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.txt': 'text/plain',
}

# Non-standard types some browsers declare
_TYPE_ALIASES = {
    'image/jpg': 'image/jpeg',
    'image/pjpeg': 'image/jpeg',
    'image/x-png': 'image/png',
}

def safe_log(message: str, level: str = "INFO"):
    try:
        lvl = getattr(logging, level.upper(), logging.INFO)
        logger.log(lvl, message)
    except Exception:
        print(f"[{level}] {message}")


def guess_mime_type(filename: str, declared: Optional[str] = None) -> str:
    """Use the declared type when present, otherwise infer from the extension."""
    if declared:
        mime = declared.lower().split(';')[0].strip()
        return _TYPE_ALIASES.get(mime, mime)
    match = re.search(r'\.[A-Za-z0-9]+$', filename or '')
    if match and match.group(0).lower() in _EXTENSION_TYPES:
        return _EXTENSION_TYPES[match.group(0).lower()]
    guessed, _ = mimetypes.guess_type(filename or '')
    return guessed or 'application/octet-stream'
