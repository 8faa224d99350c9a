#!/usr/bin/env python3
"""
Document Extractor
Turns an uploaded report into plain text.
Text files are read directly; images and PDFs are transcribed by the model.
"""

import base64

from core.errors import CollaboratorFailure, UnsupportedFileTypeError
from core.models import UploadedFile
from core.service import OpenAIService
from utils.helpers import safe_log, guess_mime_type

EXTRACTION_PROMPT = "Extract all text from this medical report document. Be as accurate as possible."
UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload a PDF, image, or text file."

TEXT_TYPES = ('text/plain',)
IMAGE_TYPES = ('image/png', 'image/jpeg')
PDF_TYPES = ('application/pdf',)
ACCEPTED_EXTENSIONS = ['pdf', 'png', 'jpg', 'jpeg', 'txt']


class DocumentExtractor:

    def __init__(self, service: OpenAIService):
        self.service = service

    async def extract(self, file: UploadedFile) -> str:
        mime_type = guess_mime_type(file.name, file.mime_type)
        safe_log(f"Extractor: {file.name} ({mime_type}, {file.size} bytes)")

        if mime_type in TEXT_TYPES:
            return file.data.decode('utf-8', errors='replace')

        if mime_type in IMAGE_TYPES or mime_type in PDF_TYPES:
            return await self._extract_with_model(file, mime_type)

        safe_log(f"Extractor: Rejected {file.name} ({mime_type})", "WARNING")
        raise UnsupportedFileTypeError(UNSUPPORTED_MESSAGE)

    async def _extract_with_model(self, file: UploadedFile, mime_type: str) -> str:
        data_url = f"data:{mime_type};base64,{base64.b64encode(file.data).decode('ascii')}"

        if mime_type in PDF_TYPES:
            document_part = {
                "type": "file",
                "file": {"filename": file.name, "file_data": data_url},
            }
        else:
            document_part = {
                "type": "image_url",
                "image_url": {"url": data_url},
            }

        messages = [{
            "role": "user",
            "content": [{"type": "text", "text": EXTRACTION_PROMPT}, document_part],
        }]

        success, text, error = await self.service.get_completion(messages, task_name="Extraction")
        if not success:
            raise CollaboratorFailure(error)
        return text or ""
