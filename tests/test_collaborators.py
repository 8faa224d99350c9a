"""
Tests for the extraction, analysis and translation collaborators,
run against a fake OpenAI service.
"""

import asyncio

import pytest

from core.analyzer import (
    ANALYSIS_SCHEMA,
    INVALID_ANALYSIS_MESSAGE,
    INVALID_TRANSLATION_MESSAGE,
    ReportAnalyzer,
    ReportTranslator,
)
from core.errors import CollaboratorFailure, MalformedResponseError, UnsupportedFileTypeError
from core.extractor import EXTRACTION_PROMPT, DocumentExtractor
from core.models import Language, UploadedFile
from fakes import ANEMIA_REPORT_DICT, HINDI_REPORT_DICT, FakeService, anemia_report


def run(coro):
    return asyncio.run(coro)


class TestDocumentExtractor:

    def test_text_file_is_returned_verbatim(self):
        service = FakeService()
        file = UploadedFile(name="notes.txt", mime_type="text/plain", data="Hb 9.1 g/dL\n".encode("utf-8"))

        assert run(DocumentExtractor(service).extract(file)) == "Hb 9.1 g/dL\n"
        assert service.requests == []

    def test_image_sent_as_data_url(self):
        service = FakeService((True, "Hemoglobin: 9.1", None))
        file = UploadedFile(name="scan.png", mime_type="image/png", data=b"\x89PNG")

        text = run(DocumentExtractor(service).extract(file))

        assert text == "Hemoglobin: 9.1"
        content = service.requests[0]["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": EXTRACTION_PROMPT}
        assert content[1]["type"] == "image_url"
        assert content[1]["image_url"]["url"].startswith("data:image/png;base64,")

    def test_pdf_sent_as_file_part(self):
        service = FakeService((True, "report text", None))
        file = UploadedFile(name="report.pdf", mime_type="application/pdf", data=b"%PDF")

        run(DocumentExtractor(service).extract(file))

        part = service.requests[0]["messages"][0]["content"][1]
        assert part["type"] == "file"
        assert part["file"]["filename"] == "report.pdf"
        assert part["file"]["file_data"].startswith("data:application/pdf;base64,")

    def test_missing_mime_type_inferred_from_extension(self):
        service = FakeService((True, "text", None))
        file = UploadedFile(name="SCAN.JPG", mime_type="", data=b"\xff\xd8")

        run(DocumentExtractor(service).extract(file))

        part = service.requests[0]["messages"][0]["content"][1]
        assert part["image_url"]["url"].startswith("data:image/jpeg;base64,")

    def test_nonstandard_jpeg_type_accepted(self):
        service = FakeService((True, "text", None))
        file = UploadedFile(name="scan.jpg", mime_type="image/jpg", data=b"\xff\xd8")

        run(DocumentExtractor(service).extract(file))

        part = service.requests[0]["messages"][0]["content"][1]
        assert part["image_url"]["url"].startswith("data:image/jpeg;base64,")

    def test_unsupported_type(self):
        service = FakeService()
        file = UploadedFile(name="report.docx", mime_type="application/msword", data=b"x")

        with pytest.raises(UnsupportedFileTypeError):
            run(DocumentExtractor(service).extract(file))
        assert service.requests == []

    def test_service_failure(self):
        service = FakeService((False, None, "System Error: timeout"))
        file = UploadedFile(name="scan.png", mime_type="image/png", data=b"x")

        with pytest.raises(CollaboratorFailure, match="timeout"):
            run(DocumentExtractor(service).extract(file))


class TestReportAnalyzer:

    def test_analyze(self):
        service = FakeService.returning_json(ANEMIA_REPORT_DICT)

        report = run(ReportAnalyzer(service).analyze("Patient has mild anemia."))

        assert report == anemia_report()
        request = service.requests[0]
        assert request["response_schema"] is ANALYSIS_SCHEMA
        assert "Patient has mild anemia." in request["messages"][0]["content"]

    def test_schema_requires_all_fields(self):
        assert set(ANALYSIS_SCHEMA["required"]) == set(ANEMIA_REPORT_DICT)
        assert ANALYSIS_SCHEMA["additionalProperties"] is False

    def test_malformed_output(self):
        service = FakeService((True, '{"simpleSummary": "only this"}', None))

        with pytest.raises(MalformedResponseError) as exc:
            run(ReportAnalyzer(service).analyze("text"))
        assert str(exc.value) == INVALID_ANALYSIS_MESSAGE

    def test_service_failure(self):
        service = FakeService((False, None, "AI Error: quota exceeded"))

        with pytest.raises(CollaboratorFailure, match="quota"):
            run(ReportAnalyzer(service).analyze("text"))


class TestReportTranslator:

    def test_translate(self):
        service = FakeService.returning_json(HINDI_REPORT_DICT)

        report = run(ReportTranslator(service).translate(anemia_report(), Language.HINDI))

        assert report.simple_summary == HINDI_REPORT_DICT["simpleSummary"]
        prompt = service.requests[0]["messages"][0]["content"]
        assert "to Hindi" in prompt
        assert '"keyFindings"' in prompt
        assert '"Low hemoglobin"' in prompt
        assert service.requests[0]["response_schema"] is ANALYSIS_SCHEMA

    def test_malformed_translation(self):
        service = FakeService((True, "नमस्ते", None))

        with pytest.raises(MalformedResponseError) as exc:
            run(ReportTranslator(service).translate(anemia_report(), Language.GUJARATI))
        assert str(exc.value) == INVALID_TRANSLATION_MESSAGE
