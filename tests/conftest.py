import pytest

from core.config import Settings
from core.controller import WorkflowController
from core.models import UploadedFile
from fakes import FakeAnalyzer, FakeExtractor, FakeTranslator


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def extractor():
    return FakeExtractor()


@pytest.fixture
def analyzer():
    return FakeAnalyzer()


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def controller(settings, extractor, analyzer, translator):
    return WorkflowController(settings, extractor=extractor, analyzer=analyzer, translator=translator)


@pytest.fixture
def pdf_file():
    return UploadedFile(name="report.pdf", mime_type="application/pdf", data=b"%PDF-1.4 fake")
