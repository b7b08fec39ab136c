"""Pytest configuration and shared fixtures for the pdftools-mcp test suite."""

from pathlib import Path

import pytest
from utils import RecordingDocumentWriter, RecordingHtmlRenderer

from pdftools_mcp.dispatcher import PdfToolDispatcher
from pdftools_mcp.security import allowed_output_roots


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")


@pytest.fixture
def fake_home(tmp_path) -> Path:
    """Provide a throwaway home directory with no Downloads/Documents/Desktop yet."""
    home = tmp_path / "home" / "user"
    home.mkdir(parents=True)
    return home


@pytest.fixture
def allowed_roots(fake_home) -> list[Path]:
    """Provide the canonical allowed roots of the fake home directory."""
    return allowed_output_roots(fake_home)


@pytest.fixture
def html_renderer() -> RecordingHtmlRenderer:
    """Provide an HTML renderer that records its calls."""
    return RecordingHtmlRenderer()


@pytest.fixture
def document_writer() -> RecordingDocumentWriter:
    """Provide a document writer that records its calls."""
    return RecordingDocumentWriter()


@pytest.fixture
def dispatcher(fake_home, html_renderer, document_writer) -> PdfToolDispatcher:
    """Provide a dispatcher rooted in the fake home with recording backends."""
    return PdfToolDispatcher.for_home(fake_home, html_renderer, document_writer)
