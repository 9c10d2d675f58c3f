"""Pytest configuration and shared fixtures for the asciidoc-pages test suite.

This module provides shared fixtures, test configuration, and test doubles
for the host services and the conversion engine.
"""

from pathlib import Path
from typing import Any, Callable, Optional

import pytest

from asciidoc_pages.engine import ConvertedDocument
from asciidoc_pages.models import DocumentTitle, SourceNode
from asciidoc_pages.options import ConversionOptions, PluginOptions
from asciidoc_pages.session import BuildSession, Reporter


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


class FakeEngine:
    """Engine double returning a fixed document and recording its calls."""

    def __init__(
        self,
        attributes: Optional[dict[str, str]] = None,
        html: str = "<p>Body</p>\n",
        title: Optional[str] = "Guide: Getting Started",
        error: Optional[Exception] = None,
    ):
        self.attributes = attributes or {}
        self.html = html
        self.title = title
        self.error = error
        self.calls: list[tuple[str, ConversionOptions]] = []

    def load(self, content: str, options: ConversionOptions) -> ConvertedDocument:
        self.calls.append((content, options))
        if self.error is not None:
            raise self.error
        return ConvertedDocument(
            html=self.html,
            title=DocumentTitle.partition(self.title),
            attributes=dict(self.attributes),
        )


class RecordingSession(BuildSession):
    """Build session serving a fake engine and counting content loads."""

    def __init__(self, engine: Optional[FakeEngine] = None, **kwargs: Any):
        super().__init__(**kwargs)
        self.engine = engine or FakeEngine()
        self.loaded: list[str] = []

    def engine_for(self, options: PluginOptions) -> FakeEngine:  # type: ignore[override]
        return self.engine

    def load_node_content(self, node: SourceNode) -> str:
        self.loaded.append(node.id)
        return super().load_node_content(node)


@pytest.fixture
def session() -> BuildSession:
    """Provide a build session whose reporter raises on fatal errors."""
    return BuildSession()


@pytest.fixture
def lenient_session() -> BuildSession:
    """Provide a build session that records fatal errors instead of raising."""
    return BuildSession(reporter=Reporter(raise_on_panic=False))


@pytest.fixture
def make_node() -> Callable[..., SourceNode]:
    """Provide a factory for inline-content source nodes."""

    def _make(content: str, extension: str = "adoc", node_id: str = "file-1", path: Optional[str] = None):
        return SourceNode(id=node_id, extension=extension, absolute_path=path, content=content)

    return _make


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], SourceNode]:
    """Provide a factory writing a source file and returning its node."""

    def _write(name: str, content: str) -> SourceNode:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return SourceNode.from_path(path)

    return _write


@pytest.fixture
def fake_engine() -> type[FakeEngine]:
    """Provide the engine double class."""
    return FakeEngine


@pytest.fixture
def recording_session() -> type[RecordingSession]:
    """Provide the recording session class."""
    return RecordingSession
