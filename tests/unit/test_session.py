"""Unit tests for the build session host services."""

import datetime

import pytest

from asciidoc_pages.engine import AsciidocEngine
from asciidoc_pages.exceptions import BuildError
from asciidoc_pages.models import SourceNode
from asciidoc_pages.options import PluginOptions
from asciidoc_pages.session import BuildSession, Reporter, create_content_digest


@pytest.mark.unit
class TestReporter:
    """Tests for fatal build reporting."""

    def test_panic_raises_by_default(self) -> None:
        """Test that the default reporter halts the build."""
        reporter = Reporter()

        with pytest.raises(BuildError, match="broken"):
            reporter.panic_on_build("broken")

        assert reporter.errors == ["broken"]

    def test_panic_recorded_when_lenient(self) -> None:
        """Test that a lenient reporter only records."""
        reporter = Reporter(raise_on_panic=False)

        reporter.panic_on_build("broken")

        assert reporter.errors == ["broken"]


@pytest.mark.unit
class TestContentDigest:
    """Tests for content digests."""

    def test_string_digest(self) -> None:
        """Test the md5 digest of a string."""
        assert create_content_digest("") == "d41d8cd98f00b204e9800998ecf8427e"

    def test_mapping_digest_ignores_key_order(self) -> None:
        """Test that equal mappings digest equally."""
        assert create_content_digest({"a": 1, "b": 2}) == create_content_digest({"b": 2, "a": 1})

    def test_non_json_values(self) -> None:
        """Test that dates are digested through their string form."""
        digest = create_content_digest({"published": datetime.date(2019, 1, 1)})

        assert len(digest) == 32


@pytest.mark.unit
class TestBuildSession:
    """Tests for BuildSession."""

    def test_node_id_deterministic(self, session) -> None:
        """Test that node ids depend only on the seed."""
        assert session.create_node_id("a") == BuildSession().create_node_id("a")
        assert session.create_node_id("a") != session.create_node_id("b")

    def test_load_inline_content(self, session, make_node) -> None:
        """Test loading inline content."""
        assert session.load_node_content(make_node("= Doc")) == "= Doc"

    def test_load_file_content(self, session, write_source) -> None:
        """Test loading content from disk."""
        node = write_source("guide.adoc", "= Guide\n")

        assert session.load_node_content(node) == "= Guide\n"

    def test_load_without_source(self, session) -> None:
        """Test a node with neither content nor path."""
        with pytest.raises(BuildError):
            session.load_node_content(SourceNode(id="x", extension="adoc"))

    def test_engine_per_converter_factory(self, session) -> None:
        """Test that engines are shared per converter strategy."""

        def factory(engine):
            raise AssertionError("not built")

        default = session.engine_for(PluginOptions())
        custom = session.engine_for(PluginOptions(converter_factory=factory))

        assert isinstance(default, AsciidocEngine)
        assert session.engine_for(PluginOptions(attributes={"a": 1})) is default
        assert session.engine_for(PluginOptions(converter_factory=factory)) is custom
        assert custom is not default
        assert custom.converter_factory is factory

    def test_close_keeps_results(self) -> None:
        """Test that closing clears caches but keeps recorded state."""
        with BuildSession() as session:
            session.empty_attribute_names.add("draft")
            session.options_cache.get_or_compute("k", lambda: None)
            engine = session.engine_for(PluginOptions())

        assert len(session.options_cache) == 0
        assert "draft" in session.empty_attribute_names
        assert session.engine_for(PluginOptions()) is not engine
