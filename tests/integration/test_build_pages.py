"""Integration tests converting AsciiDoc sources with the all2md engine."""

import pytest

from asciidoc_pages.constants import EMPTY_ATTRIBUTE_VALUE
from asciidoc_pages.engine import AsciidocEngine
from asciidoc_pages.exceptions import BuildError
from asciidoc_pages.normalize import process_plugin_options
from asciidoc_pages.options import ConversionOptions, PluginOptions
from asciidoc_pages.schema import infer_page_attribute_types
from asciidoc_pages.session import BuildSession
from asciidoc_pages.transform import on_create_node

HELLO = """\
= Hello World
:page-title: "Hello"
:page-order: 3
:description: A first page

Some *bold* text.
"""


@pytest.mark.integration
class TestEngineLoad:
    """Tests for AsciidocEngine.load."""

    def test_body_title_and_attributes(self) -> None:
        """Test a simple document."""
        document = AsciidocEngine().load(HELLO)

        assert "bold" in document.html
        assert "Some" in document.html
        assert document.title.combined == "Hello World"
        assert document.title.main == "Hello World"
        assert document.title.subtitle is None
        assert document.description == "A first page"
        assert document.attributes["page-order"] == "3"
        assert document.revision is None
        assert document.author is None

    def test_subtitle(self) -> None:
        """Test title partitioning at the separator."""
        document = AsciidocEngine().load("= Guide: Getting Started\n\nText\n")

        assert document.title.main == "Guide"
        assert document.title.subtitle == "Getting Started"

    def test_author_and_revision_lines(self) -> None:
        """Test the implicit author and revision header lines."""
        document = AsciidocEngine().load("= Notes\nDoc Writer <doc@example.com>\nv1.0, 2019-01-01: Draft\n\nText\n")

        assert document.author.full_name == "Doc Writer"
        assert document.author.first_name == "Doc"
        assert document.author.last_name == "Writer"
        assert document.author.email == "doc@example.com"
        assert document.revision.number == "1.0"
        assert document.revision.date == "2019-01-01"
        assert document.revision.remark == "Draft"
        assert "Doc Writer" not in document.html

    def test_author_attribute(self) -> None:
        """Test an author given as an attribute entry."""
        document = AsciidocEngine().load("= Notes\n:author: Jane Roe\n\nText\n")

        assert document.author.full_name == "Jane Roe"
        assert document.author.first_name == "Jane"
        assert document.author.last_name == "Roe"

    def test_no_title(self) -> None:
        """Test a document without a title."""
        document = AsciidocEngine().load("Just a paragraph.\n")

        assert document.title.combined is None
        assert document.title.main is None
        assert "Just a paragraph." in document.html

    def test_hard_set_overrides_document(self) -> None:
        """Test that a hard-set option wins over the document entry."""
        options = ConversionOptions({"page-layout": "wide"})

        document = AsciidocEngine().load("= Doc\n:page-layout: narrow\n\nText\n", options)

        assert document.attributes["page-layout"] == "wide"

    def test_soft_set_yields_to_document(self) -> None:
        """Test that a soft-set option is overridden by the document."""
        options = ConversionOptions({"page-layout": "wide@", "page-theme": "dark@"})

        document = AsciidocEngine().load("= Doc\n:page-layout: narrow\n\nText\n", options)

        assert document.attributes["page-layout"] == "narrow"
        assert document.attributes["page-theme"] == "dark"

    def test_unset_option(self) -> None:
        """Test that a false option removes the attribute."""
        options = ConversionOptions({"description": False})

        document = AsciidocEngine().load("= Doc\n:description: Gone\n\nText\n", options)

        assert document.description is None

    def test_prefix_unset_entry(self) -> None:
        """Test that ``:!name:`` unsets an attribute set earlier."""
        document = AsciidocEngine().load("= T\n:page-a: 1\n:!page-a:\n\nx\n")

        assert "page-a" not in document.attributes
        assert ":!page-a:" not in document.html
        assert "<p>x</p>" in document.html

    def test_references_in_attribute_values(self) -> None:
        """Test that entries see the values declared before them."""
        source = "= T\n:product: Widget\n:edition: {product} Pro\n:early: {later}\n:later: set\n\nx\n"

        document = AsciidocEngine().load(source)

        assert document.attributes["edition"] == "Widget Pro"
        assert document.attributes["early"] == "{later}"

    def test_front_matter_hidden_from_engine(self) -> None:
        """Test that leading front matter is stripped before parsing."""
        source = "---\ntitle: Meta\n---\n= Doc\n\nBody text\n"

        skipped = AsciidocEngine().load(source, ConversionOptions({"skip-front-matter": True}))

        assert "title: Meta" not in skipped.html
        assert skipped.title.combined == "Doc"

    def test_custom_converter(self) -> None:
        """Test a converter strategy receiving the parsed document."""
        seen = []

        class Summary:
            def render_to_string(self, document):
                seen.append(document)
                return "<p>custom</p>"

        engine = AsciidocEngine(converter_factory=lambda engine: Summary())

        document = engine.load(HELLO)

        assert document.html == "<p>custom</p>"
        assert len(seen) == 1


@pytest.mark.integration
class TestOnCreateNode:
    """End-to-end tests through the build session."""

    def test_page_attributes(self, session, make_node) -> None:
        """Test decoding of page attributes."""
        record = on_create_node(make_node(HELLO), session)

        assert record.page_attributes == {"title": "Hello", "order": 3}
        assert record.title.combined == "Hello World"
        assert record.description == "A first page"
        assert record.revision is None
        assert record.author is None
        assert record.internal.content == HELLO

    def test_empty_attributes_across_documents(self, session, make_node) -> None:
        """Test the empty sentinel and the session-wide name set."""
        first = on_create_node(make_node("= A\n:page-draft:\n\nText\n", node_id="a"), session)
        second = on_create_node(make_node("= B\n:page-draft:\n:page-tags: [x]\n\nText\n", node_id="b"), session)

        assert first.page_attributes["draft"] == EMPTY_ATTRIBUTE_VALUE
        assert second.page_attributes == {"draft": EMPTY_ATTRIBUTE_VALUE, "tags": ["x"]}
        assert session.empty_attribute_names.snapshot() == frozenset({"draft"})

        schema = infer_page_attribute_types(session.nodes.values(), session.empty_attribute_names)
        assert schema == {"draft": "String", "tags": "[String]"}

    def test_page_attribute_references(self, session, make_node) -> None:
        """Test that page values are decoded after references resolve."""
        source = "= T\n:product: Widget\n:page-tags: [{product}, docs]\n\nBody\n"

        record = on_create_node(make_node(source), session)

        assert record.page_attributes == {"tags": ["Widget", "docs"]}

    def test_malformed_attribute_names_file(self, session, write_source) -> None:
        """Test that a decode failure is fatal and names the file."""
        node = write_source("broken.adoc", "= Broken\n:page-tags: [unclosed\n\nText\n")

        with pytest.raises(BuildError) as exc_info:
            on_create_node(node, session)

        assert f"Error processing Asciidoc file {node.absolute_path}" in str(exc_info.value)
        assert session.nodes == {}

    def test_lenient_session_continues(self, lenient_session, write_source) -> None:
        """Test that a lenient reporter lets the build continue."""
        broken = write_source("broken.adoc", "= Broken\n:page-tags: [unclosed\n\nText\n")
        good = write_source("good.adoc", HELLO)

        assert on_create_node(broken, lenient_session) is None
        assert on_create_node(good, lenient_session) is not None
        assert len(lenient_session.nodes) == 1
        assert len(lenient_session.reporter.errors) == 1

    def test_front_matter(self, session, make_node) -> None:
        """Test that front matter is parsed alongside the attributes."""
        source = "---\ntags: [a, b]\n---\n= Doc\n:page-order: 1\n\nText\n"

        record = on_create_node(make_node(source), session)

        assert record.frontmatter == {"tags": ["a", "b"]}
        assert record.page_attributes == {"order": 1}
        assert record.internal.content == "= Doc\n:page-order: 1\n\nText\n"
        assert "tags:" not in record.html

    def test_relative_images_resolved(self, make_node) -> None:
        """Test that relative images resolve under the prefixed imagesdir."""
        session = BuildSession(path_prefix="/docs")

        record = on_create_node(make_node("= Doc\n\nimage::diagram.png[Diagram]\n"), session)

        assert "/docs/images/diagram.png" in record.html

    def test_record_serializes(self, session, make_node) -> None:
        """Test the registered node shape."""
        record = on_create_node(make_node(HELLO), session)

        data = record.to_dict()

        assert data["document"]["title"] == "Hello World"
        assert data["internal"]["mediaType"] == "text/html"
        assert len(data["internal"]["contentDigest"]) == 32
        assert data["pageAttributes"] == {"title": "Hello", "order": 3}


@pytest.mark.integration
class TestNormalizedOptionsWithEngine:
    """Tests for normalized options applied by the engine."""

    def test_default_imagesdir_is_soft(self) -> None:
        """Test that a document may redefine the default imagesdir."""
        options = process_plugin_options(PluginOptions(), "/docs")

        document = AsciidocEngine().load("= Doc\n:imagesdir: /media\n\nText\n", options)

        assert document.attributes["imagesdir"] == "/media"
