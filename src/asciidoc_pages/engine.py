#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/engine.py
"""Narrow facade over the all2md AsciiDoc conversion engine.

:class:`AsciidocEngine` parses a source exactly once per call and returns
a :class:`ConvertedDocument` holding only the facts the page transform
needs: the HTML body, the title, the resolved attributes, and the revision
and author details derived from them. Callers never touch the engine's
mutable parser or renderer state.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Protocol, runtime_checkable

from all2md.ast import Document, Image, Paragraph
from all2md.ast.transforms import NodeTransformer
from all2md.exceptions import All2MdError
from all2md.options.asciidoc import AsciiDocOptions
from all2md.options.html import HtmlRendererOptions
from all2md.parsers.asciidoc import AsciiDocParser
from all2md.renderers.html import HtmlRenderer

from asciidoc_pages.constants import DEFAULT_TITLE_SEPARATOR
from asciidoc_pages.exceptions import ConversionError
from asciidoc_pages.frontmatter import split_front_matter
from asciidoc_pages.header import author_attributes, read_header
from asciidoc_pages.models import Author, DocumentTitle, Revision
from asciidoc_pages.options import ConversionOptions

logger = logging.getLogger(__name__)

_ATTRIBUTE_REF_RE = re.compile(r"(?<!\\)\{([\w][\w-]*)\}")
_PREFIX_UNSET_RE = re.compile(r"^:!([^:\s!]+):[ \t]*$", re.MULTILINE)
_PARAGRAPH_RE = re.compile(r"^<p>(.*)</p>$", re.DOTALL)
_URL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")

_REVISION_ATTRIBUTES = ("revnumber", "revdate", "revremark")


@runtime_checkable
class Converter(Protocol):
    """HTML converter strategy used for document bodies."""

    def render_to_string(self, document: Document) -> str: ...


def default_converter_factory(engine: "AsciidocEngine") -> Converter:
    """Build the stock all2md HTML renderer producing embeddable fragments."""
    return HtmlRenderer(HtmlRendererOptions(standalone=False))


class ImagesDirTransformer(NodeTransformer):
    """Resolve relative image targets against ``imagesdir``."""

    def __init__(self, imagesdir: str):
        super().__init__()
        self.imagesdir = imagesdir.rstrip("/")

    def visit_image(self, node: Image) -> Image:
        image = super().visit_image(node)
        url = image.url
        if not self.imagesdir or not url or url.startswith(("/", "#", "data:")) or _URL_SCHEME_RE.match(url):
            return image
        return replace(image, url=f"{self.imagesdir}/{url}")


def _entry_line(name: str, value: Optional[str]) -> str:
    if value is None:
        return f":{name}!:"
    return f":{name}: {value}" if value else f":{name}:"


def substitute_attributes(text: str, attributes: Mapping[str, str]) -> str:
    """Replace ``{name}`` references with attribute values; unknown ones stay."""
    return _ATTRIBUTE_REF_RE.sub(lambda m: attributes.get(m.group(1), m.group(0)), text)


def resolve_attribute_references(attributes: Mapping[str, str]) -> dict[str, str]:
    """Substitute references inside attribute values, in declaration order.

    A value sees only the entries declared before it, so a reference to a
    later entry is left as written.
    """
    resolved: dict[str, str] = {}
    for name, value in attributes.items():
        resolved[name] = substitute_attributes(value, resolved) if isinstance(value, str) else value
    return resolved


@dataclass(frozen=True)
class ConvertedDocument:
    """Immutable facts extracted from one parsed AsciiDoc document."""

    html: str
    title: DocumentTitle
    attributes: Mapping[str, str] = field(default_factory=dict)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    @property
    def description(self) -> Optional[str]:
        return self.attributes.get("description")

    def has_revision_info(self) -> bool:
        return any(name in self.attributes for name in _REVISION_ATTRIBUTES)

    @property
    def revision(self) -> Optional[Revision]:
        if not self.has_revision_info():
            return None
        return Revision(
            date=self.attributes.get("revdate"),
            number=self.attributes.get("revnumber"),
            remark=self.attributes.get("revremark"),
        )

    @property
    def author(self) -> Optional[Author]:
        if not self.attributes.get("author"):
            return None
        return Author(
            full_name=self.attributes.get("author"),
            first_name=self.attributes.get("firstname"),
            last_name=self.attributes.get("lastname"),
            middle_name=self.attributes.get("middlename"),
            author_initials=self.attributes.get("authorinitials"),
            email=self.attributes.get("email"),
        )


class AsciidocEngine:
    """Convert AsciiDoc sources with all2md.

    Parameters
    ----------
    converter_factory : callable, optional
        Strategy building the HTML converter for document bodies. It is
        called once, lazily, with this engine.
    parser_options : AsciiDocOptions, optional
        Options for the all2md AsciiDoc parser

    """

    def __init__(
        self,
        converter_factory: Optional[Callable[["AsciidocEngine"], Converter]] = None,
        parser_options: Optional[AsciiDocOptions] = None,
    ):
        self.converter_factory = converter_factory or default_converter_factory
        self.parser_options = parser_options or AsciiDocOptions()
        self._converter: Optional[Converter] = None
        self._lock = threading.RLock()

    @property
    def converter(self) -> Converter:
        """The body converter, built on first use."""
        with self._lock:
            if self._converter is None:
                converter = self.converter_factory(self)
                if not callable(getattr(converter, "render_to_string", None)):
                    raise ConversionError(
                        f"Converter factory returned {type(converter).__name__}, which has no render_to_string()"
                    )
                logger.debug("Built HTML converter %s", type(converter).__name__)
                self._converter = converter
            return self._converter

    def _parse(self, source: str) -> tuple[Document, dict[str, str]]:
        parser = AsciiDocParser(self.parser_options)
        document = parser.parse(source.encode("utf-8"))
        return document, dict(parser.attributes)

    def _render_title(self, title: str, attributes: Mapping[str, str]) -> str:
        text = substitute_attributes(title, attributes)
        document, _ = self._parse(text)
        paragraphs = [child for child in document.children if isinstance(child, Paragraph)]
        if not paragraphs:
            return text
        html = HtmlRenderer(HtmlRendererOptions(standalone=False)).render_to_string(
            Document(children=paragraphs[:1])
        )
        match = _PARAGRAPH_RE.match(html.strip())
        return match.group(1) if match else html.strip()

    def load(self, content: str | bytes, options: Optional[ConversionOptions] = None) -> ConvertedDocument:
        """Parse and convert ``content`` once.

        Parameters
        ----------
        content : str or bytes
            AsciiDoc source, optionally starting with front matter
        options : ConversionOptions, optional
            Normalized options; their attributes are applied around the
            document's own attribute entries

        Returns
        -------
        ConvertedDocument
            HTML body, title and resolved attributes

        Raises
        ------
        ConversionError
            If the engine fails to parse or render the document

        """
        options = options or ConversionOptions()
        source = content.decode("utf-8") if isinstance(content, bytes) else content

        if options.skip_front_matter:
            split = split_front_matter(source)
            if split is not None:
                source = split[1]

        header = read_header(source)

        soft_lines: list[str] = []
        hard_lines: list[str] = []
        hard: dict[str, Optional[str]] = {}
        for name, value, soft in options.iter_engine_attributes():
            if soft:
                soft_lines.append(_entry_line(name, value))
            else:
                hard_lines.append(_entry_line(name, value))
                hard[name] = value

        # Later entries win: soft-set < header lines < document entries < hard-set
        implicit_lines = [_entry_line(name, value) for name, value in header.attributes.items()]
        if header.title is not None:
            implicit_lines.append(_entry_line("doctitle", header.title))
        prepared = "\n".join(soft_lines + implicit_lines + ["", header.body, ""] + hard_lines)
        # all2md only understands the trailing-bang unset form
        prepared = _PREFIX_UNSET_RE.sub(r":\1!:", prepared)

        try:
            document, attributes = self._parse(prepared)
            for name, value in hard.items():
                if value is None:
                    attributes.pop(name, None)
            attributes = resolve_attribute_references(attributes)

            if attributes.get("author") and "firstname" not in attributes:
                for name, value in author_attributes(attributes["author"]).items():
                    attributes.setdefault(name, value)

            imagesdir = attributes.get("imagesdir", options.imagesdir)
            if imagesdir:
                document = ImagesDirTransformer(imagesdir).transform(document)

            with self._lock:
                html = self.converter.render_to_string(document)

            raw_title = attributes.get("title") or header.title
            rendered_title = self._render_title(raw_title, attributes) if raw_title else None
        except All2MdError as e:
            raise ConversionError(f"Conversion failed: {e}", original_error=e) from e

        separator = attributes.get("title-separator") or DEFAULT_TITLE_SEPARATOR
        return ConvertedDocument(
            html=html,
            title=DocumentTitle.partition(rendered_title, separator),
            attributes=MappingProxyType(attributes),
        )
