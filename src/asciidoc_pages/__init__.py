#  Copyright (c) 2025 Tom Villani, Ph.D.
"""asciidoc-pages - AsciiDoc content plugin for static site builders.

Converts AsciiDoc sources into page nodes carrying the HTML body, the
document title, description, revision and author metadata, decoded
``page-*`` attributes and front matter, using all2md as the conversion
engine.

Examples
--------
Convert one file inside a build session:

    >>> from asciidoc_pages import BuildSession, SourceNode, on_create_node
    >>> with BuildSession(path_prefix="/docs") as session:
    ...     record = on_create_node(SourceNode.from_path("intro.adoc"), session)
    >>> record.page_attributes
    {'title': 'Hello'}

"""

from asciidoc_pages.attributes import EmptyAttributeNames, extract_page_attributes
from asciidoc_pages.constants import EMPTY_ATTRIBUTE_VALUE
from asciidoc_pages.engine import AsciidocEngine, ConvertedDocument, Converter
from asciidoc_pages.exceptions import (
    AsciidocPagesError,
    AttributeDecodeError,
    BuildError,
    ConversionError,
    FrontMatterError,
    ValidationError,
)
from asciidoc_pages.frontmatter import FrontMatter, parse_front_matter
from asciidoc_pages.models import Author, DocumentRecord, DocumentTitle, Revision, SourceNode
from asciidoc_pages.normalize import OptionsCache, process_plugin_options, with_path_prefix
from asciidoc_pages.options import ConversionOptions, PluginOptions
from asciidoc_pages.schema import infer_page_attribute_types
from asciidoc_pages.scroll import (
    SCROLL_RESTORATION_SCRIPT,
    get_target_offset,
    on_initial_client_render,
    should_update_scroll,
)
from asciidoc_pages.session import BuildSession, Reporter
from asciidoc_pages.transform import on_create_node

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Transform
    "on_create_node",
    "BuildSession",
    "Reporter",
    # Options
    "PluginOptions",
    "ConversionOptions",
    "OptionsCache",
    "process_plugin_options",
    "with_path_prefix",
    # Attributes
    "EMPTY_ATTRIBUTE_VALUE",
    "EmptyAttributeNames",
    "extract_page_attributes",
    "infer_page_attribute_types",
    # Engine and front matter
    "AsciidocEngine",
    "ConvertedDocument",
    "Converter",
    "FrontMatter",
    "parse_front_matter",
    # Models
    "SourceNode",
    "DocumentRecord",
    "DocumentTitle",
    "Revision",
    "Author",
    # Scroll restoration
    "SCROLL_RESTORATION_SCRIPT",
    "get_target_offset",
    "on_initial_client_render",
    "should_update_scroll",
    # Exceptions
    "AsciidocPagesError",
    "ValidationError",
    "ConversionError",
    "AttributeDecodeError",
    "FrontMatterError",
    "BuildError",
]
