#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for asciidoc-pages.

Constants are organized by category:
1. Plugin Defaults - Options applied when the host configuration is silent
2. Attribute Handling - Prefixes and markers used for ``page-*`` attributes
3. Node Shape - Identifiers and media types of the emitted page nodes
4. CLI - Exit codes and configuration file names
"""

from __future__ import annotations

# =============================================================================
# Plugin Defaults
# =============================================================================

DEFAULT_FILE_EXTENSIONS: tuple[str, ...] = ("adoc", "asciidoc")
DEFAULT_DEFINES_EMPTY_ATTRIBUTES = True

# Trailing "@" marks a soft-set attribute the document is allowed to override
DEFAULT_IMAGESDIR = "/images@"
DEFAULT_SKIP_FRONT_MATTER = True

IMAGESDIR_ATTRIBUTE = "imagesdir"
SKIP_FRONT_MATTER_ATTRIBUTE = "skip-front-matter"
SOFT_SET_SUFFIX = "@"

# =============================================================================
# Attribute Handling
# =============================================================================

PAGE_ATTRIBUTE_PREFIX = "page-"

# Value the engine reports for an attribute declared without content
ENGINE_EMPTY_VALUE = ""

# Sentinel stored in page attributes for intentionally empty values
EMPTY_ATTRIBUTE_VALUE = ""

DEFAULT_TITLE_SEPARATOR = ":"

# =============================================================================
# Node Shape
# =============================================================================

NODE_TYPE = "Asciidoc"
NODE_MEDIA_TYPE = "text/html"
NODE_ID_SUFFIX = " >>> ASCIIDOC"

# =============================================================================
# CLI
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_BUILD_ERROR = 6

CONFIG_FILENAMES = [".asciidoc-pages.toml", ".asciidoc-pages.yaml", ".asciidoc-pages.yml", ".asciidoc-pages.json"]
PYPROJECT_TOOL_SECTION = "asciidoc-pages"
