#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/frontmatter.py
"""Front matter splitting for AsciiDoc sources.

A front matter block is a structured metadata block at the very start of a
source file::

    ---
    title: Hello
    tags: [intro]
    ---
    = Document Title

YAML is the default language. ``---toml``/``---json`` select another
language on the opening line, and ``+++`` delimited blocks are read as TOML.
The block is parsed independently of the AsciiDoc document attributes; the
two sources are never reconciled.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from asciidoc_pages.exceptions import FrontMatterError

logger = logging.getLogger(__name__)

YAML_DELIMITER = "---"
TOML_DELIMITER = "+++"

_LANGUAGES = ("yaml", "yml", "toml", "json")


@dataclass(frozen=True)
class FrontMatter:
    """Result of splitting a source into front matter and body.

    Parameters
    ----------
    content : str
        Source text following the front matter block
    data : dict
        Decoded front matter (empty when the source has none)
    language : str or None
        Language of the block, ``None`` when no block was found

    """

    content: str
    data: dict[str, Any] = field(default_factory=dict)
    language: Optional[str] = None


def _opening(first_line: str) -> tuple[str, str] | None:
    """Return ``(closing delimiter, language)`` for an opening line."""
    stripped = first_line.rstrip("\r\n")
    if stripped == TOML_DELIMITER:
        return TOML_DELIMITER, "toml"
    if not stripped.startswith(YAML_DELIMITER):
        return None
    language = stripped[len(YAML_DELIMITER) :].strip().lower()
    if not language:
        return YAML_DELIMITER, "yaml"
    if language in _LANGUAGES:
        return YAML_DELIMITER, "yaml" if language == "yml" else language
    return None


def _decode(text: str, language: str) -> Any:
    if language == "toml":
        return tomllib.loads(text)
    if language == "json":
        return json.loads(text)
    return yaml.safe_load(text)


def split_front_matter(content: str) -> tuple[str, str, str] | None:
    """Locate a leading front matter block without decoding it.

    Returns
    -------
    tuple[str, str, str] or None
        ``(block_text, remaining_content, language)`` or ``None`` when the
        content does not start with a complete block

    """
    lines = content.splitlines(keepends=True)
    if not lines:
        return None

    opening = _opening(lines[0])
    if opening is None:
        return None
    delimiter, language = opening

    for i in range(1, len(lines)):
        if lines[i].rstrip("\r\n").rstrip() == delimiter:
            return "".join(lines[1:i]), "".join(lines[i + 1 :]), language

    return None


def parse_front_matter(content: str) -> FrontMatter:
    """Split ``content`` into its front matter data and remaining body.

    Parameters
    ----------
    content : str
        Full source text

    Returns
    -------
    FrontMatter
        Body text and decoded data; sources without a block are returned
        unchanged with empty data

    Raises
    ------
    FrontMatterError
        If a block is present but cannot be decoded into a mapping

    """
    split = split_front_matter(content)
    if split is None:
        return FrontMatter(content=content)

    block, remaining, language = split
    if not block.strip():
        return FrontMatter(content=remaining, data={}, language=language)

    try:
        data = _decode(block, language)
    except (yaml.YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise FrontMatterError(f"Invalid {language} front matter: {e}", original_error=e) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(f"Front matter must be a mapping, got {type(data).__name__}")

    logger.debug("Parsed %s front matter with keys: %s", language, sorted(data))
    return FrontMatter(content=remaining, data=data, language=language)
