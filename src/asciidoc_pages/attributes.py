#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/attributes.py
"""Extraction of ``page-*`` attributes into typed page fields.

Attributes named ``page-<field>`` become ``<field>`` entries whose values are
decoded as YAML, so ``:page-tags: [a, b]`` yields a list and
``:page-order: 3`` an integer. Attributes declared without a value keep the
empty sentinel and are recorded in the session's
:class:`EmptyAttributeNames` so schema inference can type them as strings.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any, Optional

import yaml

from asciidoc_pages.constants import EMPTY_ATTRIBUTE_VALUE, ENGINE_EMPTY_VALUE, PAGE_ATTRIBUTE_PREFIX
from asciidoc_pages.exceptions import AttributeDecodeError

logger = logging.getLogger(__name__)


class EmptyAttributeNames:
    """Thread-safe, append-only set of page field names declared empty.

    One instance accumulates names across every document of a build
    session; it is never reset per document.
    """

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self._names: set[str] = set(names or ())
        self._lock = threading.Lock()

    def add(self, name: str) -> None:
        """Record ``name``; adding a known name is a no-op."""
        with self._lock:
            self._names.add(name)

    def snapshot(self) -> frozenset[str]:
        """Return an immutable copy of the recorded names."""
        with self._lock:
            return frozenset(self._names)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._names

    def __len__(self) -> int:
        with self._lock:
            return len(self._names)

    def __iter__(self):
        return iter(sorted(self.snapshot()))

    def __repr__(self) -> str:
        return f"EmptyAttributeNames({sorted(self.snapshot())!r})"


def decode_attribute_value(name: str, value: Any) -> Any:
    """Decode an attribute value as YAML.

    Raises
    ------
    AttributeDecodeError
        If the value is not valid YAML.

    """
    if not isinstance(value, str):
        return value
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError as e:
        raise AttributeDecodeError(name, value, original_error=e) from e


def extract_page_attributes(
    all_attributes: Mapping[str, Any],
    defines_empty_attributes: bool = True,
    empty_attribute_names: Optional[EmptyAttributeNames] = None,
) -> dict[str, Any]:
    """Collect ``page-*`` attributes with the prefix stripped.

    Parameters
    ----------
    all_attributes : Mapping[str, Any]
        Every attribute the engine resolved for the document
    defines_empty_attributes : bool, default True
        Keep empty values as :data:`EMPTY_ATTRIBUTE_VALUE` instead of
        decoding them
    empty_attribute_names : EmptyAttributeNames, optional
        Session accumulator receiving the names of empty fields

    Returns
    -------
    dict[str, Any]
        Field name to decoded value (or the empty sentinel)

    Raises
    ------
    AttributeDecodeError
        If any value fails to decode; no partial result is returned.

    """
    page_attributes: dict[str, Any] = {}

    for key, value in all_attributes.items():
        if not key.startswith(PAGE_ATTRIBUTE_PREFIX):
            continue

        field_name = key[len(PAGE_ATTRIBUTE_PREFIX) :]

        if value == ENGINE_EMPTY_VALUE and defines_empty_attributes:
            page_attributes[field_name] = EMPTY_ATTRIBUTE_VALUE
            if empty_attribute_names is not None:
                empty_attribute_names.add(field_name)
        else:
            page_attributes[field_name] = decode_attribute_value(key, value)

    logger.debug("Extracted page attributes: %s", sorted(page_attributes))
    return page_attributes
