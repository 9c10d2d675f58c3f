#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/schema.py
"""Type hints for the ``pageAttributes`` fields of a build.

Site builders infer a schema from example values. A field declared empty
holds the string sentinel, so every name recorded in
:class:`~asciidoc_pages.attributes.EmptyAttributeNames` is typed ``String``
whatever other documents store in it.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from typing import Any, Optional

from asciidoc_pages.attributes import EmptyAttributeNames
from asciidoc_pages.models import DocumentRecord

STRING = "String"
JSON = "JSON"


def value_type(value: Any) -> Optional[str]:
    """Return the type name of one decoded value, ``None`` when unknown."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, int):
        return "Int"
    if isinstance(value, float):
        return "Float"
    if isinstance(value, str):
        return STRING
    if isinstance(value, (datetime.date, datetime.datetime)):
        return "Date"
    if isinstance(value, list):
        item_types = {value_type(item) for item in value} - {None}
        if not item_types:
            return f"[{STRING}]"
        item_type = merge_types(*item_types)
        return f"[{item_type}]"
    return JSON


def merge_types(*types: str) -> str:
    """Combine the types seen for one field across documents."""
    distinct = set(types)
    if len(distinct) == 1:
        return distinct.pop()
    if distinct == {"Int", "Float"}:
        return "Float"
    return JSON


def infer_page_attribute_types(
    records: Iterable[DocumentRecord],
    empty_attribute_names: Optional[EmptyAttributeNames] = None,
) -> dict[str, str]:
    """Map every page attribute field seen in ``records`` to a type name."""
    empty = empty_attribute_names.snapshot() if empty_attribute_names is not None else frozenset()
    seen: dict[str, list[str]] = {}

    for record in records:
        for name, value in record.page_attributes.items():
            types = seen.setdefault(name, [])
            found = value_type(value)
            if found is not None:
                types.append(found)

    schema: dict[str, str] = {}
    for name in sorted(seen.keys() | empty):
        if name in empty or not seen.get(name):
            schema[name] = STRING
        else:
            schema[name] = merge_types(*seen[name])
    return schema
