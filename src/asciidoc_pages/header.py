#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/header.py
"""AsciiDoc document header reading.

The document header is the block at the top of a document made of a
level-0 title line, an optional author line, an optional revision line
(only after an author line) and attribute entries, ending at the first
blank line::

    = Document Title: A Subtitle
    Doc Writer <doc@example.com>
    v1.0, 2019-01-01: First draft
    :page-tags: [intro]

The body parser does not derive metadata from these implicit lines, so they
are read here, turned into the attributes AsciiDoc defines for them, and
removed from the text handed to the parser.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

_TITLE_RE = re.compile(r"^[=#]\s+(\S.*?)\s*$")
_ATTRIBUTE_ENTRY_RE = re.compile(r"^:!?[^:\s]+!?:(?:\s.*)?$")
_AUTHOR_RE = re.compile(r"^(\w[\w\-'.]*)(?: +(\w[\w\-'.]*))?(?: +(\w[\w\-'.]*))?(?: +<([^>]+)>)?$")
_VERSION_LEADER_RE = re.compile(r"^[^\d{]*")


@dataclass
class DocumentHeader:
    """Implicit header metadata of a document.

    Parameters
    ----------
    title : str or None
        Text of the level-0 title line
    attributes : dict
        Attributes derived from the author and revision lines
    body : str
        Source text with the implicit header lines removed

    """

    title: Optional[str] = None
    attributes: dict[str, str] = field(default_factory=dict)
    body: str = ""


def _is_skippable(line: str) -> bool:
    stripped = line.strip()
    return not stripped or (stripped.startswith("//") and not stripped.startswith("////"))


def author_attributes(author_text: str, index: int = 1) -> dict[str, str]:
    """Derive the author attribute family from one author entry.

    ``"Doc Writer <doc@example.com>"`` yields ``author``, ``firstname``,
    ``lastname``, ``authorinitials`` and ``email``. Entries after the first
    get a numeric suffix (``author_2``, ``firstname_2``...).
    """
    suffix = "" if index == 1 else f"_{index}"
    text = " ".join(author_text.split())
    attributes: dict[str, str] = {}

    match = _AUTHOR_RE.match(text)
    if match:
        names = [g.replace("_", " ") for g in match.group(1, 2, 3) if g]
        email = match.group(4)
    else:
        names = [text]
        email = None

    firstname = names[0]
    attributes[f"firstname{suffix}"] = firstname
    if len(names) == 3:
        attributes[f"middlename{suffix}"] = names[1]
        attributes[f"lastname{suffix}"] = names[2]
    elif len(names) == 2:
        attributes[f"lastname{suffix}"] = names[1]

    attributes[f"author{suffix}"] = " ".join(names)
    attributes[f"authorinitials{suffix}"] = "".join(name[0] for name in names if name)
    if email:
        attributes[f"email{suffix}"] = email
    return attributes


def parse_author_line(line: str) -> dict[str, str]:
    """Parse an author line, which may list several authors separated by ``;``."""
    entries = [entry.strip() for entry in line.split(";") if entry.strip()]
    attributes: dict[str, str] = {}
    for index, entry in enumerate(entries, start=1):
        attributes.update(author_attributes(entry, index))
    if entries:
        attributes["authorcount"] = str(len(entries))
        names = [attributes["author"]] + [attributes[f"author_{i}"] for i in range(2, len(entries) + 1)]
        attributes["authors"] = ", ".join(names)
    return attributes


def parse_revision_line(line: str) -> dict[str, str]:
    """Parse a revision line such as ``v1.0, 2019-01-01: First draft``.

    A lone component starting with ``v`` is a version number, otherwise it
    is a date. A remark follows the first colon.
    """
    text = line.strip()
    remark: Optional[str] = None

    colon = text.find(":")
    if colon > 0:
        remark = text[colon + 1 :].strip()
        text = text[:colon].rstrip()
        if text.endswith(","):
            text = text[:-1].rstrip()

    number: Optional[str] = None
    if "," in text:
        raw_number, date = text.split(",", 1)
        number = _VERSION_LEADER_RE.sub("", raw_number, count=1).rstrip()
        date = date.strip()
    else:
        date = text.strip()

    attributes: dict[str, str] = {}
    if number is not None:
        attributes["revnumber"] = number
    if date:
        if number is None and date.startswith("v"):
            attributes["revnumber"] = date[1:]
        else:
            attributes["revdate"] = date
    if remark is not None:
        attributes["revremark"] = remark
    return attributes


def read_header(source: str) -> DocumentHeader:
    """Read the implicit header lines of ``source``.

    Attribute entries are left in place for the body parser to collect;
    only the title, author and revision lines are consumed.
    """
    lines = source.splitlines()
    index = 0

    while index < len(lines) and (_is_skippable(lines[index]) or _ATTRIBUTE_ENTRY_RE.match(lines[index].strip())):
        index += 1

    if index >= len(lines):
        return DocumentHeader(body=source)

    title_match = _TITLE_RE.match(lines[index])
    if not title_match:
        return DocumentHeader(body=source)

    header = DocumentHeader(title=title_match.group(1))
    consumed = {index}
    index += 1

    if index < len(lines) and lines[index].strip() and not _ATTRIBUTE_ENTRY_RE.match(lines[index].strip()):
        header.attributes.update(parse_author_line(lines[index]))
        consumed.add(index)
        index += 1

        if index < len(lines) and lines[index].strip() and not _ATTRIBUTE_ENTRY_RE.match(lines[index].strip()):
            header.attributes.update(parse_revision_line(lines[index]))
            consumed.add(index)

    header.body = "\n".join(line for i, line in enumerate(lines) if i not in consumed)
    return header
