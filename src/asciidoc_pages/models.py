#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/models.py
"""Data model for source nodes and the page nodes built from them.

Records are immutable. :meth:`DocumentRecord.to_dict` produces the node
shape the site builder consumes, with camelCase keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from asciidoc_pages.constants import NODE_MEDIA_TYPE, NODE_TYPE


@dataclass(frozen=True)
class SourceNode:
    """A file node handed to the transform by the host.

    Parameters
    ----------
    id : str
        Host identity of the node
    extension : str
        File extension without the leading dot
    absolute_path : str or None
        Location of the file on disk, when it has one
    content : str or None
        Inline content for nodes that do not live on disk

    """

    id: str
    extension: str
    absolute_path: Optional[str] = None
    content: Optional[str] = None

    @classmethod
    def from_path(cls, path: Path | str, node_id: Optional[str] = None) -> "SourceNode":
        """Build a node for a file on disk."""
        resolved = Path(path).resolve()
        return cls(
            id=node_id or str(resolved),
            extension=resolved.suffix.lstrip("."),
            absolute_path=str(resolved),
        )


@dataclass(frozen=True)
class DocumentTitle:
    """Document title in its combined form and split at the separator."""

    combined: Optional[str] = None
    subtitle: Optional[str] = None
    main: Optional[str] = None

    @classmethod
    def partition(cls, title: Optional[str], separator: str = ":") -> "DocumentTitle":
        """Split ``title`` at the last ``separator`` followed by a space.

        Examples
        --------
        >>> DocumentTitle.partition("Guide: Getting Started")
        DocumentTitle(combined='Guide: Getting Started', subtitle='Getting Started', main='Guide')

        """
        if title is None:
            return cls()
        marker = f"{separator} "
        if marker in title:
            main, _, subtitle = title.rpartition(marker)
            return cls(combined=title, subtitle=subtitle, main=main)
        return cls(combined=title, subtitle=None, main=title)


@dataclass(frozen=True)
class Revision:
    """Revision information declared by a document."""

    date: Optional[str] = None
    number: Optional[str] = None
    remark: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "number": self.number, "remark": self.remark}


@dataclass(frozen=True)
class Author:
    """Primary author declared by a document."""

    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    author_initials: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "fullName": self.full_name,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "middleName": self.middle_name,
            "authorInitials": self.author_initials,
            "email": self.email,
        }


@dataclass(frozen=True)
class NodeInternal:
    """Host bookkeeping fields of a page node."""

    content: str
    type: str = NODE_TYPE
    media_type: str = NODE_MEDIA_TYPE
    content_digest: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "mediaType": self.media_type, "content": self.content}
        if self.content_digest is not None:
            data["contentDigest"] = self.content_digest
        return data


@dataclass(frozen=True)
class DocumentRecord:
    """Page node built from one AsciiDoc source node.

    Parameters
    ----------
    id : str
        Identity derived from the source node identity
    parent : str
        Identity of the source node
    html : str
        Converted HTML body
    title : DocumentTitle
        Document title parts
    description : str or None
        Value of the ``description`` attribute
    revision : Revision or None
        Present only when the document declares revision information
    author : Author or None
        Present only when the document declares an author
    page_attributes : dict
        Decoded ``page-*`` attributes without their prefix
    frontmatter : dict
        Front matter data, parsed independently of the attributes
    internal : NodeInternal
        Media type, raw content and content digest

    """

    id: str
    parent: str
    html: str
    title: DocumentTitle
    internal: NodeInternal
    description: Optional[str] = None
    revision: Optional[Revision] = None
    author: Optional[Author] = None
    page_attributes: dict[str, Any] = field(default_factory=dict)
    frontmatter: dict[str, Any] = field(default_factory=dict)
    children: tuple[str, ...] = ()

    def with_content_digest(self, digest: str) -> "DocumentRecord":
        """Return a copy stamped with ``digest``."""
        return replace(self, internal=replace(self.internal, content_digest=digest))

    def to_dict(self) -> dict[str, Any]:
        """Return the node in the shape registered with the host."""
        return {
            "id": self.id,
            "parent": self.parent,
            "internal": self.internal.to_dict(),
            "children": list(self.children),
            "html": self.html,
            "document": {
                "title": self.title.combined,
                "subtitle": self.title.subtitle,
                "main": self.title.main,
                "description": self.description,
            },
            "revision": self.revision.to_dict() if self.revision is not None else None,
            "author": self.author.to_dict() if self.author is not None else None,
            "pageAttributes": self.page_attributes,
            "frontmatter": self.frontmatter,
        }
