#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/session.py
"""Build session: the host services the page transform relies on.

A :class:`BuildSession` provides node identities, content digests, content
loading, node registration and fatal error reporting, and owns the state
shared by every document of one build: the empty attribute names, the
normalized options cache and the conversion engines. Hosts with their own
services can subclass it and override the relevant methods.
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from asciidoc_pages.attributes import EmptyAttributeNames
from asciidoc_pages.engine import AsciidocEngine
from asciidoc_pages.exceptions import BuildError
from asciidoc_pages.models import DocumentRecord, SourceNode
from asciidoc_pages.normalize import OptionsCache
from asciidoc_pages.options import PluginOptions

logger = logging.getLogger(__name__)

NODE_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "asciidoc-pages")


class Reporter:
    """Report build problems.

    Parameters
    ----------
    raise_on_panic : bool, default True
        Raise :class:`BuildError` from :meth:`panic_on_build`. When false the
        message is only recorded in :attr:`errors`, letting a host carry on
        with the remaining documents.

    """

    def __init__(self, raise_on_panic: bool = True):
        self.raise_on_panic = raise_on_panic
        self.errors: list[str] = []

    def panic_on_build(self, message: str) -> None:
        """Report a fatal build error."""
        logger.error(message)
        self.errors.append(message)
        if self.raise_on_panic:
            raise BuildError(message)


@dataclass(frozen=True)
class ParentChildLink:
    parent: str
    child: str


def create_content_digest(data: Any) -> str:
    """Return the md5 hex digest of ``data``.

    Strings are hashed as-is; anything else is hashed through its canonical
    JSON form (sorted keys, non-JSON values such as dates as strings).
    """
    if isinstance(data, str):
        payload = data
    else:
        payload = json.dumps(data, sort_keys=True, default=str, ensure_ascii=False, separators=(",", ":"))
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


@dataclass
class BuildSession:
    """In-memory host for one build run.

    Parameters
    ----------
    path_prefix : str, default ""
        Base path the site is served from
    reporter : Reporter, optional
        Destination of fatal build reports

    """

    path_prefix: str = ""
    reporter: Reporter = field(default_factory=Reporter)
    empty_attribute_names: EmptyAttributeNames = field(default_factory=EmptyAttributeNames)
    options_cache: OptionsCache = field(default_factory=OptionsCache)
    nodes: dict[str, DocumentRecord] = field(default_factory=dict)
    links: list[ParentChildLink] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._engines: dict[Any, AsciidocEngine] = {}
        self._lock = threading.Lock()

    def __enter__(self) -> "BuildSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def create_node_id(self, seed: str) -> str:
        """Return a deterministic identity for ``seed``."""
        return str(uuid.uuid5(NODE_ID_NAMESPACE, seed))

    def create_content_digest(self, data: Any) -> str:
        return create_content_digest(data)

    def load_node_content(self, node: SourceNode) -> str:
        """Return the raw text of ``node``."""
        if node.content is not None:
            return node.content
        if node.absolute_path is None:
            raise BuildError(f"Node {node.id} has neither content nor a path")
        return Path(node.absolute_path).read_text(encoding="utf-8")

    def create_node(self, record: DocumentRecord) -> None:
        with self._lock:
            self.nodes[record.id] = record
        logger.debug("Created node %s (parent %s)", record.id, record.parent)

    def create_parent_child_link(self, parent: SourceNode, child: DocumentRecord) -> None:
        with self._lock:
            self.links.append(ParentChildLink(parent=parent.id, child=child.id))

    def engine_for(self, options: PluginOptions) -> AsciidocEngine:
        """Return the session's engine for the options' converter strategy."""
        key = options.converter_factory
        with self._lock:
            engine = self._engines.get(key)
            if engine is None:
                engine = AsciidocEngine(converter_factory=options.converter_factory)
                self._engines[key] = engine
            return engine

    def close(self) -> None:
        """Release the session caches; recorded nodes and names are kept."""
        self.options_cache.clear()
        with self._lock:
            self._engines.clear()
