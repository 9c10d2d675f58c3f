#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/normalize.py
"""Derive conversion-engine options from plugin options.

Normalization is pure: identical plugin options and path prefix always
produce identical conversion options, and the caller's objects are never
mutated. Results are memoized in an :class:`OptionsCache` owned by the build
session.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from typing import Any, Callable, Hashable, Optional

from asciidoc_pages.constants import (
    DEFAULT_IMAGESDIR,
    DEFAULT_SKIP_FRONT_MATTER,
    IMAGESDIR_ATTRIBUTE,
    SKIP_FRONT_MATTER_ATTRIBUTE,
)
from asciidoc_pages.options import ConversionOptions, PluginOptions

logger = logging.getLogger(__name__)


def with_path_prefix(path_prefix: str, url: str) -> str:
    """Prepend ``path_prefix`` to ``url`` and collapse the first doubled slash.

    Only the first ``//`` is collapsed, so ``"/a/" + "/b//c"`` becomes
    ``"/a/b//c"``.
    """
    return (path_prefix + url).replace("//", "/", 1)


def _normalize_attributes(attributes: Optional[dict[str, Any]], path_prefix: Optional[str]) -> dict[str, Any]:
    if attributes is None:
        attributes = {}

    attributes[IMAGESDIR_ATTRIBUTE] = with_path_prefix(
        path_prefix or "", attributes.get(IMAGESDIR_ATTRIBUTE) or DEFAULT_IMAGESDIR
    )

    if attributes.get(SKIP_FRONT_MATTER_ATTRIBUTE) is None:
        attributes[SKIP_FRONT_MATTER_ATTRIBUTE] = DEFAULT_SKIP_FRONT_MATTER

    return attributes


def _structural_key(options: PluginOptions, path_prefix: Optional[str]) -> Hashable:
    raw = dict(options.attributes) if options.attributes is not None else None
    attributes = json.dumps(raw, sort_keys=True, default=repr)
    return (
        options.supported_extensions,
        options.defines_empty_attributes,
        options.converter_factory,
        attributes,
        path_prefix or "",
    )


class OptionsCache:
    """Memoize normalized options per structural (options, path prefix) key.

    The first computation for a key happens under a lock so concurrent
    callers never compute the same entry twice. Lookups return deep copies,
    which keeps cached entries unaffected by callers mutating results.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, ConversionOptions] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: Hashable, compute: Callable[[], ConversionOptions]) -> ConversionOptions:
        """Return the cached entry for ``key``, computing it on first use."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                entry = compute()
                self._entries[key] = entry
            else:
                self.hits += 1
        return copy.deepcopy(entry)

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


def process_plugin_options(
    options: PluginOptions,
    path_prefix: Optional[str],
    cache: Optional[OptionsCache] = None,
) -> ConversionOptions:
    """Return the conversion options for ``options`` served under ``path_prefix``.

    Parameters
    ----------
    options : PluginOptions
        Plugin options from the host configuration
    path_prefix : str or None
        Base path the site is served from (``""``/``None`` for the root)
    cache : OptionsCache, optional
        Session cache; when omitted the options are recomputed on every call

    Returns
    -------
    ConversionOptions
        Options with ``imagesdir`` and ``skip-front-matter`` resolved

    """

    def compute() -> ConversionOptions:
        attributes = copy.deepcopy(dict(options.attributes)) if options.attributes is not None else None
        normalized = ConversionOptions(attributes=_normalize_attributes(attributes, path_prefix))
        logger.debug("Normalized conversion attributes for prefix %r: %s", path_prefix, normalized.attributes)
        return normalized

    if cache is None:
        return compute()
    return cache.get_or_compute(_structural_key(options, path_prefix), compute)
