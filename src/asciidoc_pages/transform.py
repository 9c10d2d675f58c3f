#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/transform.py
"""Turn AsciiDoc source nodes into page nodes.

:func:`on_create_node` is called by the host for every source node. Nodes
with an unsupported extension are ignored; every other node yields exactly
one :class:`~asciidoc_pages.models.DocumentRecord`, or a fatal build report
naming the offending file when conversion fails.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from asciidoc_pages.attributes import extract_page_attributes
from asciidoc_pages.constants import NODE_ID_SUFFIX
from asciidoc_pages.frontmatter import parse_front_matter
from asciidoc_pages.models import DocumentRecord, NodeInternal, SourceNode
from asciidoc_pages.normalize import process_plugin_options
from asciidoc_pages.options import PluginOptions
from asciidoc_pages.session import BuildSession

logger = logging.getLogger(__name__)


def _describe(node: SourceNode) -> str:
    return f"file {node.absolute_path}" if node.absolute_path else f"in node {node.id}"


def on_create_node(
    node: SourceNode,
    session: BuildSession,
    plugin_options: Union[PluginOptions, Mapping[str, Any], None] = None,
) -> Optional[DocumentRecord]:
    """Create the page node for ``node``.

    Parameters
    ----------
    node : SourceNode
        Source node offered by the host
    session : BuildSession
        Host services and the state shared across the build
    plugin_options : PluginOptions or mapping, optional
        Plugin configuration; mappings may use the host's camelCase keys

    Returns
    -------
    DocumentRecord or None
        The registered record, or ``None`` when the node was skipped or
        its conversion was reported as a fatal error

    """
    options = plugin_options if isinstance(plugin_options, PluginOptions) else PluginOptions.from_mapping(plugin_options)

    if node.extension not in options.supported_extensions:
        logger.debug("Skipping %s: extension %r not in %s", node.id, node.extension, options.supported_extensions)
        return None

    engine = session.engine_for(options)
    conversion_options = process_plugin_options(options, session.path_prefix, session.options_cache)
    content = session.load_node_content(node)

    try:
        document = engine.load(content, conversion_options)

        page_attributes = extract_page_attributes(
            document.attributes, options.defines_empty_attributes, session.empty_attribute_names
        )
        front_matter = parse_front_matter(content)

        record = DocumentRecord(
            id=session.create_node_id(f"{node.id}{NODE_ID_SUFFIX}"),
            parent=node.id,
            html=document.html,
            title=document.title,
            description=document.description,
            revision=document.revision,
            author=document.author,
            page_attributes=page_attributes,
            frontmatter=front_matter.data,
            internal=NodeInternal(content=front_matter.content),
        )
        record = record.with_content_digest(session.create_content_digest(record.to_dict()))

        session.create_node(record)
        session.create_parent_child_link(parent=node, child=record)
    except Exception as err:
        session.reporter.panic_on_build(f"Error processing Asciidoc {_describe(node)}:\n\n{err}")
        return None

    logger.info("Converted %s", node.absolute_path or node.id)
    return record
