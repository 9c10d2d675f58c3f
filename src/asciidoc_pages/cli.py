#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/cli.py
"""Command-line interface for building page nodes from AsciiDoc sources.

Examples
--------
Convert a directory and print the nodes::

    $ asciidoc-pages content/

Serve the site from a sub-path and write the nodes to a file::

    $ asciidoc-pages content/ --path-prefix /docs --out nodes.json

Set AsciiDoc attributes (``name!`` unsets, a trailing ``@`` soft-sets)::

    $ asciidoc-pages content/ -a toc -a icons=font@ -a sectanchors!

"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from asciidoc_pages import __version__
from asciidoc_pages.config import discover_config_file, load_config_file
from asciidoc_pages.constants import (
    EXIT_BUILD_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from asciidoc_pages.exceptions import BuildError, ValidationError
from asciidoc_pages.logging_utils import configure_logging
from asciidoc_pages.models import SourceNode
from asciidoc_pages.options import PluginOptions
from asciidoc_pages.schema import infer_page_attribute_types
from asciidoc_pages.session import BuildSession, Reporter
from asciidoc_pages.transform import on_create_node

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="asciidoc-pages",
        description="Convert AsciiDoc sources into page nodes for a static site builder.",
    )
    parser.add_argument("input", nargs="+", help="AsciiDoc files or directories to convert")
    parser.add_argument("--out", "-o", help="Write the nodes as JSON to this file instead of stdout")
    parser.add_argument("--path-prefix", default="", help="Base path the site is served from")
    parser.add_argument("--config", help="Plugin options file (.json, .toml, .yaml or pyproject.toml)")
    parser.add_argument("--no-config", action="store_true", help="Do not look for a configuration file")
    parser.add_argument(
        "--ext",
        action="append",
        dest="file_extensions",
        metavar="EXT",
        help="Source file extension to convert (repeatable, default: adoc, asciidoc)",
    )
    parser.add_argument(
        "--attribute",
        "-a",
        action="append",
        default=[],
        metavar="NAME[=VALUE]",
        help="AsciiDoc attribute passed to the engine (repeatable)",
    )
    parser.add_argument(
        "--no-empty-attributes",
        action="store_true",
        help="Decode empty page-* attributes instead of keeping the empty sentinel",
    )
    parser.add_argument("--converter", metavar="MODULE:FACTORY", help="Custom HTML converter factory")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Report conversion errors and continue with the remaining files",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level DEBUG")
    parser.add_argument("--trace", action="store_true", help="Verbose logging with timestamps and logger names")
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def parse_attribute_argument(argument: str) -> tuple[str, Any]:
    """Parse ``name=value``, ``name`` (set) or ``name!`` (unset).

    Raises
    ------
    argparse.ArgumentTypeError
        If the attribute name is empty

    """
    name, sep, value = argument.partition("=")
    name = name.strip()
    parsed: Any = value if sep else True
    if not sep and name.endswith("!"):
        name, parsed = name[:-1], False
    if not name:
        raise argparse.ArgumentTypeError(f"Invalid attribute: {argument!r}")
    return name, parsed


def load_converter_factory(reference: str) -> Callable[..., Any]:
    """Import a ``module:attribute`` converter factory reference."""
    module_name, sep, attribute = reference.partition(":")
    if not sep or not module_name or not attribute:
        raise argparse.ArgumentTypeError(f"Converter must be given as MODULE:FACTORY, got {reference!r}")
    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attribute)
    except (ImportError, AttributeError) as e:
        raise argparse.ArgumentTypeError(f"Cannot import converter factory {reference!r}: {e}") from e
    if not callable(factory):
        raise argparse.ArgumentTypeError(f"Converter factory {reference!r} is not callable")
    return factory


def build_plugin_options(parsed_args: argparse.Namespace) -> PluginOptions:
    """Merge the configuration file and command-line flags into plugin options."""
    config_path: Optional[Path] = Path(parsed_args.config) if parsed_args.config else None
    if config_path is None and not parsed_args.no_config:
        config_path = discover_config_file()

    config: dict[str, Any] = {}
    if config_path is not None:
        logger.info("Using configuration file %s", config_path)
        config = load_config_file(config_path)

    # Configuration files name the converter factory by import reference
    for key in ("converterFactory", "converter_factory"):
        if isinstance(config.get(key), str):
            config[key] = load_converter_factory(config[key])

    options = PluginOptions.from_mapping(config)

    attributes = dict(options.attributes or {})
    for argument in parsed_args.attribute:
        name, value = parse_attribute_argument(argument)
        attributes[name] = value

    updates: dict[str, Any] = {}
    if attributes or options.attributes is not None:
        updates["attributes"] = attributes
    if parsed_args.file_extensions:
        updates["file_extensions"] = tuple(ext.lstrip(".") for ext in parsed_args.file_extensions)
    if parsed_args.no_empty_attributes:
        updates["defines_empty_attributes"] = False
    if parsed_args.converter:
        updates["converter_factory"] = load_converter_factory(parsed_args.converter)

    return options.create_updated(**updates) if updates else options


def collect_source_nodes(inputs: list[str]) -> list[SourceNode]:
    """Expand files and directories (recursively) into source nodes."""
    nodes: list[SourceNode] = []
    for item in inputs:
        path = Path(item)
        if path.is_dir():
            nodes.extend(SourceNode.from_path(p) for p in sorted(path.rglob("*")) if p.is_file())
        elif path.is_file():
            nodes.append(SourceNode.from_path(path))
        else:
            logger.warning("Skipping missing input: %s", item)
    return nodes


def main(args: list[str] | None = None) -> int:
    """Execute the command-line entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = build_plugin_options(parsed_args)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    nodes = collect_source_nodes(parsed_args.input)
    if not nodes:
        print("Error: No valid input files found", file=sys.stderr)
        return EXIT_FILE_ERROR

    with BuildSession(path_prefix=parsed_args.path_prefix, reporter=Reporter(not parsed_args.keep_going)) as session:
        try:
            for node in nodes:
                on_create_node(node, session, options)
        except BuildError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_BUILD_ERROR

        records = list(session.nodes.values())
        result = {
            "nodes": [record.to_dict() for record in records],
            "emptyAttributeNames": sorted(session.empty_attribute_names.snapshot()),
            "schema": infer_page_attribute_types(records, session.empty_attribute_names),
            "errors": list(session.reporter.errors),
        }

    output = json.dumps(result, indent=2, default=str, ensure_ascii=False)
    if parsed_args.out:
        try:
            Path(parsed_args.out).write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error: Cannot write {parsed_args.out}: {e}", file=sys.stderr)
            return EXIT_ERROR
        logger.info("Wrote %d nodes to %s", len(records), parsed_args.out)
    else:
        print(output)

    return EXIT_BUILD_ERROR if session.reporter.errors else EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
