#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/asciidoc_pages/options.py
"""Configuration options for the AsciiDoc page transform.

This module defines the plugin-level options supplied by the host build
configuration and the normalized conversion options handed to the
conversion engine.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from asciidoc_pages.constants import (
    DEFAULT_DEFINES_EMPTY_ATTRIBUTES,
    DEFAULT_FILE_EXTENSIONS,
    IMAGESDIR_ATTRIBUTE,
    SKIP_FRONT_MATTER_ATTRIBUTE,
    SOFT_SET_SUFFIX,
)
from asciidoc_pages.exceptions import ValidationError

if TYPE_CHECKING:
    from asciidoc_pages.engine import AsciidocEngine, Converter

ConverterFactory = Callable[["AsciidocEngine"], "Converter"]

# Host configuration keys mapped to dataclass field names
_OPTION_ALIASES = {
    "fileExtensions": "file_extensions",
    "converterFactory": "converter_factory",
    "definesEmptyAttributes": "defines_empty_attributes",
}


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class PluginOptions(CloneFrozenMixin):
    """Options recognized by the AsciiDoc page transform.

    Parameters
    ----------
    file_extensions : sequence of str or None, default None
        Extensions (without the leading dot) of source files to transform.
        When not a list or tuple, ``("adoc", "asciidoc")`` is used.
    converter_factory : callable or None, default None
        Strategy building a custom HTML converter. It is called once per
        engine with the engine instance and must return an object with a
        ``render_to_string(document) -> str`` method.
    defines_empty_attributes : bool, default True
        Store the empty sentinel for ``page-*`` attributes declared without a
        value instead of decoding them (which would yield ``None``).
    attributes : mapping or None, default None
        AsciiDoc attributes forwarded to the engine after normalization.

    """

    file_extensions: Optional[Sequence[str]] = field(
        default=None,
        metadata={"help": "Source file extensions to transform", "cli_name": "ext"},
    )
    converter_factory: Optional[ConverterFactory] = field(
        default=None,
        metadata={"help": "Factory building a custom HTML converter"},
    )
    defines_empty_attributes: bool = field(
        default=DEFAULT_DEFINES_EMPTY_ATTRIBUTES,
        metadata={"help": "Keep empty page-* attributes as a sentinel", "cli_name": "no-empty-attributes"},
    )
    attributes: Optional[Mapping[str, Any]] = field(
        default=None,
        metadata={"help": "AsciiDoc attributes forwarded to the conversion engine", "cli_name": "attribute"},
    )

    def __post_init__(self) -> None:
        """Validate option types.

        Raises
        ------
        ValidationError
            If any option has an unusable type.

        """
        if isinstance(self.file_extensions, (list, tuple)):
            for extension in self.file_extensions:
                if not isinstance(extension, str):
                    raise ValidationError(
                        f"file_extensions entries must be strings, got {type(extension).__name__}",
                        parameter_name="file_extensions",
                        parameter_value=self.file_extensions,
                    )
        if self.converter_factory is not None and not callable(self.converter_factory):
            raise ValidationError(
                "converter_factory must be callable",
                parameter_name="converter_factory",
                parameter_value=self.converter_factory,
            )
        if not isinstance(self.defines_empty_attributes, bool):
            raise ValidationError(
                f"defines_empty_attributes must be a boolean, got {type(self.defines_empty_attributes).__name__}",
                parameter_name="defines_empty_attributes",
                parameter_value=self.defines_empty_attributes,
            )
        if self.attributes is not None and not isinstance(self.attributes, Mapping):
            raise ValidationError(
                f"attributes must be a mapping, got {type(self.attributes).__name__}",
                parameter_name="attributes",
                parameter_value=self.attributes,
            )

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        """Return the configured extensions, or the defaults."""
        if isinstance(self.file_extensions, (list, tuple)):
            return tuple(self.file_extensions)
        return DEFAULT_FILE_EXTENSIONS

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "PluginOptions":
        """Build options from a host configuration mapping.

        Both the host's camelCase keys (``fileExtensions``) and the field
        names (``file_extensions``) are accepted.

        Raises
        ------
        ValidationError
            If the mapping contains keys that are not plugin options.

        """
        if mapping is None:
            return cls()

        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValidationError(f"Unknown plugin option: {key}", parameter_name=key, parameter_value=value)
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class ConversionOptions:
    """Normalized options ready for the conversion engine.

    Parameters
    ----------
    attributes : dict
        AsciiDoc attributes. String values ending in ``@`` are soft-set and
        may be redefined by the document; ``True`` sets an attribute with an
        empty value and ``False``/``None`` unsets it.

    """

    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def imagesdir(self) -> str:
        """Return the image directory without its soft-set marker."""
        value = str(self.attributes.get(IMAGESDIR_ATTRIBUTE) or "")
        return value[: -len(SOFT_SET_SUFFIX)] if value.endswith(SOFT_SET_SUFFIX) else value

    @property
    def skip_front_matter(self) -> bool:
        """Whether a leading front matter block is hidden from the engine."""
        value = self.attributes.get(SKIP_FRONT_MATTER_ATTRIBUTE)
        return value is not None and value is not False

    def iter_engine_attributes(self) -> Iterator[tuple[str, Optional[str], bool]]:
        """Yield ``(name, value, soft)`` triples as the engine understands them.

        A ``None`` value means the attribute is unset.
        """
        for name, raw in self.attributes.items():
            if raw is None or raw is False:
                yield name, None, False
            elif raw is True:
                yield name, "", False
            else:
                value = str(raw)
                soft = value.endswith(SOFT_SET_SUFFIX)
                if soft:
                    value = value[: -len(SOFT_SET_SUFFIX)]
                yield name, value, soft
