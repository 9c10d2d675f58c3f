#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the asciidoc-pages plugin.

Exception Hierarchy
-------------------
- AsciidocPagesError (base exception)

  - ValidationError (plugin option validation)

  - ConversionError (conversion engine failures)
    - AttributeDecodeError (malformed ``page-*`` attribute values)
    - FrontMatterError (undecodable front matter blocks)

  - BuildError (fatal build report raised by the default reporter)

"""

from typing import Any


class AsciidocPagesError(Exception):
    """Base exception class for all asciidoc-pages errors.

    Parameters
    ----------
    message : str
        What went wrong, suitable for a build report
    original_error : Exception, optional
        Lower-level exception (YAML, engine, I/O) being wrapped

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(AsciidocPagesError):
    """Exception raised for invalid plugin options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid option
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConversionError(AsciidocPagesError):
    """Exception raised when the conversion engine cannot process a document."""


class AttributeDecodeError(ConversionError):
    """Exception raised when a ``page-*`` attribute value is not valid YAML.

    Parameters
    ----------
    attribute_name : str
        Full attribute name, including the ``page-`` prefix
    value : str
        The raw attribute value that failed to decode
    original_error : Exception, optional
        The underlying YAML error

    """

    def __init__(self, attribute_name: str, value: str, original_error: Exception | None = None):
        """Initialize the decode error."""
        message = f"Cannot decode value of attribute '{attribute_name}': {value!r}"
        if original_error is not None:
            message += f" ({original_error})"
        super().__init__(message, original_error=original_error)
        self.attribute_name = attribute_name
        self.value = value


class FrontMatterError(ConversionError):
    """Exception raised when a leading front matter block cannot be decoded."""


class BuildError(AsciidocPagesError):
    """Exception raised when the build is halted by a fatal report."""
