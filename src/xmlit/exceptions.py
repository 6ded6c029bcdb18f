#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the xmlit library.

This module defines the exception classes raised while compiling and
rendering XML literals.

Exception Hierarchy
-------------------
- XmlitError (base exception)

  - ParsingError (XML literal could not be parsed)
    - UnexpectedEndOfInput (token sequence ended too early)
    - EndTagMismatchError (end tag name differs from start tag name)
    - PrologError (invalid XML prolog)

  - ValidationError (invalid runtime data or options)
    - InvalidNameError (runtime-supplied attribute name is not an XML Name)

  - RenderingError (embedded expressions produced unusable values)

Violations of the document emitter's internal invariants (unbalanced tags,
invalid names coming from the parser) are programming errors and surface as
``AssertionError`` rather than as one of the classes above.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from xmlit.lexer import Span


class XmlitError(Exception):
    """Base exception class for all xmlit-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ParsingError(XmlitError):
    """Exception raised when an XML literal cannot be parsed.

    Parsing stops at the first error; no partial AST is ever returned.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    span : Span, optional
        Location in the XML literal where the error was detected
    parsing_stage : str, optional
        The stage of parsing where the error occurred (e.g. "lexing", "prolog")
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    Attributes
    ----------
    span : Span or None
        Where in the source the error occurred
    parsing_stage : str or None
        Where in the parsing process the error occurred

    """

    def __init__(
        self,
        message: str,
        span: Span | None = None,
        parsing_stage: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.span = span
        self.parsing_stage = parsing_stage

    def __str__(self) -> str:
        """Return the message prefixed with the source location, if known."""
        if self.span is None:
            return self.message
        return f"{self.span.line}:{self.span.column}: {self.message}"


class UnexpectedEndOfInput(ParsingError):
    """Exception raised when the token sequence ends while more input is expected."""

    def __init__(self, span: Span | None = None):
        """Initialize the end-of-input error."""
        super().__init__("unexpected end of input", span=span)


class EndTagMismatchError(ParsingError):
    """Exception raised when an end tag does not repeat the start tag's name.

    Parameters
    ----------
    expected : str
        Name of the start tag being closed
    found : str
        Name given in the end tag
    span : Span, optional
        Location of the end tag's ``<``

    """

    def __init__(self, expected: str, found: str, span: Span | None = None):
        """Initialize the mismatch error."""
        super().__init__(
            f"end tag does not match start tag: expected '{expected}', found '{found}'",
            span=span,
            parsing_stage="element",
        )
        self.expected = expected
        self.found = found


class PrologError(ParsingError):
    """Exception raised for an invalid XML prolog (order, version, encoding, standalone)."""

    def __init__(self, message: str, span: Span | None = None):
        """Initialize the prolog error."""
        super().__init__(message, span=span, parsing_stage="prolog")


class ValidationError(XmlitError):
    """Exception raised for invalid runtime values or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
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


class InvalidNameError(ValidationError):
    """Exception raised when runtime data supplies an invalid XML attribute name.

    This is raised by attribute-fill expressions, whose names are only known
    when the document is built. The offending attribute has already been
    written to the document when the error is raised.

    Parameters
    ----------
    name : str
        The rejected name

    """

    def __init__(self, name: str):
        """Initialize the invalid name error."""
        super().__init__(f"'{name}' is not a valid XML name", parameter_name="name", parameter_value=name)
        self.name = name


class RenderingError(XmlitError):
    """Exception raised when driving a parsed XML literal into a document fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage
