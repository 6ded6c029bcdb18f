#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/ast/nodes.py
"""Markup AST produced by the XML literal parser.

The AST is the stable interface between parsing an XML literal and
executing it against a :class:`~xmlit.document.Document`. It is a plain
tagged-variant tree: each alternative is a small frozen dataclass and the
unions below (``AttrValue``, ``AttributeItem``, ``Child``) name the allowed
alternatives at each position. Consumers dispatch with ``isinstance``.

Embedded Python code is kept as its source text together with the code
object compiled from it while parsing, so syntax errors surface as parse
errors and the driver only has to evaluate.

Node Overview
-------------
- MarkupInput: buffer expression, format directive, prolog, root element
- Prolog: version and standalone declaration
- Element: name, attributes, children, empty flag
- Attribute values: Literal, Expr
- Attribute items: Attribute, AttributeFill
- Children: Text, TextExpr, Element, Continuation

"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import CodeType
from typing import Optional, Union

from xmlit.constants import StandaloneType, XmlVersionType
from xmlit.lexer import Span


@dataclass(frozen=True)
class Expr:
    """An embedded Python expression.

    Parameters
    ----------
    source : str
        Expression source exactly as written between the braces
    code : CodeType
        The expression compiled in ``eval`` mode
    span : Span or None
        Location of the enclosing ``{...}`` group

    """

    source: str
    code: CodeType = field(repr=False, compare=False)
    span: Optional[Span] = field(default=None, compare=False)


@dataclass(frozen=True)
class Literal:
    """A literal attribute value taken from a string literal."""

    value: str


AttrValue = Union[Literal, Expr]


@dataclass(frozen=True)
class Attribute:
    """A single ``name=value`` attribute."""

    name: str
    value: AttrValue


@dataclass(frozen=True)
class AttributeFill:
    """A ``{..expr}`` attribute fill.

    The expression must evaluate to a mapping or an iterable of
    ``(name, value)`` pairs, written in iteration order.
    """

    expr: Expr


AttributeItem = Union[Attribute, AttributeFill]


@dataclass(frozen=True)
class Text:
    """Literal text content."""

    value: str


@dataclass(frozen=True)
class TextExpr:
    """Text content computed by an embedded expression."""

    expr: Expr


@dataclass(frozen=True)
class Continuation:
    """A ``{|arg| body}`` child handing the live document to embedded code.

    Parameters
    ----------
    arg : str
        Name under which ``body`` sees the document
    source : str
        Body source
    code : CodeType
        The body compiled in ``exec`` mode
    span : Span or None
        Location of the ``{...}`` group

    """

    arg: str
    source: str
    code: CodeType = field(repr=False, compare=False)
    span: Optional[Span] = field(default=None, compare=False)


@dataclass(frozen=True)
class Element:
    """An element with its attributes and children.

    Parameters
    ----------
    name : str
        Element name, a valid XML name
    attributes : tuple of AttributeItem
        Attributes and attribute fills in source order
    children : tuple of Child
        Content in source order; always empty for an empty element
    empty : bool
        Whether the element was written as ``<name ... />``

    """

    name: str
    attributes: tuple[AttributeItem, ...] = ()
    children: tuple[Child, ...] = ()
    empty: bool = False


Child = Union[Text, TextExpr, Element, Continuation]


@dataclass(frozen=True)
class Prolog:
    """The ``<?xml ... ?>`` declaration.

    Parameters
    ----------
    version : str
        ``"1.0"`` or ``"1.1"``
    standalone : str or None
        ``"yes"``, ``"no"`` or None if not declared

    """

    version: XmlVersionType
    standalone: Optional[StandaloneType] = None


@dataclass(frozen=True)
class FormatDirective:
    """A ``#[indentation = "..."]`` or ``#[format = expr]`` directive.

    Exactly one of ``indentation`` and ``expr`` is set.
    """

    indentation: Optional[str] = None
    expr: Optional[Expr] = None


@dataclass(frozen=True)
class MarkupInput:
    """A parsed XML literal.

    Parameters
    ----------
    root : Element
        The root element
    buffer : Expr or None
        Expression naming an existing document to append to. When None, the
        literal creates a new document and ``prolog`` is set.
    format : FormatDirective or None
        Formatting directive for a new document
    prolog : Prolog or None
        The XML prolog; ignored when ``buffer`` is set

    """

    root: Element
    buffer: Optional[Expr] = None
    format: Optional[FormatDirective] = None
    prolog: Optional[Prolog] = None

    @property
    def appends(self) -> bool:
        """Whether this literal appends to an existing document."""
        return self.buffer is not None
