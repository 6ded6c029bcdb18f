#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markup AST for XML literals.

See :mod:`xmlit.ast.nodes` for the node definitions.
"""

from xmlit.ast.nodes import (
    Attribute,
    AttributeFill,
    AttributeItem,
    AttrValue,
    Child,
    Continuation,
    Element,
    Expr,
    FormatDirective,
    Literal,
    MarkupInput,
    Prolog,
    Text,
    TextExpr,
)

__all__ = [
    "Attribute",
    "AttributeFill",
    "AttributeItem",
    "AttrValue",
    "Child",
    "Continuation",
    "Element",
    "Expr",
    "FormatDirective",
    "Literal",
    "MarkupInput",
    "Prolog",
    "Text",
    "TextExpr",
]
