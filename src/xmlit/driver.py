#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/driver.py
"""Driver executing a markup AST against a :class:`~xmlit.document.Document`.

The driver walks a parsed XML literal and issues the emitter calls the
grammar implies, evaluating embedded Python expressions in a namespace
supplied by the caller. Continuation children run their body with the
document bound to the chosen name, lending the live document to that code
until the body returns. Exceptions raised by embedded code propagate
unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from xmlit.ast.nodes import (
    Attribute,
    AttributeFill,
    Child,
    Continuation,
    Element,
    Expr,
    Literal,
    MarkupInput,
    Text,
    TextExpr,
)
from xmlit.document import Document, Format, Version
from xmlit.exceptions import RenderingError
from xmlit.options import XmlOptions

logger = logging.getLogger(__name__)


class XmlDriver:
    """Issue document emitter calls for a parsed XML literal.

    Parameters
    ----------
    namespace : mapping or None, default None
        Names visible to embedded expressions
    options : XmlOptions or None, default None
        Rendering options; ``indentation`` selects the format of new
        documents whose literal has no formatting directive

    """

    def __init__(self, namespace: Mapping[str, Any] | None = None, options: XmlOptions | None = None):
        """Initialize the driver with an evaluation namespace."""
        self.options = options or XmlOptions()
        self._scope: dict[str, Any] = dict(namespace) if namespace is not None else {}

    def drive(self, markup: MarkupInput, document: Document | None = None) -> Document:
        """Build or extend a document from ``markup``.

        Parameters
        ----------
        markup : MarkupInput
            Parsed XML literal
        document : Document or None, default None
            Document to append the root element to. When given, the
            literal's buffer expression and prolog are not used.

        Returns
        -------
        Document
            The new document, or the existing document appended to

        Raises
        ------
        RenderingError
            If the buffer expression does not evaluate to a Document or the
            format directive does not evaluate to a Format

        """
        if document is not None:
            logger.debug("Appending <%s> to the given document at depth %d", markup.root.name, document.depth)
        elif markup.buffer is not None:
            document = self._eval(markup.buffer)
            if not isinstance(document, Document):
                raise RenderingError(
                    f"buffer expression '{markup.buffer.source.strip()}' evaluated to "
                    f"{type(document).__name__}, expected Document",
                    rendering_stage="buffer",
                )
            logger.debug("Appending <%s> at depth %d", markup.root.name, document.depth)
        else:
            assert markup.prolog is not None
            standalone = None if markup.prolog.standalone is None else markup.prolog.standalone == "yes"
            document = Document(Version(markup.prolog.version), standalone, self._resolve_format(markup))

        self.emit_element(document, markup.root)
        return document

    def emit_element(self, document: Document, element: Element) -> None:
        """Issue the emitter calls for one element and its subtree."""
        document.open_tag(element.name)
        for item in element.attributes:
            if isinstance(item, Attribute):
                value = item.value
                document.attribute(item.name, value.value if isinstance(value, Literal) else self._eval(value))
            elif isinstance(item, AttributeFill):
                document.attribute_batch(self._eval(item.expr))

        if element.empty:
            document.close_empty_tag()
            return

        document.close_start_tag()
        for child in element.children:
            self._emit_child(document, child)
        document.end_tag(element.name)

    # ----- Private -----

    def _emit_child(self, document: Document, child: Child) -> None:
        if isinstance(child, Text):
            document.text(child.value)
        elif isinstance(child, TextExpr):
            document.text(self._eval(child.expr))
        elif isinstance(child, Element):
            self.emit_element(document, child)
        elif isinstance(child, Continuation):
            depth = document.depth
            # Assignments in the body stay local to it
            scope = dict(self._scope)
            scope[child.arg] = document
            exec(child.code, scope)
            assert document.depth == depth, f"continuation '{child.arg}' left unbalanced tags"

    def _resolve_format(self, markup: MarkupInput) -> Format:
        directive = markup.format
        if directive is None:
            indentation = self.options.indentation
            return Format.pretty(indentation) if indentation is not None else Format.terse()
        if directive.indentation is not None:
            return Format.pretty(directive.indentation)

        assert directive.expr is not None
        value = self._eval(directive.expr)
        if not isinstance(value, Format):
            raise RenderingError(
                f"format directive evaluated to {type(value).__name__}, expected Format", rendering_stage="format"
            )
        return value

    def _eval(self, expr: Expr) -> Any:
        return eval(expr.code, self._scope)
