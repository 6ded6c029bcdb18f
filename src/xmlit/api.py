#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/api.py
"""Public API for building XML documents from XML literals.

An XML literal is XML-like markup held in a Python string. Text content and
attribute values are string literals, ``{...}`` embeds a Python expression
and ``{|doc| ...}`` runs Python code with access to the document being
built. Literals are parsed once and cached; every call then evaluates the
embedded code in the namespace it is given.

Examples
--------
Create a document:

    >>> cat_name = "Tony"
    >>> xml('''
    ...     <?xml version="1.0" ?>
    ...     <zoo name="Lorem Ipsum" openingYear={2000 + 13}>
    ...         <cat>{cat_name}</cat>
    ...         <dog>"Barbara"</dog>
    ...     </zoo>
    ... ''', cat_name=cat_name)
    '<?xml version="1.0" encoding="UTF-8"?><zoo name="Lorem Ipsum" openingYear="2013"><cat>Tony</cat><dog>Barbara</dog></zoo>'

Append to a document from a helper:

    >>> def make_items(doc):
    ...     for s in ["foo", "bar"]:
    ...         xml('doc, <item length={len(s)}>{s}</item>', doc=doc, s=s)
    >>> xml('<?xml version="1.1"?><items>{|doc| make_items(doc)}</items>', make_items=make_items)
    '<?xml version="1.1" encoding="UTF-8"?><items><item length="3">foo</item><item length="3">bar</item></items>'

"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from typing import Any

from xmlit.ast.nodes import MarkupInput
from xmlit.constants import COMPILE_CACHE_SIZE
from xmlit.document import Document
from xmlit.driver import XmlDriver
from xmlit.options import XmlOptions
from xmlit.parsers.markup import MarkupParser

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=COMPILE_CACHE_SIZE)
def _compile_cached(source: str, options: XmlOptions) -> MarkupInput:
    logger.debug("Compiling XML literal (%d characters)", len(source))
    return MarkupParser(options).parse(source)


def compile_markup(source: str, options: XmlOptions | None = None) -> MarkupInput:
    """Parse an XML literal into its markup AST.

    Results are cached per ``(source, options)``; the AST is immutable and
    safe to share.

    Parameters
    ----------
    source : str
        XML literal source
    options : XmlOptions or None, default None
        Parsing options

    Returns
    -------
    MarkupInput
        The parsed literal

    Raises
    ------
    ParsingError
        If the literal is malformed

    """
    return _compile_cached(source, options or XmlOptions())


def render(
    markup: MarkupInput,
    namespace: Mapping[str, Any] | None = None,
    *,
    document: Document | None = None,
    options: XmlOptions | None = None,
) -> Document:
    """Execute a compiled XML literal.

    Parameters
    ----------
    markup : MarkupInput
        Literal compiled with :func:`compile_markup`
    namespace : mapping or None, default None
        Names visible to embedded expressions
    document : Document or None, default None
        Document to append the literal's root element to instead of the one
        named by its buffer expression or a new one
    options : XmlOptions or None, default None
        Rendering options

    Returns
    -------
    Document
        The new document, or the existing one the literal appended to

    """
    return XmlDriver(namespace, options).drive(markup, document)


def xml(
    source: str,
    namespace: Mapping[str, Any] | None = None,
    /,
    *,
    options: XmlOptions | None = None,
    **values: Any,
) -> str | None:
    """Build or extend an XML document from an XML literal.

    Parameters
    ----------
    source : str
        XML literal source
    namespace : mapping or None, default None
        Names visible to embedded expressions, e.g. ``globals()``
    options : XmlOptions or None, default None
        Parsing and rendering options
    **values : Any
        Additional names for embedded expressions; these take precedence
        over ``namespace``

    Returns
    -------
    str or None
        The finished document text when the literal creates a new document,
        None when it appends to an existing one

    Raises
    ------
    ParsingError
        If the literal is malformed
    InvalidNameError
        If an attribute fill supplies an invalid attribute name
    RenderingError
        If the buffer or format expression has the wrong type

    """
    markup = compile_markup(source, options)
    scope: dict[str, Any] = dict(namespace) if namespace is not None else {}
    scope.update(values)

    document = render(markup, scope, options=options)
    if markup.appends:
        return None
    return document.finish()
