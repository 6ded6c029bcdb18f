#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/parsers/markup.py
"""XML literal to markup AST parser.

This module implements the recursive-descent grammar of XML literals:

.. code-block:: text

    input       := directive* [buffer-expr ","] [prolog] "<" element
    directive   := "#" "[" ( "indentation" "=" STRING | "format" "=" expr ) "]"
    prolog      := "<" "?" "xml" ["version" "=" STRING
                   ["encoding" "=" STRING ["standalone" "=" STRING]]] "?" ">"
    element     := name ( attribute | "{" ".." expr "}" )*
                   ( "/" ">" | ">" child* "<" "/" [name] ">" )
    attribute   := name "=" ( STRING | "{" expr "}" )
    child       := STRING | "{" "|" IDENT "|" body "}" | "{" expr "}" | "<" element

Embedded Python code (``expr`` and ``body``) is kept verbatim and compiled
while parsing so syntax errors are reported with their location in the
literal. Parsing stops at the first error.
"""

from __future__ import annotations

import logging
import textwrap
from types import CodeType

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
from xmlit.constants import (
    DIRECTIVE_FORMAT,
    DIRECTIVE_INDENTATION,
    EMBEDDED_CODE_FILENAME,
    STANDALONE_VALUES,
    SUPPORTED_XML_VERSIONS,
    XML_ENCODING,
)
from xmlit.exceptions import EndTagMismatchError, ParsingError, PrologError
from xmlit.lexer import Span, Token, TokenKind, decode_string, tokenize
from xmlit.options import XmlOptions, validate_indentation
from xmlit.parsers.buffer import TokenBuffer
from xmlit.parsers.names import parse_name

logger = logging.getLogger(__name__)


def compile_embedded(source: str, mode: str, span: Span | None) -> CodeType:
    """Compile embedded Python code, reporting syntax errors as parse errors.

    Parameters
    ----------
    source : str
        Expression (``mode="eval"``) or statement (``mode="exec"``) source
    mode : {"eval", "exec"}
        Compilation mode
    span : Span or None
        Location of the code in the literal, used for errors

    Returns
    -------
    CodeType
        The compiled code

    """
    if not source.strip():
        raise ParsingError("empty embedded expression", span=span)
    # Parenthesized so expressions may span lines and end in a comment
    code_source = f"(\n{source}\n)" if mode == "eval" else source
    try:
        return compile(code_source, EMBEDDED_CODE_FILENAME, mode)
    except SyntaxError as e:
        raise ParsingError(f"invalid embedded Python code: {e.msg}", span=span, original_error=e) from e


def dedent_body(source: str) -> str:
    """Dedent the statements of a ``{|doc| ...}`` body.

    Code on the ``|doc|`` line itself starts at column 0. The lines below it
    are dedented by their common margin; when the first line opens a block
    (ends with ``:``) they become that block.

    Examples
    --------
        >>> dedent_body(" for x in xs:\\n        d.text(x)\\n")
        'for x in xs:\\n    d.text(x)'

    """
    first, _, rest = source.partition("\n")
    first = first.strip()
    rest = textwrap.dedent(rest).strip("\n").rstrip()
    if not first or not rest:
        return first or rest
    if first.endswith(":"):
        rest = textwrap.indent(rest, "    ")
    return f"{first}\n{rest}"


class MarkupParser:
    """Parse XML literal source into a :class:`~xmlit.ast.MarkupInput`.

    Parameters
    ----------
    options : XmlOptions or None, default None
        Parsing options

    Examples
    --------
        >>> parser = MarkupParser()
        >>> markup = parser.parse('<?xml version="1.0"?><zoo><cat>"Tony"</cat></zoo>')
        >>> markup.root.children[0].name
        'cat'

    """

    def __init__(self, options: XmlOptions | None = None):
        """Initialize the parser with options."""
        self.options = options or XmlOptions()
        self._source = ""

    def parse(self, source: str) -> MarkupInput:
        """Parse a complete XML literal.

        Parameters
        ----------
        source : str
            XML literal source

        Returns
        -------
        MarkupInput
            The parsed literal

        Raises
        ------
        ParsingError
            On the first syntax error

        """
        return self.parse_tokens(tokenize(source), source)

    def parse_tokens(self, tokens: list[Token], source: str) -> MarkupInput:
        """Parse an already lexed XML literal.

        ``source`` must be the text the tokens were lexed from; it is needed
        to recover top-level embedded expressions verbatim.
        """
        self._source = source
        buf = TokenBuffer(tokens)
        markup = self._parse_input(buf)
        buf.expect_end()
        return markup

    # ----- Top level -----

    def _parse_input(self, buf: TokenBuffer) -> MarkupInput:
        buffer: Expr | None = None
        directive: FormatDirective | None = None

        while True:
            token = buf.current()
            if token.is_punct("#"):
                buf.advance()
                group = buf.expect_group("[")
                parsed = self._parse_directive(group)
                if directive is not None:
                    raise ParsingError("duplicate formatting directive", span=group.span)
                directive = parsed
            elif token.is_punct("<"):
                # The XML portion starts
                break
            else:
                if buffer is not None:
                    raise ParsingError(f"expected '<', found {token.describe()}", span=token.span)
                buffer = self._parse_buffer_expr(buf)

        prolog: Prolog | None = None
        if buf.peek_next().is_punct("?"):
            prolog = self._parse_prolog(buf)

        if buffer is None and prolog is None:
            raise ParsingError(
                "you have to specify either a buffer to write into or an XML prolog", span=buf.current().span
            )
        if buffer is not None and prolog is not None:
            logger.debug("Ignoring XML prolog of a literal appending to an existing document")

        buf.expect_punct("<")
        root = self._parse_element(buf)
        return MarkupInput(root=root, buffer=buffer, format=directive, prolog=prolog)

    def _parse_directive(self, group: Token) -> FormatDirective:
        inner = TokenBuffer.from_group(group)
        key = inner.expect_ident()
        if key.text == DIRECTIVE_INDENTATION:
            inner.expect_punct("=")
            value_span = inner.current().span
            indentation = inner.expect_string_literal()
            try:
                validate_indentation(indentation)
            except ValueError as e:
                raise ParsingError(str(e), span=value_span, original_error=e) from e
            inner.expect_end()
            logger.debug("Indentation directive %r", indentation)
            return FormatDirective(indentation=indentation)
        if key.text == DIRECTIVE_FORMAT:
            inner.expect_punct("=")
            first = inner.current()
            source = group.source_from(first)
            expr = Expr(source, compile_embedded(source, "eval", first.span), first.span)
            logger.debug("Format directive %r", source)
            return FormatDirective(expr=expr)
        raise ParsingError(f"unsupported global attribute '{key.text}'", span=key.span)

    def _parse_buffer_expr(self, buf: TokenBuffer) -> Expr:
        """Collect the tokens up to ``,`` as the expression naming the target document."""
        first = buf.current()
        last = first
        while not buf.current().is_punct(","):
            last = buf.advance()
        buf.advance()  # Eat `,`
        source = self._source[first.span.start : last.span.end]
        return Expr(source, compile_embedded(source, "eval", first.span), first.span)

    def _parse_prolog(self, buf: TokenBuffer) -> Prolog:
        buf.expect_punct("<")
        buf.expect_punct("?")
        ident = buf.expect_ident()
        if ident.text != "xml":
            raise PrologError("expected 'xml'", span=ident.span)

        first_span = buf.current().span

        def parse_attr(name: str) -> tuple[str, Span] | None:
            if buf.current().is_punct("?"):
                return None
            attr = buf.expect_ident()
            if attr.text != name:
                raise PrologError(f"expected '{name}' (prolog attributes have a fixed order)", span=attr.span)
            buf.expect_punct("=")
            value_span = buf.current().span
            return buf.expect_string_literal(), value_span

        version = parse_attr("version")
        if version is None:
            raise PrologError("expected 'version'", span=first_span)
        encoding = parse_attr("encoding")
        standalone = parse_attr("standalone") if encoding is not None else None

        buf.expect_punct("?")
        buf.expect_punct(">")

        if version[0] not in SUPPORTED_XML_VERSIONS:
            raise PrologError(f"invalid version '{version[0]}'", span=version[1])
        if encoding is not None and encoding[0] != XML_ENCODING:
            raise PrologError(f"only encoding '{XML_ENCODING}' is allowed", span=encoding[1])
        if standalone is not None and standalone[0] not in STANDALONE_VALUES:
            raise PrologError(f"standalone must be 'yes' or 'no', not '{standalone[0]}'", span=standalone[1])

        return Prolog(version=version[0], standalone=standalone[0] if standalone else None)

    # ----- Elements -----

    def _parse_element(self, buf: TokenBuffer) -> Element:
        """Parse an element whose ``<`` has already been consumed."""
        name = parse_name(buf)
        attributes: list[AttributeItem] = []

        while True:
            token = buf.current()
            if token.is_punct(">"):
                buf.advance()
                break
            if token.is_punct("/"):
                buf.advance()
                buf.expect_punct(">")
                return Element(name=name, attributes=tuple(attributes), empty=True)
            if token.is_group("{") and _starts_with_fill(token):
                buf.advance()
                attributes.append(AttributeFill(self._fill_expr(token)))
                continue

            attr_name = parse_name(buf)
            buf.expect_punct("=")
            attributes.append(Attribute(attr_name, self._parse_attr_value(buf)))

        children: list[Child] = []
        while not (buf.current().is_punct("<") and buf.peek_next().is_punct("/")):
            children.append(self._parse_child(buf))

        end_span = buf.expect_punct("<").span
        buf.expect_punct("/")
        if not buf.current().is_punct(">"):
            end_name = parse_name(buf)
            if end_name != name:
                raise EndTagMismatchError(name, end_name, span=end_span)
        buf.expect_punct(">")

        return Element(name=name, attributes=tuple(attributes), children=tuple(children), empty=False)

    def _parse_attr_value(self, buf: TokenBuffer) -> AttrValue:
        token = buf.advance()
        if token.kind is TokenKind.STRING:
            return Literal(decode_string(token))
        if token.is_group("{"):
            return self._group_expr(token)
        raise ParsingError(
            f"expected attribute value: string literal or {{...}}, found {token.describe()}", span=token.span
        )

    def _parse_child(self, buf: TokenBuffer) -> Child:
        token = buf.advance()
        if token.kind is TokenKind.STRING:
            return Text(decode_string(token))
        if token.is_group("{"):
            if token.children and token.children[0].is_punct("|"):
                return self._parse_continuation(token)
            return TextExpr(self._group_expr(token))
        if token.is_punct("<"):
            return self._parse_element(buf)
        raise ParsingError(
            f"expected element child: string literal, {{...}} or '<', found {token.describe()}", span=token.span
        )

    def _parse_continuation(self, group: Token) -> Continuation:
        if not self.options.allow_continuations:
            raise ParsingError("{|...| ...} children are disabled by the options", span=group.span)
        inner = TokenBuffer.from_group(group)
        inner.expect_punct("|")
        arg = inner.expect_ident()
        bar = inner.expect_punct("|")
        source = dedent_body(group.source_after(bar)) or "pass"
        code = compile_embedded(source, "exec", group.span)
        return Continuation(arg=arg.text, source=source, code=code, span=group.span)

    # ----- Embedded expressions -----

    def _group_expr(self, group: Token) -> Expr:
        return Expr(group.text, compile_embedded(group.text, "eval", group.span), group.span)

    def _fill_expr(self, group: Token) -> Expr:
        inner = TokenBuffer.from_group(group)
        inner.expect_punct(".")
        inner.expect_punct(".")
        first = inner.current()
        source = group.source_from(first)
        return Expr(source, compile_embedded(source, "eval", first.span), first.span)


def _starts_with_fill(group: Token) -> bool:
    """Return True if a ``{...}`` group starts with ``..``."""
    children = group.children
    return len(children) >= 2 and children[0].is_punct(".") and children[1].is_punct(".")
