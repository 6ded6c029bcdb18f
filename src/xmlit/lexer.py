#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/lexer.py
"""Lexer turning XML literal source text into classified tokens.

The markup parser does not work on characters. It consumes a flat sequence
of tokens, each one an identifier, a numeric literal, a string literal, a
single punctuation character or a delimited group holding a nested token
sequence. Word characters are always merged greedily into one identifier or
number token, which is what lets the name parser infer that two adjacent
word tokens were separated by whitespace.

Lexing rules
------------
- Whitespace separates tokens and is otherwise ignored.
- ``#`` starts a comment running to the end of the line. Outside of any
  group, a ``#`` followed by ``[`` on the same line (spaces allowed in
  between) is instead the start of a directive.
- Identifiers: a letter or ``_`` followed by word characters.
- Numbers: a digit followed by word characters, optionally followed by one
  ``.`` and a digit-led fraction (``1.0``, ``2000``, ``3px``).
- Strings: Python string literals, single, double or triple quoted, with an
  optional ``r``/``b``/``u``/``f`` prefix.
- ``(``, ``[`` and ``{`` open a group closed by the matching delimiter.
- Any other character is a punctuation token of its own.

"""

from __future__ import annotations

import ast
import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from xmlit.constants import GROUP_CLOSERS, GroupDelimiter
from xmlit.exceptions import ParsingError

logger = logging.getLogger(__name__)


class TokenKind(str, Enum):
    """Lexical class of a token."""

    IDENT = "identifier"
    NUMBER = "numeric literal"
    STRING = "string literal"
    PUNCT = "punctuation"
    GROUP = "delimited group"


@dataclass(frozen=True)
class Span:
    """Location of a token in the XML literal source.

    Parameters
    ----------
    line : int
        1-based line number of the first character
    column : int
        1-based column number of the first character
    start : int
        Offset of the first character
    end : int
        Offset one past the last character

    """

    line: int
    column: int
    start: int
    end: int


@dataclass(frozen=True)
class Token:
    """One lexical unit of an XML literal.

    Parameters
    ----------
    kind : TokenKind
        Lexical class
    text : str
        Source text of the token. For a group this is the raw source between
        the delimiters, exactly as written.
    span : Span
        Source location; for a group it covers both delimiters
    delimiter : str or None
        Opening delimiter of a group
    children : tuple of Token
        Inner tokens of a group

    """

    kind: TokenKind
    text: str
    span: Span
    delimiter: GroupDelimiter | None = None
    children: tuple[Token, ...] = field(default=(), repr=False)

    def is_punct(self, c: str) -> bool:
        """Return True if this token is the punctuation character ``c``."""
        return self.kind is TokenKind.PUNCT and self.text == c

    def is_group(self, delimiter: str) -> bool:
        """Return True if this token is a group opened by ``delimiter``."""
        return self.kind is TokenKind.GROUP and self.delimiter == delimiter

    def source_from(self, child: Token) -> str:
        """Return this group's raw inner source starting at ``child``."""
        assert self.kind is TokenKind.GROUP
        return self.text[child.span.start - self.span.start - 1 :]

    def source_after(self, child: Token) -> str:
        """Return this group's raw inner source following ``child``."""
        assert self.kind is TokenKind.GROUP
        return self.text[child.span.end - self.span.start - 1 :]

    def describe(self) -> str:
        """Short human-readable description for error messages."""
        if self.kind is TokenKind.GROUP:
            return f"'{self.delimiter}...{GROUP_CLOSERS[self.delimiter or '(']}'"
        return f"'{self.text}'"


_STRING = re.compile(
    r"""(?:[rRbBuUfF]{1,2})?
        (?: '''(?:[^\\]|\\.)*?'''
          | \"\"\"(?:[^\\]|\\.)*?\"\"\"
          | '(?:[^'\\\n]|\\.)*'
          | "(?:[^"\\\n]|\\.)*"
        )""",
    re.VERBOSE | re.DOTALL,
)
_STRING_PREFIX = re.compile(r"[rRbBuUfF]*")
_IDENT = re.compile(r"[^\W\d]\w*")
_NUMBER = re.compile(r"\d\w*(?:\.\d\w*)?")
_WHITESPACE = re.compile(r"\s+")
_COMMENT = re.compile(r"#[^\n]*")
_DIRECTIVE_START = re.compile(r"#[ \t]*\[")


class _Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.line_start = 0

    def span(self, start: int, end: int) -> Span:
        return Span(self.line, start - self.line_start + 1, start, end)

    def advance_to(self, end: int) -> None:
        newlines = self.source.count("\n", self.pos, end)
        if newlines:
            self.line += newlines
            self.line_start = self.source.rindex("\n", self.pos, end) + 1
        self.pos = end

    def run(self) -> list[Token]:
        # Each stack entry: (opening token span, delimiter, collected tokens)
        stack: list[tuple[Span, str, list[Token]]] = []
        tokens: list[Token] = []
        source = self.source

        while self.pos < len(source):
            c = source[self.pos]

            m = _WHITESPACE.match(source, self.pos)
            if m:
                self.advance_to(m.end())
                continue

            if c == "#" and (stack or not _DIRECTIVE_START.match(source, self.pos)):
                m = _COMMENT.match(source, self.pos)
                assert m is not None
                self.advance_to(m.end())
                continue

            start = self.pos
            m = _STRING.match(source, start)
            if m:
                token = Token(TokenKind.STRING, m.group(), self.span(start, m.end()))
            elif (m := _IDENT.match(source, start)) is not None:
                token = Token(TokenKind.IDENT, m.group(), self.span(start, m.end()))
            elif (m := _NUMBER.match(source, start)) is not None:
                token = Token(TokenKind.NUMBER, m.group(), self.span(start, m.end()))
            elif c in GROUP_CLOSERS:
                stack.append((self.span(start, start + 1), c, tokens))
                tokens = []
                self.advance_to(start + 1)
                continue
            elif c in GROUP_CLOSERS.values():
                if not stack or GROUP_CLOSERS[stack[-1][1]] != c:
                    raise ParsingError(
                        f"unbalanced delimiter '{c}'", span=self.span(start, start + 1), parsing_stage="lexing"
                    )
                open_span, delimiter, outer = stack.pop()
                group_span = Span(open_span.line, open_span.column, open_span.start, start + 1)
                group = Token(
                    TokenKind.GROUP,
                    source[open_span.start + 1 : start],
                    group_span,
                    delimiter=delimiter,
                    children=tuple(tokens),
                )
                tokens = outer
                tokens.append(group)
                self.advance_to(start + 1)
                continue
            elif c in "'\"":
                raise ParsingError("unterminated string literal", span=self.span(start, start + 1), parsing_stage="lexing")
            else:
                token = Token(TokenKind.PUNCT, c, self.span(start, start + 1))

            tokens.append(token)
            self.advance_to(token.span.end)

        if stack:
            open_span, delimiter, _ = stack[-1]
            raise ParsingError(f"unclosed delimiter '{delimiter}'", span=open_span, parsing_stage="lexing")

        return tokens


def tokenize(source: str) -> list[Token]:
    """Split XML literal source text into tokens.

    Parameters
    ----------
    source : str
        XML literal source

    Returns
    -------
    list of Token
        Top-level tokens; groups hold their inner tokens

    Raises
    ------
    ParsingError
        If delimiters are unbalanced or a string literal is unterminated

    """
    tokens = _Lexer(source).run()
    logger.debug("Lexed %d top-level tokens from %d characters", len(tokens), len(source))
    return tokens


def decode_string(token: Token) -> str:
    """Return the value of a string literal token.

    Raises
    ------
    ParsingError
        If the token is not a plain (non-bytes, non-f-string) string literal

    """
    prefix = _STRING_PREFIX.match(token.text)
    if token.kind is TokenKind.STRING and prefix is not None and "f" not in prefix.group().lower():
        try:
            value = ast.literal_eval(token.text)
        except (SyntaxError, ValueError) as e:
            raise ParsingError("invalid string literal", span=token.span, original_error=e) from e
        if isinstance(value, str):
            return value
    raise ParsingError("expected string literal", span=token.span)
