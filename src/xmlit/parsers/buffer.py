#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/parsers/buffer.py
"""Lookahead token buffer used by the markup parser.

The grammar needs to see one token beyond the current one (to tell a
closing ``</`` from a child element, and a prolog ``<?`` from the root
element), so the buffer keeps a "current" and a "next" slot refilled from
the underlying token iterator.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from xmlit.exceptions import ParsingError, UnexpectedEndOfInput
from xmlit.lexer import Span, Token, TokenKind, decode_string


class TokenBuffer:
    """Token sequence with one token of lookahead.

    Parameters
    ----------
    tokens : iterable of Token
        Tokens to consume
    span : Span or None, default None
        Span reported by end-of-input errors once the buffer is exhausted,
        usually the span of the group whose inner tokens are being parsed

    """

    def __init__(self, tokens: Iterable[Token], span: Span | None = None):
        """Fill the current and next slots."""
        self._iter: Iterator[Token] = iter(tokens)
        self._span = span
        self._curr: Token | None = next(self._iter, None)
        self._next: Token | None = next(self._iter, None)

    @classmethod
    def from_group(cls, group: Token) -> TokenBuffer:
        """Create a buffer over the inner tokens of a delimited group."""
        return cls(group.children, span=group.span)

    def current(self) -> Token:
        """Return the current token without consuming it.

        Raises
        ------
        UnexpectedEndOfInput
            If no tokens are left

        """
        if self._curr is None:
            raise self.end_of_input_error()
        return self._curr

    def peek_next(self) -> Token:
        """Return the token after the current one without consuming anything."""
        if self._next is None:
            raise self.end_of_input_error()
        return self._next

    def is_at_end(self) -> bool:
        """Return True if every token has been consumed."""
        return self._curr is None

    def advance(self) -> Token:
        """Consume and return the current token."""
        out = self._curr
        self._curr = self._next
        self._next = next(self._iter, None)
        if out is None:
            raise self.end_of_input_error()
        return out

    def expect_punct(self, c: str) -> Token:
        """Consume the punctuation character ``c``."""
        token = self.advance()
        if not token.is_punct(c):
            raise ParsingError(f"expected '{c}', found {token.describe()}", span=token.span)
        return token

    def expect_ident(self) -> Token:
        """Consume an identifier."""
        token = self.advance()
        if token.kind is not TokenKind.IDENT:
            raise ParsingError(f"expected identifier, found {token.describe()}", span=token.span)
        return token

    def expect_string_literal(self) -> str:
        """Consume a string literal and return its decoded value."""
        return decode_string(self.advance())

    def expect_group(self, delimiter: str) -> Token:
        """Consume a group opened by ``delimiter``."""
        token = self.advance()
        if not token.is_group(delimiter):
            raise ParsingError(f"expected '{delimiter}' delimited group, found {token.describe()}", span=token.span)
        return token

    def expect_end(self) -> None:
        """Fail if any tokens are left."""
        if self._curr is not None:
            raise ParsingError(f"unexpected extra token {self._curr.describe()}", span=self._curr.span)

    def end_of_input_error(self) -> UnexpectedEndOfInput:
        """Build the error reported when input runs out."""
        return UnexpectedEndOfInput(self._span)
