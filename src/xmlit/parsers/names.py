#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/parsers/names.py
"""Reconstruction of XML names from split tokens.

XML names may contain ``:``, ``-`` and ``.``, which the lexer emits as
separate punctuation tokens, so ``xmlns:dc`` arrives as three tokens. The
lexer gives no direct signal about whitespace between tokens, but it always
merges adjacent word characters into one token. Two word tokens in a row
can therefore only have been separated by whitespace, which ends the name.
After a punctuation token the next word token is assumed to be adjacent.

This is a best-effort heuristic rather than a complete name grammar:
``<a- b>`` is read as the single name ``a-b``. Names the heuristic cannot
express can be written as a string literal, e.g. ``<"odd.name-">``.
"""

from __future__ import annotations

from xmlit.constants import NAME_PUNCTUATION
from xmlit.exceptions import ParsingError
from xmlit.lexer import TokenKind, decode_string
from xmlit.parsers.buffer import TokenBuffer
from xmlit.utils.names import is_name


def parse_name(buf: TokenBuffer) -> str:
    """Consume the tokens forming one XML name and return the name.

    Parameters
    ----------
    buf : TokenBuffer
        Buffer positioned at the first token of the name

    Returns
    -------
    str
        The validated name

    Raises
    ------
    ParsingError
        If no name starts at the current token or the result is not a valid
        XML name

    """
    first = buf.current()

    if first.kind is TokenKind.STRING:
        buf.advance()
        name = decode_string(first)
        if not is_name(name):
            raise ParsingError(f"'{name}' is not a valid XML name", span=first.span)
        return name

    parts: list[str] = []
    may_consume_word = True
    while not buf.is_at_end():
        token = buf.current()
        if token.kind is TokenKind.IDENT or (token.kind is TokenKind.NUMBER and token.text[:1].isdecimal()):
            if not may_consume_word:
                break
            parts.append(token.text)
            buf.advance()
            may_consume_word = False
        elif token.kind is TokenKind.PUNCT and token.text in NAME_PUNCTUATION:
            parts.append(token.text)
            buf.advance()
            may_consume_word = True
        else:
            break

    if not parts:
        raise ParsingError(f"expected name, found {first.describe()}", span=first.span)

    name = "".join(parts)
    if not is_name(name):
        raise ParsingError(f"'{name}' is not a valid XML name", span=first.span)
    return name
