#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/utils/escape.py
"""XML text escaping.

The escaping writer never builds an escaped copy of its input. It scans the
source text for the next character that needs escaping, appends the verbatim
run before it and the matching entity straight to the output sink, and
continues after the match.

"""

from __future__ import annotations

import re
from typing import Callable

from xmlit.constants import XML_ATTRIBUTE_ENTITIES, XML_TEXT_ENTITIES

_TEXT_PATTERN = re.compile("[<>&]")
_ATTRIBUTE_PATTERN = re.compile('[<>&"]')


def escape_into(write: Callable[[str], object], text: str, escape_quote: bool) -> None:
    """Write ``text`` to ``write`` with XML special characters replaced by entities.

    Parameters
    ----------
    write : callable
        Sink receiving the output in pieces, e.g. ``list.append``
    text : str
        Text to escape
    escape_quote : bool
        Also escape ``"``. Attribute values are always quoted with ``"``, so
        ``'`` never needs escaping.

    Examples
    --------
        >>> parts = []
        >>> escape_into(parts.append, 'a < "b"', escape_quote=True)
        >>> "".join(parts)
        'a &lt; &quot;b&quot;'

    """
    pattern = _ATTRIBUTE_PATTERN if escape_quote else _TEXT_PATTERN
    entities = XML_ATTRIBUTE_ENTITIES if escape_quote else XML_TEXT_ENTITIES

    pos = 0
    for match in pattern.finditer(text):
        start = match.start()
        if start > pos:
            write(text[pos:start])
        write(entities[match.group()])
        pos = start + 1

    if pos == 0:
        # Nothing to escape
        if text:
            write(text)
    elif pos < len(text):
        write(text[pos:])


def escape_text(text: str) -> str:
    """Escape ``<``, ``>`` and ``&`` for use as element content.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Escaped text

    """
    parts: list[str] = []
    escape_into(parts.append, text, escape_quote=False)
    return "".join(parts)


def escape_attribute(text: str) -> str:
    """Escape text for use inside a double-quoted attribute value."""
    parts: list[str] = []
    escape_into(parts.append, text, escape_quote=True)
    return "".join(parts)
