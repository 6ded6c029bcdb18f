#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/utils/names.py
"""XML ``Name`` production.

Shared by the markup parser, which validates names while compiling a
literal, and by the document emitter, which re-checks names at run time.
"""

from __future__ import annotations

# (first, last) code point ranges of NameStartChar, XML 1.0 fifth edition
_NAME_START_RANGES: tuple[tuple[int, int], ...] = (
    (ord(":"), ord(":")),
    (ord("A"), ord("Z")),
    (ord("_"), ord("_")),
    (ord("a"), ord("z")),
    (0xC0, 0xD6),
    (0xD8, 0xF6),
    (0xF8, 0x2FF),
    (0x370, 0x37D),
    (0x37F, 0x1FFF),
    (0x200C, 0x200D),
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
)

_NAME_EXTRA_RANGES: tuple[tuple[int, int], ...] = (
    (ord("-"), ord("-")),
    (ord("."), ord(".")),
    (ord("0"), ord("9")),
    (0xB7, 0xB7),
    (0x300, 0x36F),
    (0x203F, 0x2040),
)


def _in_ranges(c: str, ranges: tuple[tuple[int, int], ...]) -> bool:
    cp = ord(c)
    return any(first <= cp <= last for first, last in ranges)


def is_name_start_char(c: str) -> bool:
    """Return True if ``c`` may start an XML name."""
    return _in_ranges(c, _NAME_START_RANGES)


def is_name_char(c: str) -> bool:
    """Return True if ``c`` may appear after the first character of an XML name."""
    return is_name_start_char(c) or _in_ranges(c, _NAME_EXTRA_RANGES)


def is_name(s: str) -> bool:
    """Check whether a string matches the XML ``Name`` production.

    Parameters
    ----------
    s : str
        Candidate element or attribute name

    Returns
    -------
    bool
        True if ``s`` is non-empty, starts with a name-start character and
        continues with name characters only

    Examples
    --------
        >>> is_name("xmlns:dc")
        True
        >>> is_name("1abc")
        False
        >>> is_name("")
        False

    """
    if not s:
        return False
    return is_name_start_char(s[0]) and all(is_name_char(c) for c in s[1:])
