#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the xmlit library.

This module centralizes the fixed values used by the lexer, the markup
parser and the document emitter.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. XML Output - Prolog, entity and formatting constants
3. Markup Grammar - Punctuation and directive keys understood by the parser
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

XmlVersionType = Literal["1.0", "1.1"]
StandaloneType = Literal["yes", "no"]
GroupDelimiter = Literal["(", "[", "{"]

# =============================================================================
# XML Output
# =============================================================================

SUPPORTED_XML_VERSIONS: tuple[str, ...] = ("1.0", "1.1")

# Only UTF-8 output is ever produced
XML_ENCODING = "UTF-8"

STANDALONE_VALUES: tuple[str, ...] = ("yes", "no")

# Entity replacements for characters that must not appear raw in output.
# `>` does not strictly need escaping but it is strongly recommended.
XML_TEXT_ENTITIES: dict[str, str] = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
}
XML_ATTRIBUTE_ENTITIES: dict[str, str] = {
    **XML_TEXT_ENTITIES,
    '"': "&quot;",
}

DEFAULT_INDENTATION: str | None = None
DEFAULT_ALLOW_CONTINUATIONS = True

# Upper bound on distinct XML literals kept in the compile cache
COMPILE_CACHE_SIZE = 256

# =============================================================================
# Markup Grammar
# =============================================================================

# Punctuation that may appear inside a name and is lexed as its own token
NAME_PUNCTUATION = frozenset(":-.")

GROUP_CLOSERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}

DIRECTIVE_INDENTATION = "indentation"
DIRECTIVE_FORMAT = "format"

# Filename reported by compile() for embedded Python code
EMBEDDED_CODE_FILENAME = "<xml literal>"
