#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsing of XML literals into the markup AST."""

from xmlit.parsers.buffer import TokenBuffer
from xmlit.parsers.markup import MarkupParser, compile_embedded
from xmlit.parsers.names import parse_name

__all__ = ["MarkupParser", "TokenBuffer", "compile_embedded", "parse_name"]
