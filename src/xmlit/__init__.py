"""xmlit - write XML documents as XML literals in Python code.

xmlit parses XML-like markup held in a Python string (an *XML literal*) and
streams it into a correctly escaped, optionally pretty-printed UTF-8 XML
document. No document tree is built: the parsed literal drives an
incremental emitter that writes each tag, attribute and text node as it is
reached.

Key Features
------------
- Prolog, nested elements, attributes and quoted text
- ``{expr}`` embedded Python expressions for attribute values and content
- ``{..pairs}`` attribute fills computed at run time
- ``{|doc| ...}`` continuations handing the live document to helper code
- Terse or pretty output (``#[indentation = "  "]``)
- Parse errors carrying line and column of the offending token

Examples
--------
    >>> from xmlit import xml
    >>> xml('<?xml version="1.0"?><foo/>')
    '<?xml version="1.0" encoding="UTF-8"?><foo/>'

    >>> print(xml('''
    ...     #[indentation = "  "]
    ...     <?xml version="1.0"?>
    ...     <foo>"hi"</foo>
    ... '''), end="")
    <?xml version="1.0" encoding="UTF-8"?>
    <foo>
      hi
    </foo>

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from xmlit.api import compile_markup, render, xml
from xmlit.ast.nodes import MarkupInput
from xmlit.document import Document, Format, Version
from xmlit.exceptions import (
    EndTagMismatchError,
    InvalidNameError,
    ParsingError,
    PrologError,
    RenderingError,
    UnexpectedEndOfInput,
    ValidationError,
    XmlitError,
)
from xmlit.options import XmlOptions
from xmlit.utils.escape import escape_attribute, escape_text
from xmlit.utils.names import is_name

__version__ = "0.1.0"

__all__ = [
    "Document",
    "EndTagMismatchError",
    "Format",
    "InvalidNameError",
    "MarkupInput",
    "ParsingError",
    "PrologError",
    "RenderingError",
    "UnexpectedEndOfInput",
    "ValidationError",
    "Version",
    "XmlOptions",
    "XmlitError",
    "compile_markup",
    "escape_attribute",
    "escape_text",
    "is_name",
    "render",
    "xml",
]
