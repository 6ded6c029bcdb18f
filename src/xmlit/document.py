#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/document.py
"""Incremental XML document emitter.

A :class:`Document` is little more than a growing text buffer. It exposes one
operation per construct of the XML literal grammar (open tag, attribute,
close start tag, close empty tag, end tag, text) and writes the markup for
each call immediately, without building a tree. The markup driver issues
these calls in grammar order; hand-written code may issue the same sequence
directly, typically from a ``{|doc| ...}`` continuation.

Apart from the attribute batch, every operation's preconditions are
guaranteed by a correct parser and driver. Violations are programming errors
and fail with ``AssertionError``.

Examples
--------
    >>> doc = Document(Version.V1_0)
    >>> doc.open_tag("foo")
    >>> doc.attribute("bar", "a < b")
    >>> doc.close_empty_tag()
    >>> doc.finish()
    '<?xml version="1.0" encoding="UTF-8"?><foo bar="a &lt; b"/>'

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from xmlit.constants import XML_ENCODING
from xmlit.exceptions import InvalidNameError
from xmlit.utils.escape import escape_into
from xmlit.utils.names import is_name

logger = logging.getLogger(__name__)


class Version(str, Enum):
    """XML versions that may appear in the prolog."""

    V1_0 = "1.0"
    V1_1 = "1.1"


@dataclass(frozen=True)
class Format:
    """Output format of a document.

    Terse output contains no inserted whitespace. Pretty output puts every
    tag and text node on its own line, indented by ``indentation`` once per
    nesting level.

    Parameters
    ----------
    indentation : str or None, default None
        Indentation unit for pretty output; ``None`` means terse output

    """

    indentation: str | None = None

    @classmethod
    def terse(cls) -> Format:
        """Create the terse format."""
        return cls(None)

    @classmethod
    def pretty(cls, indentation: str = "  ") -> Format:
        """Create a pretty format indenting with ``indentation``."""
        return cls(indentation)

    @property
    def is_pretty(self) -> bool:
        """Whether this format inserts newlines and indentation."""
        return self.indentation is not None


class Document:
    """An XML document, potentially still under construction.

    Parameters
    ----------
    version : Version or str, default Version.V1_0
        XML version written to the prolog
    standalone : bool or None, default None
        Value of the prolog's ``standalone`` declaration; omitted when None
    format : Format or None, default None
        Output format, fixed for the lifetime of the document. Terse if None.

    Attributes
    ----------
    version : Version
        XML version declared in the prolog
    depth : int
        Number of start tags opened and not yet closed
    format : Format
        The document's output format

    """

    def __init__(
        self,
        version: Version | str = Version.V1_0,
        standalone: bool | None = None,
        format: Format | None = None,
    ):
        """Write the XML prolog and start at depth 0."""
        version = Version(version)
        self.version = version
        self.format: Format = format if format is not None else Format.terse()
        self.depth = 0
        self._buf: list[str] = [f'<?xml version="{version.value}" encoding="{XML_ENCODING}"']
        if standalone is not None:
            self._buf.append(f' standalone="{"yes" if standalone else "no"}"')
        self._buf.append("?>")
        logger.debug("Created document (version=%s, standalone=%s, format=%s)", version.value, standalone, self.format)
        self._newline()

    # ----- Output -----

    def as_str(self) -> str:
        """Return the text written so far."""
        return "".join(self._buf)

    def finish(self) -> str:
        """Return the finished document text.

        Only valid once every opened element has been closed.
        """
        assert self.depth == 0, f"document finished with {self.depth} unclosed element(s)"
        return self.as_str()

    into_string = finish

    def __str__(self) -> str:
        """Return the text written so far."""
        return self.as_str()

    def __repr__(self) -> str:
        """Return a short description of the document state."""
        return f"Document(depth={self.depth}, format={self.format!r})"

    # ----- Emitter operations -----

    def open_tag(self, name: str) -> None:
        """Write the beginning of a start tag, ``<name``."""
        assert is_name(name), f"'{name}' is not a valid XML name"
        self._buf.append("<")
        self._buf.append(name)

    def attribute(self, name: str, value: Any) -> None:
        """Write ``name="value"`` inside the currently open start tag.

        ``value`` is converted with ``str()`` and escaped, including ``"``.
        """
        assert is_name(name), f"'{name}' is not a valid XML name"
        self._write_attribute(name, value)

    def attribute_batch(self, pairs: Mapping[Any, Any] | Iterable[tuple[Any, Any]]) -> None:
        """Write every ``(name, value)`` pair of ``pairs`` as an attribute.

        Names come from runtime data, so each one is checked after its
        attribute has been written. Attributes written before an invalid one
        stay in the buffer.

        Parameters
        ----------
        pairs : mapping or iterable of (name, value) pairs
            Attributes in output order; mappings contribute their items

        Raises
        ------
        InvalidNameError
            If a name is not a valid XML name

        """
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        for name, value in items:
            name_index = self._write_attribute(str(name), value)
            written_name = self._buf[name_index]
            if not is_name(written_name):
                raise InvalidNameError(written_name)

    def close_start_tag(self) -> None:
        """Finish a start tag with ``>`` and enter its content."""
        self._buf.append(">")
        self.depth += 1
        self._newline()

    def close_empty_tag(self) -> None:
        """Finish a start tag as an empty-element tag."""
        self._buf.append(" />" if self.format.is_pretty else "/>")
        self._newline()

    def end_tag(self, name: str) -> None:
        """Write ``</name>`` and leave the current element."""
        assert is_name(name), f"'{name}' is not a valid XML name"
        assert self.depth > 0, f"end tag '{name}' without open element"

        indentation = self.format.indentation
        if indentation is not None:
            # The newline after the last child was already indented one
            # level too deep for this end tag.
            last = self._buf[-1]
            assert last.endswith(indentation), "missing indentation before end tag"
            if indentation:
                self._buf[-1] = last[: -len(indentation)]

        self.depth -= 1
        self._buf.append("</")
        self._buf.append(name)
        self._buf.append(">")
        self._newline()

    def text(self, value: Any) -> None:
        """Write ``value`` as escaped element content."""
        escape_into(self._buf.append, str(value), escape_quote=False)
        self._newline()

    # ----- Private -----

    def _write_attribute(self, name: str, value: Any) -> int:
        """Write one attribute and return the buffer index holding its name."""
        self._buf.append(" ")
        self._buf.append(name)
        name_index = len(self._buf) - 1
        self._buf.append('="')
        escape_into(self._buf.append, str(value), escape_quote=True)
        self._buf.append('"')
        return name_index

    def _newline(self) -> None:
        """Append a newline and indentation for the current depth in pretty mode."""
        indentation = self.format.indentation
        if indentation is not None:
            self._buf.append("\n" + indentation * self.depth)
