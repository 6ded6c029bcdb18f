#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/xmlit/options.py
"""Configuration options for compiling and rendering XML literals.

Options are immutable; use ``create_updated()`` to derive a modified copy.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from xmlit.constants import DEFAULT_ALLOW_CONTINUATIONS, DEFAULT_INDENTATION


def validate_indentation(indentation: str) -> None:
    """Check that an indentation unit is a whitespace-only string.

    Raises
    ------
    ValueError
        If ``indentation`` is not a string or contains non-whitespace
        characters. The empty string is allowed.

    """
    if not isinstance(indentation, str):
        raise ValueError(f"indentation must be a string or None, got {type(indentation).__name__}")
    if indentation and not indentation.isspace():
        raise ValueError(f"indentation must contain only whitespace, got {indentation!r}")


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class XmlOptions(CloneFrozenMixin):
    """Configuration options for XML literal compilation and rendering.

    Parameters
    ----------
    indentation : str or None, default None
        Indentation unit used for pretty output when a literal carries no
        ``#[indentation = ...]`` or ``#[format = ...]`` directive. ``None``
        selects terse output.
    allow_continuations : bool, default True
        Whether ``{|doc| ...}`` children may hand the live document to
        embedded code. When False such children are rejected at parse time.

    Examples
    --------
        >>> options = XmlOptions(indentation="  ")
        >>> xml('<?xml version="1.0"?><a/>', options=options)
        '<?xml version="1.0" encoding="UTF-8"?>\\n<a />\\n'

    """

    indentation: str | None = field(
        default=DEFAULT_INDENTATION,
        metadata={
            "help": "Default indentation unit for pretty output (None for terse output)",
            "importance": "core",
        },
    )
    allow_continuations: bool = field(
        default=DEFAULT_ALLOW_CONTINUATIONS,
        metadata={
            "help": "Allow {|doc| ...} children to run embedded code against the live document",
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If the indentation contains non-whitespace characters.

        """
        if self.indentation is not None:
            validate_indentation(self.indentation)
