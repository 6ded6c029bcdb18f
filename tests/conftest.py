"""Pytest configuration and shared fixtures for the xmlit test suite.

This module provides shared fixtures and test configuration used across
the entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from xmlit import Document, Format, Version
from xmlit.lexer import tokenize
from xmlit.parsers.buffer import TokenBuffer

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests")


@pytest.fixture
def terse_doc() -> Document:
    """Provide a fresh terse XML 1.0 document."""
    return Document(Version.V1_0, None, Format.terse())


@pytest.fixture
def pretty_doc() -> Document:
    """Provide a fresh XML 1.0 document pretty-printed with two spaces."""
    return Document(Version.V1_0, None, Format.pretty("  "))


@pytest.fixture
def make_buffer():
    """Provide a factory lexing source text into a TokenBuffer."""

    def _make(source: str) -> TokenBuffer:
        return TokenBuffer(tokenize(source))

    return _make
