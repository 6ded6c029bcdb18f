"""Unit tests for reconstructing XML names from split tokens."""

import pytest

from xmlit.exceptions import ParsingError, UnexpectedEndOfInput
from xmlit.parsers.names import parse_name


@pytest.mark.unit
class TestParseName:
    """Tests for parse_name()."""

    def test_simple_name(self, make_buffer) -> None:
        """A single identifier is a name."""
        buf = make_buffer("foo>")
        assert parse_name(buf) == "foo"
        assert buf.current().is_punct(">")

    def test_colon_joins_words(self, make_buffer) -> None:
        """foo:bar arrives as three tokens and forms one name."""
        buf = make_buffer("foo:bar")
        assert parse_name(buf) == "foo:bar"
        assert buf.is_at_end()

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("data-id", "data-id"),
            ("a.b.c", "a.b.c"),
            ("itunes:image", "itunes:image"),
            ("h1.5", "h1.5"),
            ("x-1", "x-1"),
        ],
    )
    def test_punctuation_in_names(self, make_buffer, source, expected) -> None:
        """:, - and . continue a name."""
        assert parse_name(make_buffer(source)) == expected

    def test_adjacent_words_stop_the_name(self, make_buffer) -> None:
        """Two word tokens in a row were separated by whitespace."""
        buf = make_buffer('item length="3"')
        assert parse_name(buf) == "item"
        assert buf.current().text == "length"

    def test_stops_at_other_punctuation(self, make_buffer) -> None:
        """= and / end a name."""
        buf = make_buffer("a:b=")
        assert parse_name(buf) == "a:b"
        assert buf.current().is_punct("=")

    def test_trailing_punctuation_swallows_next_word(self, make_buffer) -> None:
        """After punctuation the next word is assumed adjacent, even across whitespace."""
        assert parse_name(make_buffer("foo- bar")) == "foo-bar"

    def test_string_literal_escape_hatch(self, make_buffer) -> None:
        """A string literal supplies the whole name."""
        buf = make_buffer('"odd.name-" x')
        assert parse_name(buf) == "odd.name-"
        assert buf.current().text == "x"

    def test_invalid_string_literal_name(self, make_buffer) -> None:
        """A string literal name is validated."""
        with pytest.raises(ParsingError, match="'a b' is not a valid XML name"):
            parse_name(make_buffer('"a b"'))

    def test_name_starting_with_digit(self, make_buffer) -> None:
        """Numbers are consumed but cannot start a name."""
        with pytest.raises(ParsingError, match="'1abc' is not a valid XML name"):
            parse_name(make_buffer("1abc"))

    def test_name_starting_with_dash(self, make_buffer) -> None:
        """- is not a name start character."""
        with pytest.raises(ParsingError, match="not a valid XML name"):
            parse_name(make_buffer("-a"))

    def test_expected_name(self, make_buffer) -> None:
        """Nothing consumable is an error at the current token."""
        with pytest.raises(ParsingError, match="expected name, found '>'") as exc_info:
            parse_name(make_buffer(" >"))
        assert exc_info.value.span.column == 2

    def test_end_of_input(self, make_buffer) -> None:
        """An exhausted buffer is an end-of-input error."""
        with pytest.raises(UnexpectedEndOfInput):
            parse_name(make_buffer(""))
