"""Unit tests for the markup driver."""

import pytest

from xmlit import Document, Format, Version
from xmlit.driver import XmlDriver
from xmlit.exceptions import InvalidNameError, RenderingError
from xmlit.options import XmlOptions
from xmlit.parsers.markup import MarkupParser

PROLOG = '<?xml version="1.0"?>'
TERSE_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>'


def drive(source: str, namespace=None, options: XmlOptions | None = None) -> Document:
    markup = MarkupParser(options).parse(source)
    return XmlDriver(namespace, options).drive(markup)


@pytest.mark.unit
class TestNewDocuments:
    """Tests for literals that create a document."""

    def test_literal_values(self) -> None:
        """Literal attributes and text are written as given."""
        doc = drive(PROLOG + '<a x="1">"hi"</a>')
        assert doc.finish() == TERSE_PROLOG + '<a x="1">hi</a>'

    def test_embedded_expressions(self) -> None:
        """Expressions are evaluated in the namespace."""
        doc = drive(PROLOG + "<a n={n * 2}>{name.upper()}</a>", {"n": 21, "name": "fox"})
        assert doc.finish() == TERSE_PROLOG + '<a n="42">FOX</a>'

    def test_prolog_values(self) -> None:
        """Version and standalone come from the prolog."""
        doc = drive('<?xml version="1.1" encoding="UTF-8" standalone="no"?><a/>')
        assert doc.finish() == '<?xml version="1.1" encoding="UTF-8" standalone="no"?><a/>'

    def test_attribute_fill(self) -> None:
        """Fill attributes write every pair in place."""
        doc = drive(PROLOG + '<a first="1" {..extra} last="2"/>', {"extra": [("m", "x"), ("n", "y")]})
        assert doc.finish() == TERSE_PROLOG + '<a first="1" m="x" n="y" last="2"/>'

    def test_attribute_fill_invalid_name(self) -> None:
        """Invalid runtime names surface as validation errors."""
        with pytest.raises(InvalidNameError):
            drive(PROLOG + "<a {..extra}/>", {"extra": [("a b", "x")]})

    def test_embedded_exceptions_propagate(self) -> None:
        """Errors raised by embedded code are not wrapped."""
        with pytest.raises(ZeroDivisionError):
            drive(PROLOG + "<a>{1 / 0}</a>")

    def test_namespace_is_not_mutated(self) -> None:
        """The driver evaluates in a copy of the namespace."""
        namespace = {"x": 1}
        drive(PROLOG + "<a>{x}</a>", namespace)
        assert namespace == {"x": 1}


@pytest.mark.unit
class TestFormatSelection:
    """Tests for format resolution."""

    def test_terse_by_default(self) -> None:
        """No directive and no option means terse output."""
        assert drive(PROLOG + "<a/>").format == Format.terse()

    def test_options_indentation(self) -> None:
        """The options supply a default indentation."""
        doc = drive(PROLOG + "<a/>", options=XmlOptions(indentation="    "))
        assert doc.format == Format.pretty("    ")

    def test_indentation_directive_wins(self) -> None:
        """A directive overrides the options."""
        doc = drive('#[indentation = "\\t"]' + PROLOG + "<a/>", options=XmlOptions(indentation="  "))
        assert doc.format == Format.pretty("\t")

    def test_format_expression(self) -> None:
        """#[format = expr] evaluates to a Format."""
        doc = drive("#[format = fmt]" + PROLOG + '<a>"x"</a>', {"fmt": Format.pretty()})
        assert doc.finish() == TERSE_PROLOG + "\n<a>\n  x\n</a>\n"

    def test_format_expression_wrong_type(self) -> None:
        """Anything but a Format is rejected."""
        with pytest.raises(RenderingError, match="expected Format") as exc_info:
            drive("#[format = 2]" + PROLOG + "<a/>")
        assert exc_info.value.rendering_stage == "format"


@pytest.mark.unit
class TestAppending:
    """Tests for literals that extend an existing document."""

    def test_append_to_open_element(self, terse_doc) -> None:
        """The root element is written into the given document."""
        terse_doc.open_tag("items")
        terse_doc.close_start_tag()
        result = drive("doc, <item>{s}</item>", {"doc": terse_doc, "s": "foo"})
        assert result is terse_doc
        assert terse_doc.depth == 1
        terse_doc.end_tag("items")
        assert terse_doc.finish() == TERSE_PROLOG + "<items><item>foo</item></items>"

    def test_prolog_is_ignored_when_appending(self, terse_doc) -> None:
        """A prolog after the buffer expression writes nothing."""
        terse_doc.open_tag("r")
        terse_doc.close_start_tag()
        drive('doc, <?xml version="1.1" encoding="UTF-8" standalone="no"?><a/>', {"doc": terse_doc})
        terse_doc.end_tag("r")
        assert terse_doc.finish() == TERSE_PROLOG + "<r><a/></r>"

    def test_explicit_document(self, pretty_doc) -> None:
        """A document passed to drive() receives the root element."""
        markup = MarkupParser().parse('#[indentation = "\\t"]' + PROLOG + '<a>"x"</a>')
        result = XmlDriver().drive(markup, pretty_doc)
        assert result is pretty_doc
        assert pretty_doc.finish() == TERSE_PROLOG + "\n<a>\n  x\n</a>\n"

    def test_explicit_document_wins_over_buffer(self, terse_doc) -> None:
        """The buffer expression is not evaluated when a document is given."""
        markup = MarkupParser().parse("missing, <a/>")
        XmlDriver().drive(markup, terse_doc)
        assert terse_doc.finish() == TERSE_PROLOG + "<a/>"

    def test_buffer_wrong_type(self) -> None:
        """The buffer expression must produce a Document."""
        with pytest.raises(RenderingError, match="expected Document") as exc_info:
            drive("out, <item/>", {"out": []})
        assert exc_info.value.rendering_stage == "buffer"


@pytest.mark.unit
class TestContinuations:
    """Tests for {|doc| ...} children."""

    def test_body_receives_document(self) -> None:
        """The body can call emitter methods directly."""
        doc = drive(PROLOG + "<a>{|d| d.text('direct')}</a>")
        assert doc.finish() == TERSE_PROLOG + "<a>direct</a>"

    def test_body_statements(self) -> None:
        """Bodies may hold statements."""
        source = PROLOG + """<list>{|d|
            for n in range(3):
                d.open_tag("n")
                d.close_start_tag()
                d.text(n)
                d.end_tag("n")
        }</list>"""
        doc = drive(source)
        assert doc.finish() == TERSE_PROLOG + "<list><n>0</n><n>1</n><n>2</n></list>"

    def test_block_opened_on_first_line(self) -> None:
        """A for loop may start right after |d|."""
        source = PROLOG + """<list>{|d| for x in xs:
                d.text(x)
        }</list>"""
        doc = drive(source, {"xs": ["a", "b"]})
        assert doc.finish() == TERSE_PROLOG + "<list>ab</list>"

    def test_body_assignments_stay_local(self) -> None:
        """Names bound in a body do not leak into later expressions."""
        with pytest.raises(NameError):
            drive(PROLOG + "<a>{|d| leaked = 1} {leaked}</a>")

    def test_unbalanced_body(self) -> None:
        """A body must close the tags it opens."""
        source = PROLOG + "<a>{|d| d.open_tag('b'); d.close_start_tag()}</a>"
        with pytest.raises(AssertionError, match="unbalanced"):
            drive(source)

    def test_nested_append(self) -> None:
        """Helpers may append with a buffer expression."""

        def helper(doc):
            for s in ["foo", "bar"]:
                drive("doc, <item length={len(s)}>{s}</item>", {"doc": doc, "s": s})

        doc = drive(PROLOG + "<items>{|doc| helper(doc)}</items>", {"helper": helper})
        assert doc.finish() == TERSE_PROLOG + '<items><item length="3">foo</item><item length="3">bar</item></items>'

    def test_version_is_kept(self) -> None:
        """Documents created from 1.1 prologs report their version."""
        doc = drive('<?xml version="1.1"?><a/>')
        assert doc.version == Version.V1_1
