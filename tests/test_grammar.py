"""
Tests for the lexical primitives, term parsers and statement assembler.
"""

import pytest

from rdf_linegrammar import (
    AbsoluteUri,
    NamedNode,
    Literal,
    Statement,
    ErrorKind,
    NTriplesSyntaxError,
    parse_iriref,
    parse_blank_node,
    parse_literal,
    parse_subject,
    parse_predicate,
    parse_object,
    parse_statement,
)
from rdf_linegrammar.grammar import (
    parse_identifier_body,
    parse_comment,
    parse_name,
    parse_separator,
    is_line_terminator,
)


XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"
XSD_STRING = "http://www.w3.org/2001/XMLSchema#string"


class TestLexicalPrimitives:
    """Tests for identifiers, comments, names and blank nodes."""

    def test_identifier_body(self):
        assert parse_identifier_body("http://test") == ("http://test", 11)

    def test_identifier_body_stops_at_closing_delimiter(self):
        assert parse_identifier_body("http://a>rest") == ("http://a", 8)

    def test_iriref(self):
        assert parse_iriref("<http://test>") == ("http://test", 13)

    @pytest.mark.parametrize("body", [
        "http://example.org/a",
        "urn:isbn:0451450523",
        "http://example.org/with space",
        "tab\tinside",
        "http://example.org/#frag",
        "",
    ])
    def test_iriref_consumes_exact_span(self, body):
        """Parsing <u> yields u and consumes exactly that span."""
        text = f"<{body}> trailing"
        assert parse_iriref(text) == (body, len(body) + 2)

    def test_unterminated_iriref(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_iriref("<http://test")
        assert exc_info.value.kind == ErrorKind.UNTERMINATED_IDENTIFIER
        assert exc_info.value.position == 0

    def test_iriref_rejects_other_tokens(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_iriref("http://test")
        assert exc_info.value.kind == ErrorKind.UNRECOGNIZED_TERM
        assert exc_info.value.position == 0

    def test_comment(self):
        text = "#test wie das geht \n"
        assert parse_comment(text) == len(text)

    @pytest.mark.parametrize("terminator", ["\r\n", "\n", "\u2028", "\u2029", ""])
    def test_comment_terminators(self, terminator):
        text = "# a comment" + terminator
        assert parse_comment(text) == len(text)

    def test_comment_stops_after_first_line(self):
        assert parse_comment("#one\n#two\n") == 5

    def test_comment_keeps_lone_carriage_return(self):
        assert parse_comment("#a\rb\n") == 5
        assert parse_comment("#a\r") == 3

    def test_separator_with_carriage_return_comment(self):
        assert parse_separator("# old mac\rline\n<a>") == 15

    def test_name(self):
        assert parse_name("Der92Name") == ("Der92Name", 9)

    def test_name_is_maximal_alphanumeric_run(self):
        assert parse_name("abc-def") == ("abc", 3)

    def test_empty_name_fails(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_name("-abc")
        assert exc_info.value.kind == ErrorKind.UNRECOGNIZED_TERM

        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_name("")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_END_OF_INPUT

    def test_blank_node(self):
        assert parse_blank_node("_:name4Node") == ("name4Node", 11)

    @pytest.mark.parametrize("name", ["a", "b0", "Node42", "0abc"])
    def test_blank_node_name(self, name):
        assert parse_blank_node("_:" + name)[0] == name

    def test_blank_node_without_name(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_blank_node("_: x")
        assert exc_info.value.kind == ErrorKind.INVALID_BLANK_NODE
        assert exc_info.value.position == 2

    def test_separator_mixes_whitespace_and_comments(self):
        assert parse_separator("  # c\n\t x") == 8

    def test_line_terminators(self):
        for terminator in ("\r\n", "\n", "\u2028", "\u2029"):
            assert is_line_terminator(terminator)
        assert not is_line_terminator("\r")
        assert not is_line_terminator(" ")


class TestTermParsers:
    """Tests for subject, predicate, object and literal parsing."""

    def test_subject_blank_node(self):
        assert parse_subject("_:name4Node")[0] == NamedNode("name4Node")

    def test_subject_iri(self):
        subject, _ = parse_subject("<http://tv-laufach.de/Mitglieder>")
        assert subject == AbsoluteUri("http://tv-laufach.de/Mitglieder")

    def test_subject_rejects_literal(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_subject('"Hallo"')
        assert exc_info.value.kind == ErrorKind.UNRECOGNIZED_TERM
        assert exc_info.value.expected == "subject"

    def test_predicate(self):
        predicate, _ = parse_predicate("<http://tv-laufach.de/Mitglieder>")
        assert predicate == AbsoluteUri("http://tv-laufach.de/Mitglieder")

    def test_predicate_rejects_blank_node(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_predicate("_:p")
        assert exc_info.value.kind == ErrorKind.UNRECOGNIZED_TERM
        assert exc_info.value.position == 0

    def test_object_variants(self):
        assert parse_object("_:Named")[0] == NamedNode("Named")
        assert parse_object("<http://tv-laufach.de/Mitglieder>")[0] == AbsoluteUri(
            "http://tv-laufach.de/Mitglieder"
        )
        assert parse_object('"Hallo Welt"')[0] == Literal("Hallo Welt", "", "")

    def test_object_language_literal(self):
        obj, _ = parse_object('"That Seventies Show"@en')
        assert obj == Literal(value="That Seventies Show", datatype="", language="en")

    def test_object_typed_literal(self):
        obj, _ = parse_object(f'"That Seventies Show"^^<{XSD_STRING}>')
        assert obj == Literal(value="That Seventies Show", datatype=XSD_STRING, language="")

    def test_literal_plain(self):
        assert parse_literal('"v"') == (Literal("v", "", ""), 3)

    def test_literal_language_subtags(self):
        literal, end = parse_literal('"colour"@en-GB .')
        assert literal.language == "en-GB"
        assert end == 14

    def test_literal_language_then_datatype_conflicts(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_literal('"v"@en^^<http://d>')
        assert exc_info.value.kind == ErrorKind.CONFLICTING_LITERAL_SUFFIX
        assert exc_info.value.position == 6

    def test_literal_datatype_then_language_conflicts(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_literal('"v"^^<http://d>@en')
        assert exc_info.value.kind == ErrorKind.CONFLICTING_LITERAL_SUFFIX
        assert exc_info.value.position == 15

    def test_unterminated_literal(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_literal('"never closed')
        assert exc_info.value.kind == ErrorKind.UNTERMINATED_LITERAL
        assert exc_info.value.position == 0

    def test_literal_escaped_quote_is_kept_raw(self):
        literal, end = parse_literal(r'"say \"hi\""')
        assert literal.value == r'say \"hi\"'
        assert end == 12

    def test_legacy_literal_ends_at_first_quote(self):
        literal, end = parse_literal(r'"a\"b"', legacy_literal_quotes=True)
        assert literal.value == "a\\"
        assert end == 4

    def test_empty_datatype_marker(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_literal('"v"^^x')
        assert exc_info.value.kind == ErrorKind.UNRECOGNIZED_TERM
        assert exc_info.value.expected == "datatype identifier"

    def test_literal_invariant(self):
        with pytest.raises(ValueError):
            Literal(value="v", datatype="http://d", language="en")


class TestStatement:
    """Tests for statement assembly."""

    def test_literal_object(self):
        text = '<http://a> <http://b> "c" .'
        statement, end = parse_statement(text)
        assert statement == Statement(
            AbsoluteUri("http://a"), AbsoluteUri("http://b"), Literal("c", "", "")
        )
        assert end == len(text)

    def test_blank_nodes(self):
        statement, _ = parse_statement("_:s <http://b> _:o .")
        assert statement == Statement(NamedNode("s"), AbsoluteUri("http://b"), NamedNode("o"))

    def test_typed_literal(self):
        statement, _ = parse_statement(f'<http://a> <http://b> "1"^^<{XSD_INTEGER}> .')
        assert statement.object == Literal("1", XSD_INTEGER, "")

    def test_ntriples_examples(self):
        expected = Statement(
            AbsoluteUri("http://www.w3.org/2001/sw/RDFCore/ntriples/"),
            AbsoluteUri("http://purl.org/dc/elements/1.1/creator"),
            Literal(value="Dave Beckett"),
        )
        for text in (
            '<http://www.w3.org/2001/sw/RDFCore/ntriples/> <http://purl.org/dc/elements/1.1/creator> "Dave Beckett" .',
            '<http://www.w3.org/2001/sw/RDFCore/ntriples/>    <http://purl.org/dc/elements/1.1/creator> "Dave Beckett" .',
            '#Das ist ein Kommentar\n <http://www.w3.org/2001/sw/RDFCore/ntriples/>    <http://purl.org/dc/elements/1.1/creator> "Dave Beckett" .',
        ):
            assert parse_statement(text)[0] == expected

    @pytest.mark.parametrize("text", [
        '<http://a> <http://b> "c" .',
        '<http://a>   <http://b>\t\t"c"   .',
        '<http://a>\n<http://b>\n"c"\n.',
        '<http://a> # subject\n<http://b> # predicate\n"c" # object\n.',
        '  \t<http://a> <http://b> "c".',
        '# leading comment\n<http://a> <http://b> "c" .',
    ])
    def test_whitespace_insensitivity(self, text):
        expected = Statement(AbsoluteUri("http://a"), AbsoluteUri("http://b"), Literal("c"))
        assert parse_statement(text)[0] == expected

    def test_idempotent(self):
        text = '_:x <http://b> "v"@de .'
        assert parse_statement(text) == parse_statement(text)

    def test_unterminated_subject(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_statement('<http://a <http://b> "c" .')
        assert exc_info.value.kind == ErrorKind.UNTERMINATED_IDENTIFIER
        assert exc_info.value.position == 0

    def test_missing_terminator(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_statement('<a> <b> "c"')
        assert exc_info.value.kind == ErrorKind.MISSING_TERMINATOR
        assert exc_info.value.position == 11

    def test_missing_terminator_before_next_token(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_statement("<a> <b> <c> <d> .")
        assert exc_info.value.kind == ErrorKind.MISSING_TERMINATOR
        assert exc_info.value.position == 12

    def test_separator_required_between_terms(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_statement('<a><b> "c" .')
        assert exc_info.value.kind == ErrorKind.UNRECOGNIZED_TERM
        assert exc_info.value.position == 3

    def test_blank_node_predicate(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_statement('<a> _:b "c" .')
        assert exc_info.value.kind == ErrorKind.UNRECOGNIZED_TERM
        assert exc_info.value.expected == "predicate"
        assert exc_info.value.position == 4

    def test_input_ends_before_object(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_statement("<a> <b> ")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_END_OF_INPUT
        assert exc_info.value.position == 8

    def test_error_location(self):
        with pytest.raises(NTriplesSyntaxError) as exc_info:
            parse_statement("# header\n<a> <b> _: .")
        error = exc_info.value
        assert error.kind == ErrorKind.INVALID_BLANK_NODE
        assert error.line == 2
        assert error.column == 11
        assert "invalid_blank_node" in str(error)
