"""
Grammar for line-oriented RDF statements, built with pyparsing.

    statement  ::= sep? subject sep predicate sep object sep? '.'
    subject    ::= IRIREF | BLANK_NODE
    predicate  ::= IRIREF
    object     ::= IRIREF | BLANK_NODE | literal
    literal    ::= '"' value '"' ('@' LANGTAG | '^^' IRIREF)?
    sep        ::= (WHITESPACE | COMMENT)+

Alternatives are ordered and the first match wins. Every position ends in an
error production, so a statement either matches completely or raises
NTriplesSyntaxError at the point where matching stopped; pyparsing never gets
the chance to backtrack into an already committed term.

Whitespace skipping is disabled on every element: separators are explicit
grammar tokens here, not something pyparsing skips implicitly.
"""

import re
from typing import Any, Iterator, Optional, Tuple

import pyparsing as pp
from pyparsing import (
    Regex, Literal as Lit, Empty, StringEnd,
    Opt, OneOrMore,
)

from rdf_linegrammar.errors import ErrorKind, NTriplesSyntaxError
from rdf_linegrammar.terms import AbsoluteUri, NamedNode, Literal, Statement


LINE_TERMINATORS = ("\r\n", "\n", "\u2028", "\u2029")
LINE_TERMINATOR_PATTERN = "|".join(re.escape(t) for t in LINE_TERMINATORS)
LINE_TERMINATOR_RE = re.compile(LINE_TERMINATOR_PATTERN)

IRI_BODY_PATTERN = r"[^<>]*"
IRIREF_PATTERN = rf"<{IRI_BODY_PATTERN}>"
NAME_PATTERN = r"[A-Za-z0-9]+"
LANGUAGE_PATTERN = rf"{NAME_PATTERN}(?:-{NAME_PATTERN})*"
# A lone carriage return is comment text, not a terminator.
COMMENT_PATTERN = rf"#(?:(?!{LINE_TERMINATOR_PATTERN})[\s\S])*(?:{LINE_TERMINATOR_PATTERN}|\Z)"
WHITESPACE_PATTERN = r"[ \t\r\n\u2028\u2029]+"
# A backslash hides the following character from the closing-quote search.
LITERAL_VALUE_PATTERN = r'"(?:[^"\\]|\\[\s\S])*"'
LEGACY_LITERAL_VALUE_PATTERN = r'"[^"]*"'


def is_line_terminator(text: str) -> bool:
    """Check if text is exactly one recognized line terminator."""
    return text in LINE_TERMINATORS


def _strict(expr: pp.ParserElement, name: str) -> pp.ParserElement:
    return expr.leave_whitespace().set_name(name)


def _fail(kind: ErrorKind, expected: str, at_end: Optional[ErrorKind] = None) -> pp.ParserElement:
    """
    Error production: always matches, then raises from its parse action.

    When at_end is given it replaces kind if the input is already exhausted.
    """
    def raise_error(s, loc, toks):
        if at_end is not None and loc >= len(s):
            raise NTriplesSyntaxError(at_end, loc, expected, s)
        raise NTriplesSyntaxError(kind, loc, expected, s)

    return _strict(Empty().set_parse_action(raise_error, call_during_try=True), expected)


def _unrecognized(expected: str) -> pp.ParserElement:
    return _fail(ErrorKind.UNRECOGNIZED_TERM, expected, at_end=ErrorKind.UNEXPECTED_END_OF_INPUT)


class NTriplesGrammar:
    """
    pyparsing grammar for N-Triples style statements.

    Instances hold only parser elements and are never mutated after
    construction, so one grammar can be shared between threads.

    Args:
        legacy_literal_quotes: End literals at the first quote character,
            ignoring backslashes, for compatibility with older parsers
    """

    def __init__(self, legacy_literal_quotes: bool = False):
        self.legacy_literal_quotes = legacy_literal_quotes
        self._build_grammar()

    def _build_grammar(self):
        """Build the pyparsing elements, leaves first."""

        # =================================================================
        # Lexical primitives
        # =================================================================

        self.identifier_body = _strict(Regex(IRI_BODY_PATTERN), "identifier body")

        def make_uri(tokens):
            return AbsoluteUri(tokens[0][1:-1])

        iriref = _strict(Regex(IRIREF_PATTERN), "identifier").set_parse_action(make_uri)

        def raise_unterminated_identifier(s, loc, toks):
            raise NTriplesSyntaxError(ErrorKind.UNTERMINATED_IDENTIFIER, loc, "'>'", s)

        unterminated_iriref = _strict(
            Regex(r"<[^<>]*"), "identifier"
        ).set_parse_action(raise_unterminated_identifier, call_during_try=True)

        self.iriref = _strict(iriref | unterminated_iriref, "identifier")

        self.comment = _strict(Regex(COMMENT_PATTERN).suppress(), "comment")

        self.name = _strict(Regex(NAME_PATTERN), "name")

        def make_named_node(tokens):
            return NamedNode(tokens[0])

        self.blank_node = _strict(
            Lit("_:").suppress()
            + (self.name | _fail(ErrorKind.INVALID_BLANK_NODE, "blank node name")),
            "blank node",
        ).set_parse_action(make_named_node)

        # =================================================================
        # Separators
        # =================================================================

        whitespace = _strict(Regex(WHITESPACE_PATTERN).suppress(), "whitespace")
        self.separator = _strict(OneOrMore(whitespace | self.comment), "separator")

        required_separator = _strict(
            self.separator | _unrecognized("separator"), "separator"
        )

        # =================================================================
        # Literals
        # =================================================================

        value_pattern = LEGACY_LITERAL_VALUE_PATTERN if self.legacy_literal_quotes else LITERAL_VALUE_PATTERN
        literal_value = _strict(Regex(value_pattern), "literal")

        def raise_unterminated_literal(s, loc, toks):
            raise NTriplesSyntaxError(ErrorKind.UNTERMINATED_LITERAL, loc, "closing '\"'", s)

        unterminated_literal = _strict(
            Lit('"'), "literal"
        ).set_parse_action(raise_unterminated_literal, call_during_try=True)

        language = _strict(Regex(LANGUAGE_PATTERN), "language tag")
        language_suffix = Lit("@").suppress() + (language | _unrecognized("language tag"))
        datatype_suffix = Lit("^^").suppress() + (self.iriref | _unrecognized("datatype identifier"))

        def raise_conflicting_suffix(s, loc, toks):
            raise NTriplesSyntaxError(
                ErrorKind.CONFLICTING_LITERAL_SUFFIX, loc, "a single language tag or datatype", s
            )

        second_suffix = (Lit("@") | Lit("^^")).set_parse_action(
            raise_conflicting_suffix, call_during_try=True
        )

        def make_literal(tokens):
            datatype = ""
            language_tag = ""
            for suffix in tokens[1:]:
                if isinstance(suffix, AbsoluteUri):
                    datatype = suffix.value
                else:
                    language_tag = suffix
            return Literal(value=tokens[0][1:-1], datatype=datatype, language=language_tag)

        self.literal = _strict(
            (literal_value | unterminated_literal)
            + Opt((language_suffix | datatype_suffix) + Opt(second_suffix)),
            "literal",
        ).set_parse_action(make_literal)

        # =================================================================
        # Terms
        # =================================================================

        self.subject = _strict(
            self.iriref | self.blank_node | _unrecognized("subject"), "subject"
        )
        self.predicate = _strict(
            self.iriref | _unrecognized("predicate"), "predicate"
        )
        self.object = _strict(
            self.iriref | self.blank_node | self.literal | _unrecognized("object"), "object"
        )

        # =================================================================
        # Statement
        # =================================================================

        def make_statement(tokens):
            return Statement(subject=tokens[0], predicate=tokens[1], object=tokens[2])

        terminator = Lit(".").suppress() | _fail(ErrorKind.MISSING_TERMINATOR, "'.'")

        self.statement = _strict(
            Opt(self.separator)
            + self.subject
            + required_separator
            + self.predicate
            + required_separator
            + self.object
            + Opt(self.separator)
            + terminator,
            "statement",
        ).set_parse_action(make_statement)

        # One statement, or the separators trailing the last one.
        self.document_item = _strict(
            Opt(self.separator) + (StringEnd() | self.statement), "document"
        ).parse_with_tabs()
        self.document_item.streamline()

    def match(self, element: pp.ParserElement, text: str) -> Tuple[Any, int]:
        """
        Match element anchored at the start of text.

        Returns:
            (value, end) where value is the element's single result (None for
            suppressed elements) and end is the offset just past the match

        Raises:
            NTriplesSyntaxError: If the element does not match at offset 0
        """
        anchored = pp.Located(element).leave_whitespace().parse_with_tabs()
        try:
            result = anchored.parse_string(text)
        except pp.ParseException as exc:
            kind = ErrorKind.UNEXPECTED_END_OF_INPUT if exc.loc >= len(text) else ErrorKind.UNRECOGNIZED_TERM
            raise NTriplesSyntaxError(kind, exc.loc, str(element), text) from None
        value = result["value"]
        return (value[0] if len(value) else None), result["locn_end"]

    def scan_statements(self, text: str) -> Iterator[Tuple[Statement, int, int]]:
        """
        Lazily match consecutive statements over the whole of text.

        Yields:
            (statement, start, end) for each statement in order; start
            includes any separators preceding the statement
        """
        for tokens, start, end in self.document_item.scan_string(text):
            if tokens:
                yield tokens[0], start, end


# Built once at import; grammars are read-only afterwards.
_GRAMMARS = {
    False: NTriplesGrammar(legacy_literal_quotes=False),
    True: NTriplesGrammar(legacy_literal_quotes=True),
}


def get_grammar(legacy_literal_quotes: bool = False) -> NTriplesGrammar:
    """Return the shared grammar instance for the given quote handling."""
    return _GRAMMARS[bool(legacy_literal_quotes)]


# =============================================================================
# Anchored entry points for each grammar rule
# =============================================================================

def parse_identifier_body(text: str) -> Tuple[str, int]:
    """Match the maximal run of characters up to the closing delimiter."""
    grammar = get_grammar()
    return grammar.match(grammar.identifier_body, text)


def parse_iriref(text: str) -> Tuple[str, int]:
    """Match `<body>` and return the body."""
    grammar = get_grammar()
    uri, end = grammar.match(grammar.iriref, text)
    return uri.value, end


def parse_comment(text: str) -> int:
    """Match a comment including its line terminator; return its end offset."""
    grammar = get_grammar()
    return grammar.match(grammar.comment, text)[1]


def parse_name(text: str) -> Tuple[str, int]:
    """Match a non-empty run of ASCII letters and digits."""
    grammar = get_grammar()
    return grammar.match(grammar.name, text)


def parse_blank_node(text: str) -> Tuple[str, int]:
    """Match `_:name` and return the name."""
    grammar = get_grammar()
    node, end = grammar.match(grammar.blank_node, text)
    return node.name, end


def parse_separator(text: str) -> int:
    """Match a run of whitespace and comments; return its end offset."""
    grammar = get_grammar()
    return grammar.match(grammar.separator, text)[1]


def parse_subject(text: str) -> Tuple[Any, int]:
    grammar = get_grammar()
    return grammar.match(grammar.subject, text)


def parse_predicate(text: str) -> Tuple[AbsoluteUri, int]:
    grammar = get_grammar()
    return grammar.match(grammar.predicate, text)


def parse_object(text: str, legacy_literal_quotes: bool = False) -> Tuple[Any, int]:
    grammar = get_grammar(legacy_literal_quotes)
    return grammar.match(grammar.object, text)


def parse_literal(text: str, legacy_literal_quotes: bool = False) -> Tuple[Literal, int]:
    grammar = get_grammar(legacy_literal_quotes)
    return grammar.match(grammar.literal, text)


def parse_statement(text: str, legacy_literal_quotes: bool = False) -> Tuple[Statement, int]:
    """
    Match one statement at the start of text.

    Returns:
        (statement, end) where end is the offset just past the terminator
    """
    grammar = get_grammar(legacy_literal_quotes)
    return grammar.match(grammar.statement, text)
