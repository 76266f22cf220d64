"""
rdf-linegrammar: a pyparsing grammar for line-oriented RDF statements.

Parses N-Triples style text (subject, predicate, object, terminator) into
immutable, strongly-typed Statement values.
"""

__version__ = "0.1.0"

from rdf_linegrammar.terms import (
    AbsoluteUri,
    NamedNode,
    Literal,
    Statement,
    Subject,
    Predicate,
    Object,
    TermKind,
)
from rdf_linegrammar.errors import ErrorKind, NTriplesSyntaxError
from rdf_linegrammar.grammar import (
    NTriplesGrammar,
    get_grammar,
    parse_iriref,
    parse_blank_node,
    parse_literal,
    parse_subject,
    parse_predicate,
    parse_object,
    parse_statement,
)
from rdf_linegrammar.parser import (
    NTriplesParser,
    iter_statements,
    parse_ntriples,
    parse_regions,
)
from rdf_linegrammar.config import ParserConfig, ConfigValidationError
from rdf_linegrammar.columnar import ParsedDocument
from rdf_linegrammar.loader import LoadResult, LoadStats, load_statements, load_file

__all__ = [
    # Terms
    "AbsoluteUri",
    "NamedNode",
    "Literal",
    "Statement",
    "Subject",
    "Predicate",
    "Object",
    "TermKind",
    # Errors
    "ErrorKind",
    "NTriplesSyntaxError",
    # Grammar
    "NTriplesGrammar",
    "get_grammar",
    "parse_iriref",
    "parse_blank_node",
    "parse_literal",
    "parse_subject",
    "parse_predicate",
    "parse_object",
    "parse_statement",
    # Document driver
    "NTriplesParser",
    "iter_statements",
    "parse_ntriples",
    "parse_regions",
    # Configuration
    "ParserConfig",
    "ConfigValidationError",
    # Loading
    "ParsedDocument",
    "LoadResult",
    "LoadStats",
    "load_statements",
    "load_file",
]
