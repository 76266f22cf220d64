"""
Parse failures for the line-oriented RDF grammar.

Every failure is structural and non-recoverable within one parse attempt.
The grammar raises NTriplesSyntaxError with the construct it expected and the
character offset where matching stopped; nothing is guessed or substituted.
"""

from enum import Enum
from typing import Optional

import pyparsing as pp


class ErrorKind(Enum):
    """Kinds of grammar failure."""
    UNTERMINATED_IDENTIFIER = "unterminated_identifier"
    INVALID_BLANK_NODE = "invalid_blank_node"
    UNTERMINATED_LITERAL = "unterminated_literal"
    CONFLICTING_LITERAL_SUFFIX = "conflicting_literal_suffix"
    MISSING_TERMINATOR = "missing_terminator"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    UNRECOGNIZED_TERM = "unrecognized_term"


class NTriplesSyntaxError(ValueError):
    """
    Raised when input does not match the grammar.
    
    Attributes:
        kind: The ErrorKind of the failure
        position: Character offset in the input where matching stopped
        expected: Name of the construct that was being matched
        line: 1-based line number of position
        column: 1-based column of position
        region: Index of the input region, when parsed with parse_regions
    """
    
    def __init__(
        self,
        kind: ErrorKind,
        position: int,
        expected: str,
        text: Optional[str] = None,
    ):
        self.kind = kind
        self.position = position
        self.expected = expected
        if text is not None:
            self.line = pp.lineno(position, text)
            self.column = pp.col(position, text)
        else:
            self.line = None
            self.column = None
        self.region = None
        super().__init__(self._format())
    
    def _format(self) -> str:
        where = f"offset {self.position}"
        if self.line is not None:
            where += f" (line {self.line}, column {self.column})"
        return f"{self.kind.value}: expected {self.expected} at {where}"
    
    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "position": self.position,
            "expected": self.expected,
            "line": self.line,
            "column": self.column,
            "region": self.region,
        }
