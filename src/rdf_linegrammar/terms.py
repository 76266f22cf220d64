"""
Term and statement types produced by the grammar.

Subjects, predicates and objects are closed unions of small frozen dataclasses:

    Subject   = AbsoluteUri | NamedNode
    Predicate = AbsoluteUri
    Object    = AbsoluteUri | NamedNode | Literal

Values are immutable, compare by value and own their strings, so they stay
valid after the input buffer is released.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class TermKind(IntEnum):
    """RDF term kind, for exhaustive dispatch at consumer sites."""
    IRI = 0
    LITERAL = 1
    BNODE = 2


@dataclass(frozen=True)
class AbsoluteUri:
    """An identifier reference, stored without its angle brackets."""
    value: str
    
    @property
    def kind(self) -> TermKind:
        return TermKind.IRI


@dataclass(frozen=True)
class NamedNode:
    """A blank node, stored as the name following the `_:` prefix."""
    name: str
    
    @property
    def kind(self) -> TermKind:
        return TermKind.BNODE


@dataclass(frozen=True)
class Literal:
    """
    A quoted value with an optional language tag or datatype.
    
    Absent annotations are empty strings. At most one of datatype and
    language may be non-empty.
    """
    value: str
    datatype: str = ""
    language: str = ""
    
    def __post_init__(self):
        if self.datatype and self.language:
            raise ValueError(
                f"Literal cannot carry both datatype <{self.datatype}> "
                f"and language @{self.language}"
            )
    
    @property
    def kind(self) -> TermKind:
        return TermKind.LITERAL


Subject = Union[AbsoluteUri, NamedNode]
Predicate = AbsoluteUri
Object = Union[AbsoluteUri, NamedNode, Literal]


@dataclass(frozen=True)
class Statement:
    """An ordered (subject, predicate, object) triple."""
    subject: Subject
    predicate: Predicate
    object: Object
    
    def as_tuple(self) -> tuple:
        return (self.subject, self.predicate, self.object)


def term_lexical(term: Union[Subject, Object]) -> str:
    """Return the lexical payload of a term (IRI, blank node name or literal value)."""
    if isinstance(term, AbsoluteUri):
        return term.value
    if isinstance(term, NamedNode):
        return term.name
    if isinstance(term, Literal):
        return term.value
    raise TypeError(f"Not a term: {term!r}")
