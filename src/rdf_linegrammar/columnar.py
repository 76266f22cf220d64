"""
Columnar view of parsed statements for bulk ingestion.

Triple stores load fastest from column-oriented batches. ParsedDocument keeps
the Statement list and exposes it as parallel columns or as a polars
DataFrame with one row per statement.
"""

from dataclasses import dataclass, field
from typing import Dict, List

import polars as pl

from rdf_linegrammar.terms import (
    AbsoluteUri, Literal, Statement, TermKind, term_lexical,
)


@dataclass
class ParsedDocument:
    """Result of parsing a document."""
    statements: List[Statement] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.statements)

    def __iter__(self):
        return iter(self.statements)

    def to_columnar(self) -> Dict[str, list]:
        """
        Extract columnar data for fast insertion.

        Returns:
            Dict of equal-length columns. Term columns hold lexical forms;
            the *_kind columns hold TermKind values. datatype and language
            are empty for non-literal objects.
        """
        columns: Dict[str, list] = {
            "subject": [],
            "subject_kind": [],
            "predicate": [],
            "object": [],
            "object_kind": [],
            "datatype": [],
            "language": [],
        }
        for st in self.statements:
            obj = st.object
            columns["subject"].append(term_lexical(st.subject))
            columns["subject_kind"].append(int(st.subject.kind))
            columns["predicate"].append(st.predicate.value)
            columns["object"].append(term_lexical(obj))
            columns["object_kind"].append(int(obj.kind))
            columns["datatype"].append(obj.datatype if isinstance(obj, Literal) else "")
            columns["language"].append(obj.language if isinstance(obj, Literal) else "")
        return columns

    def to_frame(self) -> pl.DataFrame:
        """Return the statements as a polars DataFrame."""
        columns = self.to_columnar()
        return pl.DataFrame({
            "subject": pl.Series("subject", columns["subject"], dtype=pl.Utf8),
            "subject_kind": pl.Series("subject_kind", columns["subject_kind"], dtype=pl.UInt8),
            "predicate": pl.Series("predicate", columns["predicate"], dtype=pl.Utf8),
            "object": pl.Series("object", columns["object"], dtype=pl.Utf8),
            "object_kind": pl.Series("object_kind", columns["object_kind"], dtype=pl.UInt8),
            "datatype": pl.Series("datatype", columns["datatype"], dtype=pl.Utf8),
            "language": pl.Series("language", columns["language"], dtype=pl.Utf8),
        })

    def subjects(self) -> List[str]:
        """Distinct subject IRIs, in first-seen order."""
        seen = {}
        for st in self.statements:
            if isinstance(st.subject, AbsoluteUri):
                seen.setdefault(st.subject.value, None)
        return list(seen)

    def count_by_kind(self) -> Dict[str, int]:
        """Count objects per TermKind name."""
        counts = {kind.name: 0 for kind in TermKind}
        for st in self.statements:
            counts[st.object.kind.name] += 1
        return counts
