"""
Loading statements from files and streams.

This module sits outside the grammar: it turns a source (text, bytes, a file
path or an open stream) into a buffer, hands it to the document driver and,
when asked to, keeps going past malformed statements by resuming at the next
line. The grammar itself never resynchronises.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from io import IOBase
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from rdf_linegrammar.columnar import ParsedDocument
from rdf_linegrammar.config import ParserConfig
from rdf_linegrammar.errors import NTriplesSyntaxError
from rdf_linegrammar.grammar import LINE_TERMINATOR_RE
from rdf_linegrammar.parser import NTriplesParser

logger = logging.getLogger(__name__)

Source = Union[str, bytes, Path, IOBase]


@dataclass
class SkippedStatement:
    """A malformed statement the loader skipped."""
    line_number: int
    kind: str
    message: str
    line: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line_number": self.line_number,
            "kind": self.kind,
            "message": self.message,
            "line": self.line,
        }


@dataclass
class LoadStats:
    """Counters for one load."""
    total_chars: int = 0
    statements: int = 0
    skipped: List[SkippedStatement] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def statements_per_second(self) -> float:
        if self.elapsed_seconds == 0:
            return 0.0
        return self.statements / self.elapsed_seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_chars": self.total_chars,
            "statements": self.statements,
            "skipped_count": self.skipped_count,
            "skipped": [s.to_dict() for s in self.skipped],
            "elapsed_seconds": self.elapsed_seconds,
            "statements_per_second": self.statements_per_second,
        }


@dataclass
class LoadResult:
    """Statements loaded from a source, with counters."""
    document: ParsedDocument
    stats: LoadStats


def read_source(source: Source, encoding: str = "utf-8") -> str:
    """
    Read a source into text.

    Strings are treated as document content, not paths; pass a Path to read
    a file.
    """
    if isinstance(source, Path):
        return source.read_text(encoding=encoding)
    if isinstance(source, (bytes, bytearray)):
        return bytes(source).decode(encoding)
    if isinstance(source, str):
        return source
    if hasattr(source, "read"):
        data = source.read()
        if isinstance(data, bytes):
            return data.decode(encoding)
        return data
    raise TypeError(f"Unsupported source type: {type(source).__name__}")


def _next_line_start(text: str, position: int) -> int:
    """Offset just past the line terminator at or after position, or len(text)."""
    match = LINE_TERMINATOR_RE.search(text, position)
    return match.end() if match else len(text)


def _line_breaks(text: str, start: int, end: int) -> List[int]:
    """Offsets just past each line terminator inside text[start:end]."""
    return [m.end() for m in LINE_TERMINATOR_RE.finditer(text, start, end)]


def load_statements(
    source: Source,
    config: Optional[ParserConfig] = None,
    skip_invalid: Optional[bool] = None,
) -> LoadResult:
    """
    Load all statements from a source.

    Args:
        source: Document text, bytes, a file Path or a readable stream
        config: Parser configuration
        skip_invalid: Override config.skip_invalid. When true, a malformed
            statement is logged and recorded, and parsing resumes at the
            start of the following line.

    Returns:
        LoadResult with the parsed document and load counters

    Raises:
        NTriplesSyntaxError: On the first malformed statement unless skipping
    """
    config = config or ParserConfig()
    if skip_invalid is None:
        skip_invalid = config.skip_invalid

    parser = NTriplesParser(config)
    text = read_source(source, config.encoding)
    stats = LoadStats(total_chars=len(text))
    statements = []
    started = time.perf_counter()

    offset = 0
    line_offset = 0
    while True:
        try:
            for statement in parser.iter_statements(text[offset:] if offset else text):
                statements.append(statement)
            break
        except NTriplesSyntaxError as e:
            if not skip_invalid:
                raise
            failed_at = offset + e.position
            breaks = _line_breaks(text, offset, failed_at)
            line_number = line_offset + len(breaks) + 1
            line_start = breaks[-1] if breaks else offset
            resume = _next_line_start(text, failed_at)
            stats.skipped.append(SkippedStatement(
                line_number=line_number,
                kind=e.kind.value,
                message=str(e),
                line=text[line_start:resume].rstrip("\r\n\u2028\u2029"),
            ))
            logger.warning(f"Skipping malformed statement on line {line_number}: {e}")
            line_offset = line_number + len(_line_breaks(text, failed_at, resume)) - 1
            offset = resume
            if offset >= len(text):
                break

    stats.statements = len(statements)
    stats.elapsed_seconds = time.perf_counter() - started
    logger.info(
        f"Loaded {stats.statements} statements ({stats.skipped_count} skipped) "
        f"in {stats.elapsed_seconds:.3f}s"
    )
    return LoadResult(document=ParsedDocument(statements=statements), stats=stats)


def load_file(path: Union[str, Path], config: Optional[ParserConfig] = None) -> LoadResult:
    """Load statements from a file path."""
    return load_statements(Path(path), config)
