"""
Document driver for line-oriented RDF statements.

Applies the statement grammar repeatedly over a buffer until the input is
exhausted (clean stop) or a statement fails (error stop). Statements are
produced lazily; the first failure is raised as NTriplesSyntaxError and
nothing after it is parsed. There is no resynchronisation here; callers that
want to skip malformed statements wrap the driver (see loader.py).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Optional, Union

from rdf_linegrammar.columnar import ParsedDocument
from rdf_linegrammar.config import ParserConfig
from rdf_linegrammar.errors import NTriplesSyntaxError
from rdf_linegrammar.grammar import get_grammar
from rdf_linegrammar.terms import Statement

logger = logging.getLogger(__name__)


class NTriplesParser:
    """
    Parser for documents of N-Triples style statements.

    Format:
        <subject> <predicate> <object> .
        _:b1 <predicate> "literal"@en .
        # comments and blank lines may appear between statements

    The parser holds only its configuration, so one instance can be used
    from several threads at once.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig()
        self._grammar = get_grammar(self.config.legacy_literal_quotes)

    def decode(self, source: Union[str, bytes]) -> str:
        """Return source as text, decoding bytes with the configured encoding."""
        if isinstance(source, (bytes, bytearray, memoryview)):
            return bytes(source).decode(self.config.encoding)
        return source

    def iter_statements(self, source: Union[str, bytes]) -> Iterator[Statement]:
        """
        Lazily parse statements from a complete buffer.

        Args:
            source: Document text, or bytes in the configured encoding

        Yields:
            Statement objects in input order

        Raises:
            NTriplesSyntaxError: At the first statement that does not match
        """
        text = self.decode(source)
        count = 0
        for statement, _start, _end in self._grammar.scan_statements(text):
            count += 1
            yield statement
        logger.debug(f"Parsed {count} statements from {len(text)} characters")

    def parse(self, source: Union[str, bytes]) -> ParsedDocument:
        """
        Parse a complete buffer.

        Returns:
            ParsedDocument with all statements
        """
        return ParsedDocument(statements=list(self.iter_statements(source)))

    def parse_regions(
        self,
        regions: Iterable[Union[str, bytes]],
        max_workers: Optional[int] = None,
    ) -> List[List[Statement]]:
        """
        Parse independent regions concurrently.

        Each region must start and end on statement boundaries; the grammar
        does not resume partial statements across regions.

        Args:
            regions: Buffers to parse, each a sequence of whole statements
            max_workers: Thread count (defaults to config.max_workers)

        Returns:
            One statement list per region, in input order

        Raises:
            NTriplesSyntaxError: The failure of the lowest-numbered failing
                region, with its region attribute set
        """
        regions = list(regions)
        workers = max_workers or self.config.max_workers

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(lambda region: list(self.iter_statements(region)), region)
                for region in regions
            ]
            results = []
            for index, future in enumerate(futures):
                try:
                    results.append(future.result())
                except NTriplesSyntaxError as e:
                    e.region = index
                    logger.debug(f"Region {index} failed: {e}")
                    raise

        logger.debug(f"Parsed {len(regions)} regions with {workers} workers")
        return results


def iter_statements(
    source: Union[str, bytes],
    config: Optional[ParserConfig] = None,
) -> Iterator[Statement]:
    """
    Lazily parse statements from a buffer.

    Args:
        source: Document text or bytes
        config: Optional parser configuration

    Yields:
        Statement objects
    """
    return NTriplesParser(config).iter_statements(source)


def parse_ntriples(
    source: Union[str, bytes],
    config: Optional[ParserConfig] = None,
) -> ParsedDocument:
    """
    Parse a complete buffer of statements.

    Args:
        source: Document text or bytes
        config: Optional parser configuration

    Returns:
        ParsedDocument with statements
    """
    return NTriplesParser(config).parse(source)


def parse_regions(
    regions: Iterable[Union[str, bytes]],
    config: Optional[ParserConfig] = None,
    max_workers: Optional[int] = None,
) -> List[List[Statement]]:
    """Parse statement-aligned regions concurrently; see NTriplesParser.parse_regions."""
    return NTriplesParser(config).parse_regions(regions, max_workers=max_workers)
