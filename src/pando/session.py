"""
Per-document analysis sessions.

The store keeps, for every open document URI, the symbol table and the
highlight tokens of the most recent analysis.  Entries are immutable
snapshots: an update builds a new :class:`DocumentSession` and swaps it in
with a single dict assignment, so a reader always sees either the previous
or the next complete result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple

from .analyzer import AnalysisResult, HighlightToken, Symbol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentSession:
    uri: str
    symbols: Mapping[str, Symbol] = field(default_factory=lambda: MappingProxyType({}))
    tokens: Tuple[HighlightToken, ...] = ()
    version: int = 0

    @classmethod
    def from_result(cls, uri: str, result: AnalysisResult, version: int) -> "DocumentSession":
        return cls(
            uri=uri,
            symbols=MappingProxyType(dict(result.symbols)),
            tokens=tuple(result.tokens),
            version=version,
        )


class DocumentSessionStore:
    """Maps document URI -> latest :class:`DocumentSession`."""

    def __init__(self) -> None:
        self._sessions: Dict[str, DocumentSession] = {}
        self._updates = 0

    def update(self, uri: str, result: AnalysisResult) -> DocumentSession:
        """Replace the stored session for *uri* with *result*."""
        self._updates += 1
        session = DocumentSession.from_result(uri, result, self._updates)
        self._sessions[uri] = session
        logger.debug(
            "session %s updated: %d symbols, %d tokens",
            uri, len(session.symbols), len(session.tokens),
        )
        return session

    def get(self, uri: str) -> DocumentSession:
        """Return the session for *uri*, or an empty one if never analyzed."""
        session = self._sessions.get(uri)
        if session is None:
            return DocumentSession(uri=uri)
        return session

    def symbols(self, uri: str) -> Mapping[str, Symbol]:
        return self.get(uri).symbols

    def tokens(self, uri: str) -> Tuple[HighlightToken, ...]:
        return self.get(uri).tokens

    def discard(self, uri: str) -> None:
        if self._sessions.pop(uri, None) is not None:
            logger.debug("session %s discarded", uri)

    def clear(self) -> None:
        self._sessions = {}

    def __contains__(self, uri: object) -> bool:
        return uri in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._sessions))
