"""Definition provider for Pando LSP — go-to-definition support."""

from typing import Any, Dict, List, Optional

from lsprotocol.types import Location, Position, Range

from ..type_system import is_valid_type


def _word_at_position(text: str, line: int, character: int) -> Optional[str]:
    """Extract the identifier under the cursor."""
    lines = text.split('\n')
    if line >= len(lines):
        return None
    row = lines[line]
    if character > len(row):
        return None

    # Walk left
    start = character
    while start > 0 and (row[start - 1].isalnum() or row[start - 1] == '_'):
        start -= 1
    # Walk right
    end = character
    while end < len(row) and (row[end].isalnum() or row[end] == '_'):
        end += 1

    word = row[start:end]
    return word if word else None


def _span_range(span) -> Range:
    return Range(
        start=Position(line=span.line, character=span.start),
        end=Position(line=span.line, character=span.end),
    )


class DefinitionProvider:
    """Provides go-to-definition for Pando variables."""

    def get_definition(self, uri: str, position, doc_info: Dict[str, Any]) -> Optional[List[Location]]:
        """Return the ``Location`` of the declaration of the variable under
        the cursor, or ``None`` if the word is not a declared variable.
        """
        text = doc_info.get('text', '')
        session = doc_info.get('session')
        if not text or session is None:
            return None

        word = _word_at_position(text, position.line, position.character)
        if not word or is_valid_type(word):
            return None

        symbol = session.symbols.get(word)
        if symbol is None:
            return None
        return [Location(uri=uri, range=_span_range(symbol.span))]
