"""Symbol provider for Pando LSP — document outline of declared variables."""

from typing import Any, Dict, List

from lsprotocol.types import DocumentSymbol, SymbolKind

from ..type_system import rust_type
from .definition_provider import _span_range


def _symbol_to_document_symbol(symbol) -> DocumentSymbol:
    """Convert an analyzer ``Symbol`` into a ``DocumentSymbol``."""
    symbol_range = _span_range(symbol.span)
    return DocumentSymbol(
        name=symbol.name,
        kind=SymbolKind.Variable,
        range=symbol_range,
        selection_range=symbol_range,
        detail=f"{symbol.type} ({rust_type(symbol.type)})",
    )


class SymbolProvider:
    """Provides document symbols for outline view."""

    def get_symbols(self, doc_info: Dict[str, Any]) -> List[DocumentSymbol]:
        """Get document symbols from the latest analysis, in source order."""
        session = doc_info.get('session')
        if session is None:
            return []

        ordered = sorted(session.symbols.values(), key=lambda s: (s.span.line, s.span.start))
        return [_symbol_to_document_symbol(s) for s in ordered]
