"""Hover provider for Pando LSP — type details for variables and type names."""

from typing import Any, Dict, Optional

from lsprotocol.types import Hover, MarkupContent, MarkupKind

from ..type_system import is_valid_type, rust_type
from .definition_provider import _word_at_position


class HoverProvider:
    """Shows the Pando type and its Rust translation."""

    def get_hover(self, position, doc_info: Dict[str, Any]) -> Optional[Hover]:
        text = doc_info.get('text', '')
        session = doc_info.get('session')
        if not text:
            return None

        word = _word_at_position(text, position.line, position.character)
        if not word:
            return None

        if is_valid_type(word):
            value = f"**{word}** — Pando type\n\nRust: `{rust_type(word)}`"
        elif session is not None and word in session.symbols:
            symbol = session.symbols[word]
            value = (
                f"```pando\n{symbol.name}: {symbol.type}\n```\n"
                f"Rust: `{rust_type(symbol.type)}` — declared on line {symbol.line + 1}"
            )
        else:
            return None

        return Hover(contents=MarkupContent(kind=MarkupKind.Markdown, value=value))
