"""Context-sensitive completion for Pando.

:func:`complete` looks only at the text of the current line up to the
cursor and at the document's symbol table.  Each rule below contributes
candidates independently, so one request may collect several groups.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Mapping, Optional

from .analyzer import Symbol
from .lexer import COMMENT_MARKER
from .literals import EMPTY_TUPLE_LITERAL, FALSE_LITERAL, NONE_LITERAL, TRUE_LITERAL
from .type_system import PANDO_TYPES, rust_type

BUILTIN_FUNCTION = "print"

# Candidate kinds
FUNCTION = "function"
TYPE = "type"
VARIABLE = "variable"
VALUE = "value"

_TRAILING_WORD_RE = re.compile(r"[A-Za-z0-9_]*$")


@dataclass(frozen=True)
class CompletionCandidate:
    label: str
    kind: str
    detail: str
    documentation: Optional[str] = None


def _trailing_word(text: str) -> str:
    return _TRAILING_WORD_RE.search(text).group(0)


def _function_candidates(stripped: str) -> List[CompletionCandidate]:
    word = _trailing_word(stripped)
    is_partial = 0 < len(word) < len(BUILTIN_FUNCTION) and BUILTIN_FUNCTION.startswith(word)
    if stripped and not is_partial:
        return []
    return [CompletionCandidate(
        label=BUILTIN_FUNCTION,
        kind=FUNCTION,
        detail="Pando built-in function",
        documentation='Prints a value to the console\n\nprint("text")',
    )]


def _type_candidates(stripped: str) -> List[CompletionCandidate]:
    if ":" not in stripped or "=" in stripped:
        return []
    after_colon = stripped.rsplit(":", 1)[1].strip()
    if len(after_colon) >= 3:
        return []
    return [
        CompletionCandidate(
            label=name,
            kind=TYPE,
            detail=f"Pando type → {rust_type(name)}",
            documentation=f"Translated to the Rust type {rust_type(name)}",
        )
        for name in PANDO_TYPES
        if name.startswith(after_colon)
    ]


def _variable_candidates(prefix: str, stripped: str,
                         symbols: Mapping[str, Symbol]) -> List[CompletionCandidate]:
    wants_value = not stripped or stripped.endswith("=") or prefix[-1:].isspace()
    if not wants_value:
        return []
    return [
        CompletionCandidate(
            label=symbol.name,
            kind=VARIABLE,
            detail=f"Type: {symbol.type}",
            documentation=f"Declared on line {symbol.line + 1}",
        )
        for symbol in symbols.values()
    ]


def _value_candidates(stripped: str) -> List[CompletionCandidate]:
    candidates = []
    if stripped.endswith("=") or ("bool" in stripped and "=" in stripped):
        candidates.append(CompletionCandidate(TRUE_LITERAL, VALUE, "Boolean value", "Rust: true"))
        candidates.append(CompletionCandidate(FALSE_LITERAL, VALUE, "Boolean value", "Rust: false"))
    if NONE_LITERAL in stripped and "=" in stripped:
        candidates.append(CompletionCandidate(NONE_LITERAL, VALUE, "Value of type None", "Rust: ()"))
        candidates.append(CompletionCandidate(
            EMPTY_TUPLE_LITERAL, VALUE, "Alternative value for None", "Explicit empty tuple",
        ))
    return candidates


def complete(prefix: str, symbols: Optional[Mapping[str, Symbol]] = None) -> List[CompletionCandidate]:
    """Return completion candidates for the line text *prefix* before the cursor."""
    stripped = prefix.strip()
    if stripped.startswith(COMMENT_MARKER):
        return []

    candidates: List[CompletionCandidate] = []
    candidates.extend(_function_candidates(stripped))
    candidates.extend(_type_candidates(stripped))
    candidates.extend(_variable_candidates(prefix, stripped, symbols or {}))
    candidates.extend(_value_candidates(stripped))
    return candidates
