"""
Static Analyzer for Pando
=========================

Turns the text of one document into a symbol table, a list of diagnostics
and the semantic highlight tokens for the editor.  The analysis runs in two
passes over the scanner's facts:

1. declarations are collected into a flat symbol table (declare before use
   is not required within a document, every declaration is seen first);
2. uses, initializers, simple assignments and ``print`` arguments are
   validated against that table.

Usage::

    from pando.analyzer import analyze
    result = analyze("x: int = 5\\nflag: bool = x\\n")
    for d in result.diagnostics:
        print(d)

``analyze`` has no hidden inputs: the same text always produces the same
result, so callers are free to cache by content.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from .literals import classify_literal
from .pando_token import PRINT
from .scanner import Declaration, LineFacts, Span, scan_document
from .type_system import PANDO_TYPES, is_compatible, is_valid_type

logger = logging.getLogger(__name__)

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

DIAGNOSTIC_SOURCE = "pando"

# Diagnostic codes
UNDEFINED_TYPE = "undefined-type"
DUPLICATE_VARIABLE = "duplicate-variable"
UNDECLARED_VARIABLE = "undeclared-variable"
TYPE_MISMATCH = "type-mismatch"

ERROR = "error"
WARNING = "warning"

# Semantic token legend; the indices are the wire values
TOKEN_TYPES = ("variable", "type", "function", "keyword")
TOKEN_MODIFIERS = ("declaration",)

VARIABLE_TOKEN = 0
TYPE_TOKEN = 1
FUNCTION_TOKEN = 2
KEYWORD_TOKEN = 3

DECLARATION_MODIFIER = 1


# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Symbol:
    name: str
    type: str
    span: Span

    @property
    def line(self) -> int:
        return self.span.line


@dataclass(frozen=True)
class Diagnostic:
    severity: str  # "error" | "warning"
    span: Span
    message: str
    code: str
    source: str = DIAGNOSTIC_SOURCE

    def __str__(self) -> str:
        return (
            f"{self.span.line + 1}:{self.span.start + 1} "
            f"{self.severity} [{self.code}] {self.message}"
        )


@dataclass(frozen=True, order=True)
class HighlightToken:
    line: int
    start: int
    length: int
    token_type: int
    modifiers: int = 0


@dataclass(frozen=True)
class AnalysisResult:
    symbols: Mapping[str, Symbol] = field(default_factory=dict)
    diagnostics: Tuple[Diagnostic, ...] = ()
    tokens: Tuple[HighlightToken, ...] = ()

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == WARNING]


# ---------------------------------------------------------------------------
# Analyzer
# ---------------------------------------------------------------------------

class Analyzer:
    """Run both analysis passes over a document."""

    def __init__(self) -> None:
        self.symbols: Dict[str, Symbol] = {}
        self.diagnostics: List[Diagnostic] = []
        self.tokens: List[HighlightToken] = []

    # -- public API ---------------------------------------------------------

    def analyze(self, text: str) -> AnalysisResult:
        """Analyze *text* and return a fresh :class:`AnalysisResult`."""
        self.symbols = {}
        self.diagnostics = []
        self.tokens = []

        facts = scan_document(text)
        for line_facts in facts:
            if line_facts.declaration is not None:
                self._declare(line_facts.declaration)
        for line_facts in facts:
            self._check_line(line_facts)

        logger.debug(
            "analyzed %d lines: %d symbols, %d diagnostics",
            len(facts), len(self.symbols), len(self.diagnostics),
        )
        return AnalysisResult(
            symbols=dict(self.symbols),
            diagnostics=tuple(self.diagnostics),
            tokens=tuple(sorted(self.tokens)),
        )

    # -- helpers ------------------------------------------------------------

    def _error(self, code: str, span: Span, msg: str):
        self.diagnostics.append(Diagnostic(ERROR, span, msg, code))

    def _warning(self, code: str, span: Span, msg: str):
        self.diagnostics.append(Diagnostic(WARNING, span, msg, code))

    def _token(self, span: Span, token_type: int, modifiers: int = 0):
        self.tokens.append(
            HighlightToken(span.line, span.start, span.end - span.start, token_type, modifiers)
        )

    def _undeclared(self, name: str, span: Span):
        self._error(UNDECLARED_VARIABLE, span, f'Variable "{name}" is not declared')

    def _mismatch(self, target: str, source: str, span: Span):
        self._error(
            TYPE_MISMATCH, span,
            f"Incompatible types: cannot assign {source} to {target}",
        )

    # -- pass 1 -------------------------------------------------------------

    def _declare(self, decl: Declaration):
        if not is_valid_type(decl.type_name):
            self._error(
                UNDEFINED_TYPE, decl.type_span,
                f'Unknown type "{decl.type_name}". Valid types: {", ".join(PANDO_TYPES)}',
            )
            return

        existing = self.symbols.get(decl.name)
        if existing is not None:
            self._warning(
                DUPLICATE_VARIABLE, decl.name_span,
                f'Variable "{decl.name}" is already declared (line {existing.line + 1})',
            )
            return

        self.symbols[decl.name] = Symbol(decl.name, decl.type_name, decl.name_span)
        self._token(decl.name_span, VARIABLE_TOKEN, DECLARATION_MODIFIER)
        self._token(decl.type_span, TYPE_TOKEN)

    # -- pass 2 -------------------------------------------------------------

    def _check_line(self, facts: LineFacts):
        self._highlight_uses(facts)
        if facts.declaration is not None:
            self._check_initializer(facts.declaration)
        if facts.assignment is not None:
            self._check_assignment(facts)
        if facts.print_argument is not None:
            arg = facts.print_argument
            if arg.name not in self.symbols:
                self._undeclared(arg.name, arg.span)

    def _highlight_uses(self, facts: LineFacts):
        for occ in facts.identifiers:
            symbol = self.symbols.get(occ.name)
            if symbol is None or is_valid_type(occ.name):
                continue
            if symbol.span == occ.span:
                continue
            self._token(occ.span, VARIABLE_TOKEN)

        declared_type: Optional[Span] = None
        if facts.declaration is not None:
            declared_type = facts.declaration.type_span
        for occ in facts.keywords:
            if occ.span == declared_type:
                continue  # `None` used as a type is already a type token
            if occ.kind == PRINT:
                self._token(occ.span, FUNCTION_TOKEN)
            else:
                self._token(occ.span, KEYWORD_TOKEN)

    def _check_initializer(self, decl: Declaration):
        if decl.value is None or decl.value_span is None:
            return
        if not is_valid_type(decl.type_name):
            return  # already reported as undefined-type

        if _is_identifier(decl.value):
            source = self.symbols.get(decl.value)
            if source is None:
                self._undeclared(decl.value, decl.value_span)
            elif not is_compatible(decl.type_name, source.type):
                self._mismatch(decl.type_name, source.type, decl.value_span)
            return

        literal_type = classify_literal(decl.value)
        if literal_type is None:
            return
        if _literal_fits(decl.type_name, literal_type):
            return
        self._mismatch(decl.type_name, literal_type, decl.value_span)

    def _check_assignment(self, facts: LineFacts):
        assign = facts.assignment
        target = self.symbols.get(assign.target)
        source = self.symbols.get(assign.source)
        if target is None:
            self._undeclared(assign.target, assign.target_span)
        if source is None:
            self._undeclared(assign.source, assign.source_span)
        if target is not None and source is not None:
            if not is_compatible(target.type, source.type):
                self._mismatch(target.type, source.type, assign.source_span)


def _is_identifier(text: str) -> bool:
    # Reserved literal spellings are values, not variable references
    return _IDENT_RE.fullmatch(text) is not None and classify_literal(text) is None


def _literal_fits(target: str, literal_type: str) -> bool:
    if is_compatible(target, literal_type):
        return True
    # 'a' is both a char literal and a one-character str literal
    return literal_type == "char" and is_compatible(target, "str")


def analyze(text: str) -> AnalysisResult:
    """Analyze one document's text."""
    return Analyzer().analyze(text)
