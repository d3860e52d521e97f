"""Line scanner: turns Pando source into syntactic facts.

Each non-comment line is tokenized by :class:`pando.lexer.Lexer` and then
matched against four shapes, independently of each other:

1. typed declaration   ``name : type [= value]``   (start of line)
2. simple assignment   ``name = name``             (start of line, no ``:``)
3. identifier occurrences                          (every identifier token)
4. print argument      ``print ( name )``          (first call on the line)

A line that matches none of them simply yields no facts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .lexer import is_comment_line, tokenize_line
from .pando_token import (
    ASSIGN,
    COLON,
    EOF,
    IDENT,
    LPAREN,
    PRINT,
    RPAREN,
    WORD_TOKENS,
    Token,
)


@dataclass(frozen=True)
class Span:
    """A single-line range: 0-based line, start and end columns."""
    line: int
    start: int
    end: int

    @classmethod
    def of(cls, line: int, tok: Token) -> "Span":
        return cls(line, tok.column, tok.end)


@dataclass(frozen=True)
class Declaration:
    name: str
    name_span: Span
    type_name: str
    type_span: Span
    value: Optional[str] = None
    value_span: Optional[Span] = None


@dataclass(frozen=True)
class Assignment:
    target: str
    target_span: Span
    source: str
    source_span: Span


@dataclass(frozen=True)
class Occurrence:
    """A word token on a line: an identifier or a reserved word."""
    name: str
    span: Span
    kind: str = IDENT


@dataclass
class LineFacts:
    line: int
    declaration: Optional[Declaration] = None
    assignment: Optional[Assignment] = None
    identifiers: List[Occurrence] = field(default_factory=list)
    keywords: List[Occurrence] = field(default_factory=list)
    print_argument: Optional[Occurrence] = None


def _match_declaration(line_no: int, line: str, tokens: Sequence[Token]) -> Optional[Declaration]:
    if len(tokens) < 3:
        return None
    name, colon, type_tok = tokens[0], tokens[1], tokens[2]
    if name.type != IDENT or colon.type != COLON or type_tok.type not in WORD_TOKENS:
        return None

    value = value_span = None
    if len(tokens) > 3 and tokens[3].type == ASSIGN:
        eof = tokens[-1]
        raw = line[tokens[3].end:eof.column]
        stripped = raw.strip()
        if stripped:
            start = tokens[3].end + (len(raw) - len(raw.lstrip()))
            value = stripped
            value_span = Span(line_no, start, start + len(stripped))

    return Declaration(
        name=name.literal,
        name_span=Span.of(line_no, name),
        type_name=type_tok.literal,
        type_span=Span.of(line_no, type_tok),
        value=value,
        value_span=value_span,
    )


def _match_assignment(line_no: int, tokens: Sequence[Token]) -> Optional[Assignment]:
    if any(tok.type == COLON for tok in tokens):
        return None
    if len(tokens) < 3:
        return None
    target, assign, source = tokens[0], tokens[1], tokens[2]
    if target.type != IDENT or assign.type != ASSIGN or source.type != IDENT:
        return None
    return Assignment(
        target=target.literal,
        target_span=Span.of(line_no, target),
        source=source.literal,
        source_span=Span.of(line_no, source),
    )


def _match_print_argument(line_no: int, tokens: Sequence[Token]) -> Optional[Occurrence]:
    for i in range(len(tokens) - 3):
        window = tokens[i:i + 4]
        if [tok.type for tok in window] == [PRINT, LPAREN, IDENT, RPAREN]:
            return Occurrence(window[2].literal, Span.of(line_no, window[2]))
    return None


def scan_line(line: str, line_no: int) -> LineFacts:
    """Extract every fact one line of source contributes."""
    facts = LineFacts(line=line_no)
    if is_comment_line(line):
        return facts

    tokens = tokenize_line(line)
    facts.declaration = _match_declaration(line_no, line, tokens)
    facts.assignment = _match_assignment(line_no, tokens)
    for tok in tokens:
        if tok.type == IDENT:
            facts.identifiers.append(Occurrence(tok.literal, Span.of(line_no, tok)))
        elif tok.type in WORD_TOKENS:
            facts.keywords.append(Occurrence(tok.literal, Span.of(line_no, tok), tok.type))
    facts.print_argument = _match_print_argument(line_no, tokens)
    return facts


def split_lines(text: str) -> List[str]:
    return text.split("\n")


def scan_document(text: str) -> List[LineFacts]:
    """Scan a whole document, one :class:`LineFacts` per line."""
    return [scan_line(line, i) for i, line in enumerate(split_lines(text))]
