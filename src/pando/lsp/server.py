"""
Pando language server.

Wires editor events to the analyzer over the Language Server Protocol:

* ``didOpen`` / ``didChange`` re-analyze the whole document, store the new
  session and publish its diagnostics;
* ``didClose`` drops the session and clears the diagnostics;
* completion, semantic tokens, hover, definition and document symbols read
  the stored session and never wait for an analysis.

Usage::

    from pando.lsp.server import create_server
    create_server().start_io()
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from lsprotocol import types
from pygls.server import LanguageServer

from .. import __version__
from ..analyzer import (
    ERROR,
    TOKEN_MODIFIERS,
    TOKEN_TYPES,
    Diagnostic,
    HighlightToken,
    analyze,
)
from ..completion import FUNCTION, TYPE, VALUE, VARIABLE, CompletionCandidate, complete
from ..config import ServerConfig
from ..session import DocumentSessionStore
from .definition_provider import DefinitionProvider, _span_range
from .hover_provider import HoverProvider
from .symbol_provider import SymbolProvider

logger = logging.getLogger(__name__)

TRIGGER_CHARACTERS = [".", ":", "=", "(", '"', "'"]

SEMANTIC_TOKENS_LEGEND = types.SemanticTokensLegend(
    token_types=list(TOKEN_TYPES),
    token_modifiers=list(TOKEN_MODIFIERS),
)

_COMPLETION_KINDS = {
    FUNCTION: types.CompletionItemKind.Function,
    TYPE: types.CompletionItemKind.TypeParameter,
    VARIABLE: types.CompletionItemKind.Variable,
    VALUE: types.CompletionItemKind.Value,
}


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def to_lsp_diagnostic(diagnostic: Diagnostic) -> types.Diagnostic:
    if diagnostic.severity == ERROR:
        severity = types.DiagnosticSeverity.Error
    else:
        severity = types.DiagnosticSeverity.Warning
    return types.Diagnostic(
        range=_span_range(diagnostic.span),
        message=diagnostic.message,
        severity=severity,
        code=diagnostic.code,
        source=diagnostic.source,
    )


def to_completion_item(candidate: CompletionCandidate) -> types.CompletionItem:
    return types.CompletionItem(
        label=candidate.label,
        kind=_COMPLETION_KINDS[candidate.kind],
        detail=candidate.detail,
        documentation=candidate.documentation,
    )


def encode_semantic_tokens(tokens: Iterable[HighlightToken]) -> List[int]:
    """Encode tokens in the relative 5-integer form of the protocol.

    Tokens are sorted first; the encoding is only valid in document order.
    """
    data: List[int] = []
    prev_line = prev_start = 0
    for tok in sorted(tokens):
        delta_line = tok.line - prev_line
        delta_start = tok.start - prev_start if delta_line == 0 else tok.start
        data.extend([delta_line, delta_start, tok.length, tok.token_type, tok.modifiers])
        prev_line, prev_start = tok.line, tok.start
    return data


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

class PandoLanguageServer(LanguageServer):
    """pygls server owning the per-document session store."""

    def __init__(self, sessions: Optional[DocumentSessionStore] = None,
                 config: Optional[ServerConfig] = None):
        super().__init__("pando-language-server", f"v{__version__}")
        self.sessions = sessions if sessions is not None else DocumentSessionStore()
        self.config = config or ServerConfig()
        logging.getLogger("pando").setLevel(
            getattr(logging, self.config.log_level.upper(), logging.WARNING))
        self.hover_provider = HoverProvider()
        self.definition_provider = DefinitionProvider()
        self.symbol_provider = SymbolProvider()

    # -- analysis -----------------------------------------------------------

    def analyze_document(self, uri: str, text: str) -> Optional[List[types.Diagnostic]]:
        """Analyze *text*, store the session and return LSP diagnostics.

        Returns ``None`` when the analysis itself failed; the previous
        session is then left untouched.
        """
        try:
            result = analyze(text)
        except Exception:
            logger.exception("analysis of %s failed", uri)
            return None
        self.sessions.update(uri, result)
        return [to_lsp_diagnostic(d) for d in result.diagnostics]

    def validate(self, uri: str) -> None:
        document = self.workspace.get_text_document(uri)
        diagnostics = self.analyze_document(uri, document.source)
        if diagnostics is None:
            return
        self.publish_diagnostics(uri, diagnostics)
        self.refresh_semantic_tokens()

    def refresh_semantic_tokens(self) -> None:
        workspace = getattr(self.client_capabilities, "workspace", None)
        semantic_tokens = getattr(workspace, "semantic_tokens", None)
        if getattr(semantic_tokens, "refresh_support", False):
            self.lsp.send_request(types.WORKSPACE_SEMANTIC_TOKENS_REFRESH)

    def close_document(self, uri: str) -> None:
        self.sessions.discard(uri)
        self.publish_diagnostics(uri, [])

    # -- requests -----------------------------------------------------------

    def doc_info(self, uri: str, text: Optional[str] = None) -> dict:
        if text is None:
            text = self.workspace.get_text_document(uri).source
        return {'text': text, 'session': self.sessions.get(uri)}

    def completion_list(self, uri: str, line_prefix: str) -> types.CompletionList:
        candidates = complete(line_prefix, self.sessions.symbols(uri))
        return types.CompletionList(
            is_incomplete=False,
            items=[to_completion_item(c) for c in candidates],
        )

    def semantic_tokens(self, uri: str) -> types.SemanticTokens:
        return types.SemanticTokens(data=encode_semantic_tokens(self.sessions.tokens(uri)))


def _line_prefix(ls: PandoLanguageServer, uri: str, position: types.Position) -> str:
    lines = ls.workspace.get_text_document(uri).lines
    if position.line >= len(lines):
        return ""
    return lines[position.line].rstrip("\r\n")[:position.character]


def create_server(sessions: Optional[DocumentSessionStore] = None,
                  config: Optional[ServerConfig] = None) -> PandoLanguageServer:
    """Build a server with every Pando feature registered."""
    server = PandoLanguageServer(sessions=sessions, config=config)

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    def did_open(ls: PandoLanguageServer, params: types.DidOpenTextDocumentParams):
        ls.validate(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    def did_change(ls: PandoLanguageServer, params: types.DidChangeTextDocumentParams):
        ls.validate(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    def did_close(ls: PandoLanguageServer, params: types.DidCloseTextDocumentParams):
        ls.close_document(params.text_document.uri)

    @server.feature(
        types.TEXT_DOCUMENT_COMPLETION,
        types.CompletionOptions(trigger_characters=TRIGGER_CHARACTERS, resolve_provider=False),
    )
    def completion(ls: PandoLanguageServer, params: types.CompletionParams):
        uri = params.text_document.uri
        return ls.completion_list(uri, _line_prefix(ls, uri, params.position))

    @server.feature(types.TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, SEMANTIC_TOKENS_LEGEND)
    def semantic_tokens_full(ls: PandoLanguageServer, params: types.SemanticTokensParams):
        return ls.semantic_tokens(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_HOVER)
    def hover(ls: PandoLanguageServer, params: types.HoverParams):
        uri = params.text_document.uri
        return ls.hover_provider.get_hover(params.position, ls.doc_info(uri))

    @server.feature(types.TEXT_DOCUMENT_DEFINITION)
    def definition(ls: PandoLanguageServer, params: types.DefinitionParams):
        uri = params.text_document.uri
        return ls.definition_provider.get_definition(uri, params.position, ls.doc_info(uri))

    @server.feature(types.TEXT_DOCUMENT_DOCUMENT_SYMBOL)
    def document_symbol(ls: PandoLanguageServer, params: types.DocumentSymbolParams):
        return ls.symbol_provider.get_symbols(ls.doc_info(params.text_document.uri))

    return server
