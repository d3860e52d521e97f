"""
Language Server Protocol support for Pando.

Provides diagnostics, completion, semantic highlighting, hover,
go-to-definition and document symbols on top of the analyzer.
"""

from .server import PandoLanguageServer, create_server

__all__ = ["PandoLanguageServer", "create_server"]
