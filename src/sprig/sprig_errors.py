"""
Error types raised by the SPRIG front end.

CompilationError subclasses the builtin SyntaxError so callers that only care
about "the program is malformed" can keep catching SyntaxError.

Classes:
    CompilationError: A fatal syntax error, optionally carrying the offending token.
    LexicalError: A malformed token (e.g. an unterminated string constant).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sprig.sprig_lexer import Token


class CompilationError(SyntaxError):
    """Fatal error that aborts the parse.

    Attributes:
        message (str): The human-readable diagnostic.
        token (Token | None): The token found where something else was expected.
        line (int | None): Source line of ``token``, if any.
    """

    def __init__(self, message: str, token: Token | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.token = token
        self.line = token.line if token is not None else None

    def __str__(self) -> str:
        return self.message


class LexicalError(CompilationError):
    """Raised by the lexer when input cannot be turned into a token."""


__all__ = ["CompilationError", "LexicalError"]
