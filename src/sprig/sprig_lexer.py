"""
Lexical analyzer for the SPRIG language.

This module turns raw source text into the token stream the parser consumes:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: An immutable token with symbol kind, spelling, and source location.
    TokenSource: Protocol for anything that hands the parser one token at a time.
    Lexer: Converts a CharacterStream into tokens (a TokenSource).
    TokenList: A TokenSource over an already-built sequence of tokens.

Features:
    - Skips whitespace and `--` line comments
    - Longest-match recognition of operators (`:=`, `>=`, `<=`, `!=`)
    - Recognizes:
        * Keywords (lower case) and ASCII identifiers
        * Number constants (integer, or with a single fractional part)
        * String constants (double quoted, single line)

Raises:
    LexicalError: On unterminated string constants.

Example:
    >>> lexer = Lexer(CharacterStream("begin x := 1 end"))
    >>> lexer.next_token()
    Token(begin, 'begin', line=1)

Exports:
    - CharacterStream
    - Token
    - TokenSource
    - Lexer
    - TokenList
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from sprig.sprig_constants import KEYWORDS, MAX_OPERATOR_LENGTH, OPERATORS, Symbol
from sprig.sprig_errors import LexicalError

logger = logging.getLogger(__name__)


def _is_letter(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == "_")


def _is_digit(ch: str) -> bool:
    return ch != "" and "0" <= ch <= "9"


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at ``offset`` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        symbol (Symbol): The token's terminal kind.
        text (str): The spelling as it appeared in the source.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    symbol: Symbol
    text: str = ""
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.symbol.display_name}, {self.text!r}, line={self.line})"

    def __str__(self) -> str:
        """Renders the token for diagnostics, e.g. ``'end'`` or ``identifier 'x'``."""
        if self.symbol is Symbol.EOF:
            return "end of file"
        if self.symbol.has_lexeme:
            return f"{self.symbol.display_name} '{self.text}'"
        return f"'{self.symbol.display_name}'"


class TokenSource(Protocol):
    """Anything that produces tokens one at a time.

    Implementations must keep returning an end-of-file token at the end of
    input instead of raising. Read failures propagate as ``OSError``.
    """

    def next_token(self) -> Token: ...  # pragma: no cover


class Lexer:
    """Lexical analyzer for the SPRIG language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    @classmethod
    def from_file(cls, path: str | Path) -> Lexer:
        """Builds a lexer over the UTF-8 contents of ``path``.

        Raises:
            OSError: If the file cannot be read.
        """
        source = Path(path).read_text(encoding="utf-8")
        logger.debug("Read %d characters from %s", len(source), path)
        return cls(CharacterStream(source))

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n":
                self.advance()
            elif self.peek() == "-" and self.stream.peek(1) == "-":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(MAX_OPERATOR_LENGTH):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in OPERATORS:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(OPERATORS[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Raises:
            LexicalError: If a string constant is not closed on its line.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(Symbol.EOF, "", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if _is_letter(ch):
            ident = ""
            while _is_letter(self.peek()) or _is_digit(self.peek()):
                ident += self.advance()
            return Token(KEYWORDS.get(ident, Symbol.IDENTIFIER), ident, line, col)

        # 2. Number constant
        if _is_digit(ch):
            num = ""
            while _is_digit(self.peek()):
                num += self.advance()
            if self.peek() == "." and _is_digit(self.stream.peek(1)):
                num += self.advance()
                while _is_digit(self.peek()):
                    num += self.advance()
            return Token(Symbol.NUMBER_CONSTANT, num, line, col)

        # 3. String constant
        if ch == '"':
            self.advance()
            val = ""
            while not self.stream.end_of_file() and self.peek() not in ('"', "\n"):
                val += self.advance()
            if self.peek() == '"':
                self.advance()
                return Token(Symbol.STRING_CONSTANT, val, line, col)
            raise LexicalError(
                f"Unterminated string constant at line {line}, col {col}",
                Token(Symbol.ERROR, '"' + val, line, col),
            )

        # 4. Operator or punctuation
        token = self.match_operator()
        if token:
            return token

        # 5. Unknown character, left for the parser to reject
        return Token(Symbol.ERROR, self.advance(), line, col)

    def tokens(self) -> list[Token]:
        """Drains the stream, returning every token including the final EOF."""
        result = []
        while True:
            tok = self.next_token()
            result.append(tok)
            if tok.symbol is Symbol.EOF:
                return result


class TokenList:
    """TokenSource over a prepared sequence of tokens.

    Once the sequence is exhausted an EOF token is returned on every call,
    positioned on the line of the last real token.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._position = 0

    def next_token(self) -> Token:
        if self._position < len(self._tokens):
            tok = self._tokens[self._position]
            self._position += 1
            return tok
        line = self._tokens[-1].line if self._tokens else 1
        return Token(Symbol.EOF, "", line, 0)


__all__ = ["CharacterStream", "Lexer", "Token", "TokenList", "TokenSource"]
