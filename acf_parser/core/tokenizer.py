"""Lexical scanner for ACF text.

Turns raw text into a lazy stream of tokens: braces, quoted strings and bare
tokens. Whitespace and ``//`` line comments are dropped here, so the parser
never sees them.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from acf_parser.core.errors import Position, UnterminatedStringError

__all__ = ["Token", "TokenKind", "TokenStream", "tokenize"]

OPEN_BRACE = "{"
CLOSE_BRACE = "}"
QUOTE = '"'
ESCAPE = "\\"
COMMENT = "//"
BOM = "\ufeff"

WHITESPACE = frozenset(" \t\r\n")

# Escapes Steam writes itself; anything else after a backslash stays as typed
ESCAPES = {
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "t": "\t",
}

# A lone "/" is text, "//" starts a comment
_BARE_TOKEN = re.compile(r'(?:[^ \t\r\n{}"/]|/(?!/))+')


class TokenKind(Enum):
    """Kinds of lexical tokens."""

    OPEN_BRACE = "open brace"
    CLOSE_BRACE = "close brace"
    QUOTED_STRING = "quoted string"
    BARE_TOKEN = "bare token"
    END_OF_INPUT = "end of input"


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        kind: What sort of token this is.
        text: Decoded content for strings and bare tokens, the brace
            character for braces, empty for end of input.
        position: Where the token starts in the source.
    """

    kind: TokenKind
    text: str
    position: Position

    @property
    def is_text(self) -> bool:
        """Whether the token can serve as a name, key or scalar value."""
        return self.kind in (TokenKind.QUOTED_STRING, TokenKind.BARE_TOKEN)

    def describe(self) -> str:
        """Short description used in error messages."""
        if self.kind is TokenKind.OPEN_BRACE:
            return "'{'"
        if self.kind is TokenKind.CLOSE_BRACE:
            return "'}'"
        if self.kind is TokenKind.QUOTED_STRING:
            return f'quoted string "{self.text}"'
        if self.kind is TokenKind.BARE_TOKEN:
            return f"bare token '{self.text}'"
        return "end of input"


class _Scanner:
    """Walks the text once, keeping line and column up to date."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._length = len(text)
        self._index = 0
        self._line = 1
        self._column = 1

    def _position(self) -> Position:
        return Position(self._line, self._column, self._index)

    def _advance(self) -> str:
        ch = self._text[self._index]
        self._index += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    def _skip_ignored(self) -> None:
        """Skip whitespace, comments and a leading byte-order mark."""
        if self._index == 0 and self._text.startswith(BOM):
            self._index = 1

        while self._index < self._length:
            ch = self._text[self._index]
            if ch in WHITESPACE:
                self._advance()
            elif self._text.startswith(COMMENT, self._index):
                end = self._text.find("\n", self._index)
                if end == -1:
                    end = self._length
                self._column += end - self._index
                self._index = end
            else:
                break

    def _read_quoted(self, start: Position) -> Token:
        self._advance()  # opening quote
        parts: list[str] = []

        while self._index < self._length:
            ch = self._advance()
            if ch == QUOTE:
                return Token(TokenKind.QUOTED_STRING, "".join(parts), start)
            if ch == ESCAPE:
                if self._index >= self._length:
                    break
                escaped = self._advance()
                parts.append(ESCAPES.get(escaped, ESCAPE + escaped))
            else:
                parts.append(ch)

        raise UnterminatedStringError(start)

    def _read_bare(self, start: Position) -> Token:
        match = _BARE_TOKEN.match(self._text, self._index)
        if match is None:
            raise AssertionError(f"no bare token at offset {self._index}")

        text = match.group()
        self._index = match.end()
        self._column += len(text)
        return Token(TokenKind.BARE_TOKEN, text, start)

    def tokens(self) -> Iterator[Token]:
        while True:
            self._skip_ignored()
            start = self._position()

            if self._index >= self._length:
                yield Token(TokenKind.END_OF_INPUT, "", start)
                return

            ch = self._text[self._index]
            if ch == OPEN_BRACE:
                self._advance()
                yield Token(TokenKind.OPEN_BRACE, ch, start)
            elif ch == CLOSE_BRACE:
                self._advance()
                yield Token(TokenKind.CLOSE_BRACE, ch, start)
            elif ch == QUOTE:
                yield self._read_quoted(start)
            else:
                yield self._read_bare(start)


def tokenize(text: str) -> Iterator[Token]:
    """Lazily split ACF text into tokens.

    The last token produced is always ``END_OF_INPUT``.

    Args:
        text: The raw ACF content.

    Yields:
        Tokens in source order.

    Raises:
        UnterminatedStringError: When the text ends inside a quoted string.
            Raised only once the scanner reaches that string.
    """
    return _Scanner(text).tokens()


class TokenStream:
    """Token iterator with one token of lookahead.

    Once the end of input is reached, ``peek`` and ``next`` keep returning
    the ``END_OF_INPUT`` token.
    """

    def __init__(self, text: str) -> None:
        self._tokens = tokenize(text)
        self._peeked: Token | None = None
        self._end: Token | None = None

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self._pull()
        return self._peeked

    def next(self) -> Token:
        """Consume and return the next token."""
        token = self.peek()
        self._peeked = None
        return token

    def _pull(self) -> Token:
        if self._end is not None:
            return self._end
        token = next(self._tokens)
        if token.kind is TokenKind.END_OF_INPUT:
            self._end = token
        return token
