"""Recursive-descent parser for ACF token streams.

Grammar::

    document   := entry* EOF
    entry      := token '{' pair* '}'
    pair       := token ( scalar | entry_body )
    scalar     := token
    entry_body := '{' pair* '}'
    token      := quoted_string | bare_token

Nested bodies are tracked on an explicit stack of open entries rather than
the Python call stack, so nesting depth is limited by memory only. The parser
stops at the first error; there is no resynchronisation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from acf_parser.core.errors import (
    Position,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnmatchedCloseBraceError,
    UnmatchedOpenBraceError,
)
from acf_parser.core.model import Document, DuplicateKeyPolicy, Entry, Nested, Scalar, Value
from acf_parser.core.tokenizer import Token, TokenKind, TokenStream

logger = logging.getLogger("acfparser.parser")

__all__ = ["Parser"]


@dataclass
class _OpenEntry:
    """An entry whose closing brace has not been seen yet."""

    name: str
    opened_at: Position
    expressions: dict[str, Value] = field(default_factory=dict)


class Parser:
    """Builds a ``Document`` from ACF text.

    A parser instance consumes its input once; create a new one per text.
    """

    def __init__(self, text: str, *, duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS) -> None:
        """Initializes the parser.

        Args:
            text: The ACF content to parse.
            duplicate_keys: How to resolve a key repeated within one entry.
        """
        self._tokens = TokenStream(text)
        self._duplicate_keys = duplicate_keys

    def parse_document(self) -> Document:
        """Parse every root entry up to the end of input.

        Returns:
            The parsed document, empty if the text holds no entries.

        Raises:
            AcfParseError: On the first grammar or lexical error.
        """
        entries: list[Entry] = []
        while self._tokens.peek().kind is not TokenKind.END_OF_INPUT:
            entries.append(self.parse_entry())

        logger.debug("Parsed %d root entries", len(entries))
        return Document(tuple(entries))

    def parse_entry(self) -> Entry:
        """Parse ``name { pair* }``.

        Returns:
            The complete entry including all nested entries.

        Raises:
            UnmatchedCloseBraceError: If a ``}`` stands where a name belongs.
            UnexpectedTokenError: If the name or the ``{`` is malformed.
            UnexpectedEndOfInputError: If input ends before the ``{``.
            UnmatchedOpenBraceError: If input ends before the closing ``}``.
        """
        name = self._tokens.next()
        if name.kind is TokenKind.CLOSE_BRACE:
            raise UnmatchedCloseBraceError(name.position)
        if name.kind is TokenKind.END_OF_INPUT:
            raise UnexpectedEndOfInputError("entry name", name.position)
        if not name.is_text:
            raise UnexpectedTokenError("entry name", name.describe(), name.position)

        brace = self._tokens.next()
        if brace.kind is TokenKind.END_OF_INPUT:
            raise UnexpectedEndOfInputError(f"'{{' after entry name '{name.text}'", brace.position)
        if brace.kind is not TokenKind.OPEN_BRACE:
            raise UnexpectedTokenError(f"'{{' after entry name '{name.text}'", brace.describe(), brace.position)

        return self._parse_body(name.text, brace.position)

    def parse_pair(self) -> tuple[Token, Token]:
        """Read a key and the token that follows it.

        The second token is either text (a scalar value) or ``{`` (the start
        of a nested entry body, which the caller takes over).

        Returns:
            Tuple of (key token, value token).

        Raises:
            UnexpectedTokenError: If the key is a brace or the value is ``}``.
            UnexpectedEndOfInputError: If input ends right after the key.
        """
        key = self._tokens.next()
        if not key.is_text:
            raise UnexpectedTokenError("key", key.describe(), key.position)

        value = self._tokens.next()
        if value.kind is TokenKind.END_OF_INPUT:
            raise UnexpectedEndOfInputError(f"value for key '{key.text}'", value.position)
        if value.kind is TokenKind.CLOSE_BRACE:
            raise UnexpectedTokenError(f"value or '{{' for key '{key.text}'", value.describe(), value.position)

        return key, value

    def _parse_body(self, name: str, opened_at: Position) -> Entry:
        """Parse pairs up to the ``}`` matching an already consumed ``{``."""
        stack = [_OpenEntry(name, opened_at)]

        while True:
            current = stack[-1]
            token = self._tokens.peek()

            if token.kind is TokenKind.CLOSE_BRACE:
                self._tokens.next()
                stack.pop()
                entry = Entry(current.name, current.expressions)
                if not stack:
                    return entry
                self._assign(stack[-1], entry.name, Nested(entry))
            elif token.kind is TokenKind.END_OF_INPUT:
                raise UnmatchedOpenBraceError(current.name, current.opened_at)
            else:
                key, value = self.parse_pair()
                if value.kind is TokenKind.OPEN_BRACE:
                    stack.append(_OpenEntry(key.text, value.position))
                else:
                    self._assign(current, key.text, Scalar(value.text))

    def _assign(self, target: _OpenEntry, key: str, value: Value) -> None:
        if key not in target.expressions:
            target.expressions[key] = value
            return

        if self._duplicate_keys is DuplicateKeyPolicy.FIRST_WINS:
            logger.debug("Ignoring duplicate key '%s' in entry '%s'", key, target.name)
            return

        logger.debug("Duplicate key '%s' in entry '%s' replaces earlier value", key, target.name)
        # Plain assignment keeps the key at its first position
        target.expressions[key] = value
