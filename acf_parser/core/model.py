"""In-memory representation of a parsed ACF document.

A ``Document`` is an ordered tuple of root ``Entry`` objects. Each entry maps
keys to values, where a value is either a ``Scalar`` (leaf text) or a
``Nested`` entry. Everything here is immutable once built.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

__all__ = ["Document", "DuplicateKeyPolicy", "Entry", "Nested", "Scalar", "Value"]


class DuplicateKeyPolicy(Enum):
    """How a repeated key inside one entry is resolved.

    Valve does not document the intended behaviour, so this is a chosen
    convention rather than a verified one. ``LAST_WINS`` mirrors plain dict
    assignment: the later value replaces the earlier one but the key keeps
    its original position.
    """

    LAST_WINS = "last"
    FIRST_WINS = "first"


@dataclass(frozen=True)
class Scalar:
    """A leaf value. The text is kept exactly as decoded, never typed."""

    text: str

    @property
    def is_scalar(self) -> bool:
        return True

    @property
    def is_nested(self) -> bool:
        return False


@dataclass(frozen=True)
class Entry:
    """A named block of ordered key-value pairs.

    Attributes:
        name: The entry name (the key it was declared under).
        expressions: Read-only mapping of key to ``Scalar`` or ``Nested``,
            in source order.
    """

    name: str
    expressions: Mapping[str, Value] = field(default_factory=dict)

    # A mappingproxy cannot be hashed, so neither can an entry
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        # Copy so later changes to the caller's dict cannot leak in
        object.__setattr__(self, "expressions", MappingProxyType(dict(self.expressions)))

    def __len__(self) -> int:
        return len(self.expressions)

    def to_dict(self) -> dict[str, Any]:
        """Convert the entry body to plain nested dicts of strings.

        Walks nested entries with an explicit stack, so any depth the parser
        accepts converts as well.

        Returns:
            Dict mapping each key to its text, or to another dict for
            nested entries.
        """
        result: dict[str, Any] = {}
        stack = [(iter(self.expressions.items()), result)]
        while stack:
            items, target = stack[-1]
            item = next(items, None)
            if item is None:
                stack.pop()
                continue
            key, value = item
            if isinstance(value, Nested):
                child: dict[str, Any] = {}
                target[key] = child
                stack.append((iter(value.entry.expressions.items()), child))
            else:
                target[key] = value.text
        return result


@dataclass(frozen=True)
class Nested:
    """A value that is itself an entry."""

    entry: Entry

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_scalar(self) -> bool:
        return False

    @property
    def is_nested(self) -> bool:
        return True


Value = Union[Scalar, Nested]


@dataclass(frozen=True)
class Document:
    """The parsed result: root entries in source order."""

    entries: tuple[Entry, ...] = ()

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def to_dict(self) -> dict[str, Any]:
        """Convert the document to plain nested dicts keyed by root name.

        Root entries sharing a name collapse into one key; the last one wins.

        Returns:
            Dict in the shape produced by ``vdf.loads``.
        """
        return {entry.name: entry.to_dict() for entry in self.entries}
