"""Tests for the immutable document model."""

from __future__ import annotations

import dataclasses

import pytest

from acf_parser.core.model import Document, DuplicateKeyPolicy, Entry, Nested, Scalar


@pytest.fixture
def sample_entry() -> Entry:
    """AppState with one scalar and one nested entry."""
    return Entry(
        "AppState",
        {
            "appid": Scalar("440"),
            "UserConfig": Nested(Entry("UserConfig", {"language": Scalar("english")})),
        },
    )


class TestValues:
    """Scalar and Nested variants."""

    def test_scalar_flags(self) -> None:
        """A scalar reports itself as scalar."""
        value = Scalar("440")
        assert value.is_scalar
        assert not value.is_nested

    def test_nested_flags(self) -> None:
        """A nested value reports itself as nested."""
        value = Nested(Entry("x"))
        assert value.is_nested
        assert not value.is_scalar

    def test_variants_are_matchable(self, sample_entry: Entry) -> None:
        """Values work with structural pattern matching."""
        seen = []
        for value in sample_entry.expressions.values():
            match value:
                case Scalar(text=text):
                    seen.append(("scalar", text))
                case Nested(entry=entry):
                    seen.append(("nested", entry.name))
        assert seen == [("scalar", "440"), ("nested", "UserConfig")]

    def test_scalar_is_not_equal_to_plain_string(self) -> None:
        """The tag is part of the value."""
        assert Scalar("440") != "440"


class TestEntry:
    """Entry construction and immutability."""

    def test_expressions_are_read_only(self, sample_entry: Entry) -> None:
        """The mapping cannot be modified."""
        with pytest.raises(TypeError):
            sample_entry.expressions["appid"] = Scalar("570")  # type: ignore[index]

    def test_fields_are_frozen(self, sample_entry: Entry) -> None:
        """Attributes cannot be reassigned."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_entry.name = "Other"  # type: ignore[misc]

    def test_source_dict_is_copied(self) -> None:
        """Changing the dict used to build an entry does not change it."""
        source = {"k": Scalar("1")}
        entry = Entry("e", source)
        source["k"] = Scalar("2")
        assert entry.expressions["k"] == Scalar("1")

    def test_len(self, sample_entry: Entry) -> None:
        """len() counts direct keys only."""
        assert len(sample_entry) == 2

    def test_to_dict(self, sample_entry: Entry) -> None:
        """Nested entries become nested dicts."""
        assert sample_entry.to_dict() == {"appid": "440", "UserConfig": {"language": "english"}}

    def test_equality_is_structural(self, sample_entry: Entry) -> None:
        """Entries built separately with the same content are equal."""
        other = Entry(
            "AppState",
            {
                "appid": Scalar("440"),
                "UserConfig": Nested(Entry("UserConfig", {"language": Scalar("english")})),
            },
        )
        assert sample_entry == other
        assert sample_entry != Entry("AppState", {"appid": Scalar("440")})


class TestDocument:
    """Document as an ordered sequence of root entries."""

    def test_sequence_behaviour(self, sample_entry: Entry) -> None:
        """Documents are iterable, sized and indexable."""
        doc = Document((sample_entry, Entry("Second")))
        assert len(doc) == 2
        assert doc[1].name == "Second"
        assert [entry.name for entry in doc] == ["AppState", "Second"]

    def test_list_is_converted_to_tuple(self, sample_entry: Entry) -> None:
        """Entries passed as a list are frozen into a tuple."""
        doc = Document([sample_entry])  # type: ignore[arg-type]
        assert isinstance(doc.entries, tuple)

    def test_to_dict_keys_by_root_name(self, sample_entry: Entry) -> None:
        """Roots become top-level keys."""
        doc = Document((sample_entry,))
        assert doc.to_dict() == {"AppState": {"appid": "440", "UserConfig": {"language": "english"}}}

    def test_to_dict_last_root_wins(self) -> None:
        """Roots sharing a name collapse to the last one."""
        doc = Document((Entry("a", {"k": Scalar("1")}), Entry("a", {"k": Scalar("2")})))
        assert doc.to_dict() == {"a": {"k": "2"}}


class TestDuplicateKeyPolicy:
    """Policy values used by config and CLI."""

    def test_values(self) -> None:
        """Policies round-trip through their string values."""
        assert DuplicateKeyPolicy("last") is DuplicateKeyPolicy.LAST_WINS
        assert DuplicateKeyPolicy("first") is DuplicateKeyPolicy.FIRST_WINS


class TestDeepNesting:
    """Conversions that must not recurse per nesting level."""

    def test_to_dict_deep_document(self) -> None:
        """to_dict() handles nesting far beyond the recursion limit."""
        depth = 3000
        inner = Entry("n", {"leaf": Scalar("x")})
        for _ in range(depth - 1):
            inner = Entry("n", {"n": Nested(inner)})
        doc = Document((Entry("root", {"n": Nested(inner)}),))

        node = doc.to_dict()["root"]
        levels = 0
        # Walk by hand: dict == would recurse once per level
        while "n" in node:
            node = node["n"]
            levels += 1
        assert levels == depth
        assert node == {"leaf": "x"}


class TestHashing:
    """Entries hold a read-only mapping and are not hashable."""

    def test_entry_is_unhashable(self, sample_entry: Entry) -> None:
        """hash() fails with a clear message for entries."""
        with pytest.raises(TypeError, match="unhashable type: 'Entry'"):
            hash(sample_entry)

    def test_nested_and_document_are_unhashable(self, sample_entry: Entry) -> None:
        """Containers of entries are unhashable as well."""
        with pytest.raises(TypeError, match="unhashable type: 'Nested'"):
            hash(Nested(sample_entry))
        with pytest.raises(TypeError, match="unhashable type: 'Document'"):
            hash(Document((sample_entry,)))

    def test_scalar_is_hashable(self) -> None:
        """Scalars stay usable as set members and dict keys."""
        assert {Scalar("440"), Scalar("440")} == {Scalar("440")}
