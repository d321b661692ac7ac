"""Tests for contribution kind checks."""

from __future__ import annotations

import pytest

from sitehooks.plugins.validation import Kind, TypeCheck, assert_types, describe_kind, matches


def _noop() -> None:
    return None


class TestMatches:
    """Each kind against representative values."""

    def test_callable(self) -> None:
        assert matches(_noop, Kind.CALLABLE)
        assert matches(lambda: 1, Kind.CALLABLE)
        assert not matches("fn", Kind.CALLABLE)

    def test_sequence_accepts_list_and_tuple_not_str(self) -> None:
        assert matches([1, 2], Kind.SEQUENCE)
        assert matches((), Kind.SEQUENCE)
        assert not matches("abc", Kind.SEQUENCE)
        assert not matches({"a": 1}, Kind.SEQUENCE)

    def test_record(self) -> None:
        assert matches({}, Kind.RECORD)
        assert not matches([("a", 1)], Kind.RECORD)

    def test_text(self) -> None:
        assert matches("", Kind.TEXT)
        assert not matches(b"bytes", Kind.TEXT)

    def test_callable_sequence(self) -> None:
        assert matches([_noop, len], Kind.CALLABLE_SEQUENCE)
        assert matches([], Kind.CALLABLE_SEQUENCE)
        assert not matches([_noop, "x"], Kind.CALLABLE_SEQUENCE)

    def test_text_sequence(self) -> None:
        assert matches(["A", "B"], Kind.TEXT_SEQUENCE)
        assert not matches(["A", 1], Kind.TEXT_SEQUENCE)


class TestDescribeKind:
    """Observed-kind labels used in diagnostics."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "nothing"),
            ("x", "text"),
            ({"a": 1}, "record"),
            ([], "sequence"),
            (_noop, "callable"),
            (42, "int"),
            (3.5, "float"),
        ],
    )
    def test_labels(self, value: object, expected: str) -> None:
        assert describe_kind(value) == expected

    def test_sequence_names_item_kinds(self) -> None:
        assert describe_kind([_noop, 1]) == "sequence of callable, int"
        assert describe_kind(["a", "b"]) == "sequence of text"


class TestAssertTypes:
    """The contribution gate itself."""

    def test_none_is_always_valid(self) -> None:
        assert assert_types(None, [Kind.CALLABLE]) == TypeCheck(True)
        assert assert_types(None, [Kind.RECORD, Kind.TEXT]).valid

    def test_match_any_kind(self) -> None:
        assert assert_types("Comp", [Kind.TEXT, Kind.TEXT_SEQUENCE]).valid
        assert assert_types(["A", "B"], [Kind.TEXT, Kind.TEXT_SEQUENCE]).valid

    def test_mismatch_message_names_expected_and_actual(self) -> None:
        check = assert_types(42, [Kind.CALLABLE, Kind.CALLABLE_SEQUENCE])
        assert not check.valid
        assert check.message == "expected callable or sequence of callables, got int"

    def test_valid_has_empty_message(self) -> None:
        assert assert_types(_noop, [Kind.CALLABLE]).message == ""

    def test_empty_kinds_rejected(self) -> None:
        with pytest.raises(ValueError):
            assert_types(_noop, [])

    def test_does_not_mutate_value(self) -> None:
        value = ["A", 1]
        assert_types(value, [Kind.TEXT_SEQUENCE])
        assert value == ["A", 1]
