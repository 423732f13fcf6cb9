from __future__ import annotations

import pytest

from ctj.exceptions import InputError
from ctj.pipeline.assemble import assemble, build_record, column_key
from ctj.types import HeaderMode, TypedValue, record_to_json


def test_no_header_synthesizes_column_keys() -> None:
    table = assemble([["a", "1", "true"]], HeaderMode.DISABLED)

    assert table == [
        {
            "column_0": TypedValue.string("a"),
            "column_1": TypedValue.integer(1),
            "column_2": TypedValue.boolean(True),
        }
    ]


def test_header_row_names_columns_and_is_not_emitted() -> None:
    table = assemble([["name", "age"], ["Bob", "35"]], HeaderMode.ENABLED)

    assert table == [{"name": TypedValue.string("Bob"), "age": TypedValue.integer(35)}]


def test_header_mode_accepts_enum_values() -> None:
    assert assemble([["name"], ["Bob"]], "enabled") == [{"name": TypedValue.string("Bob")}]


def test_row_wider_than_header_gets_positional_keys() -> None:
    table = assemble([["a"], ["x", "y"]], HeaderMode.ENABLED)

    assert list(table[0]) == ["a", "column_1"]
    assert record_to_json(table[0]) == {"a": "x", "column_1": "y"}


def test_row_narrower_than_header_is_not_padded() -> None:
    table = assemble([["a", "b", "c"], ["1"]], HeaderMode.ENABLED)

    assert record_to_json(table[0]) == {"a": 1}


def test_keys_follow_column_order_not_alphabetical() -> None:
    table = assemble([["zeta", "alpha", "mid"], ["1", "2", "3"]])

    assert list(table[0]) == ["zeta", "alpha", "mid"]


def test_duplicate_header_names_last_value_wins() -> None:
    table = assemble([["id", "id"], ["1", "2"]])

    assert record_to_json(table[0]) == {"id": 2}


def test_header_name_colliding_with_synthesized_key() -> None:
    # Header names position 0 "column_1"; position 1 is past the header.
    table = assemble([["column_1"], ["first", "second"]])

    assert list(table[0]) == ["column_1"]
    assert table[0]["column_1"] == TypedValue.string("second")


def test_empty_input_yields_empty_table_in_both_modes() -> None:
    assert assemble([], HeaderMode.ENABLED) == []
    assert assemble([], HeaderMode.DISABLED) == []


def test_header_only_input_yields_empty_table() -> None:
    assert assemble([["name", "age", "city"]]) == []


def test_header_list_is_not_mutated() -> None:
    header = ["a"]
    rows = [header, ["1", "2"], ["3"]]

    assemble(rows)

    assert header == ["a"]


def test_rows_may_be_any_iterable() -> None:
    rows = iter([["n"], ["1"], ["2"]])

    assert [record_to_json(record) for record in assemble(rows)] == [{"n": 1}, {"n": 2}]


def test_mixed_values_are_classified_per_cell() -> None:
    rows = [
        ["name", "age", "active", "score", "notes"],
        ["John", "30", "true", "95.5", "Good student"],
        ["Jane", "25", "false", "88.0", ""],
        ["Bob", "", "TRUE", "92.3", "Excellent"],
    ]

    table = [record_to_json(record) for record in assemble(rows)]

    assert table == [
        {"name": "John", "age": 30, "active": True, "score": 95.5, "notes": "Good student"},
        {"name": "Jane", "age": 25, "active": False, "score": 88.0, "notes": ""},
        {"name": "Bob", "age": "", "active": True, "score": 92.3, "notes": "Excellent"},
    ]


def test_strict_width_rejects_ragged_rows_with_header() -> None:
    with pytest.raises(InputError) as excinfo:
        assemble([["name", "age"], ["John", "30"], ["Jane", "25", "extra"]], strict_width=True)

    assert excinfo.value.row == 3
    assert "expected 2" in str(excinfo.value)


def test_strict_width_without_header_uses_first_row_width() -> None:
    with pytest.raises(InputError) as excinfo:
        assemble([["a", "b"], ["c"]], HeaderMode.DISABLED, strict_width=True)

    assert excinfo.value.row == 2


def test_strict_width_accepts_uniform_rows() -> None:
    table = assemble([["a", "b"], ["1", "2"], ["3", "4"]], strict_width=True)

    assert len(table) == 2


def test_column_key_prefers_header_name() -> None:
    assert column_key(0, ["name"]) == "name"
    assert column_key(1, ["name"]) == "column_1"
    assert column_key(3) == "column_3"


def test_build_record_without_header() -> None:
    assert build_record(["x", "2.5"]) == {
        "column_0": TypedValue.string("x"),
        "column_1": TypedValue.float_(2.5),
    }
