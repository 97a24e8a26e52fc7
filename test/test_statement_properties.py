from __future__ import annotations

import pytest

from material_flow_graph.core.exceptions import StatementFormatError
from material_flow_graph.statements.properties import (
    extract_custom_properties,
    get_property_value,
    lookup_material_field,
    parse_quantity,
    parse_statement,
    parse_statements,
)


def _statement(*properties: tuple[str, object]) -> dict[str, object]:
    return {
        "uuid": "stmt-1",
        "subject": "a",
        "predicate": "IS_INPUT_OF",
        "object": "b",
        "properties": [{"key": key, "values": [{"value": value}]} for key, value in properties],
    }


def test_lookup_prefers_namespaced_key_over_legacy_aliases() -> None:
    statement = parse_statement(
        _statement(
            ("inputLifecycleStage", "WASTE"),
            ("input_inputLifecycleStage", "COMPONENT"),
            ("input_lifecycleStage", "SECONDARY_INPUT"),
        )
    )
    assert lookup_material_field(statement, "input", "lifecycleStage") == "SECONDARY_INPUT"


def test_lookup_falls_back_through_double_namespaced_then_bare_key() -> None:
    double = parse_statement(_statement(("output_outputCategoryCode", "STEEL"), ("outputCategoryCode", "TIMBER")))
    bare = parse_statement(_statement(("outputCategoryCode", "TIMBER")))
    assert lookup_material_field(double, "output", "categoryCode") == "STEEL"
    assert lookup_material_field(bare, "output", "categoryCode") == "TIMBER"


def test_lookup_skips_empty_values() -> None:
    statement = parse_statement(_statement(("input_quantity", "  "), ("quantity", "12.5")))
    assert lookup_material_field(statement, "input", "quantity") == "12.5"


def test_first_property_occurrence_wins() -> None:
    statement = parse_statement(_statement(("processName", "Crushing"), ("processName", "Sorting")))
    assert get_property_value(statement, "processName") == "Crushing"


def test_occurrence_without_values_is_passed_over() -> None:
    statement = parse_statement(
        {
            "subject": "a",
            "object": "b",
            "properties": [
                {"key": "input_quantity", "values": []},
                {"key": "input_quantity", "values": [{"value": "7"}]},
            ],
        }
    )
    assert get_property_value(statement, "input_quantity") == "7"


def test_custom_properties_are_partitioned_by_prefix() -> None:
    statement = parse_statement(
        _statement(
            ("processName", "Crushing"),
            ("input_quantity", "10"),
            ("input_moisture", "4%"),
            ("output_grade", "B"),
            ("supplier", "ACME"),
            ("input_lifecycleStage", "WASTE"),
        )
    )
    input_props, output_props = extract_custom_properties(statement)
    assert input_props == {"moisture": "4%", "supplier": "ACME"}
    assert output_props == {"grade": "B"}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("100", 100.0), (" 2.5e1 ", 25.0), ("-3", -3.0), ("abc", None), ("", None), (None, None), ("nan", None), ("inf", None)],
)
def test_parse_quantity_accepts_only_finite_numbers(raw, expected) -> None:
    assert parse_quantity(raw) == expected


def test_parse_statements_coerces_non_string_values() -> None:
    [statement] = parse_statements([_statement(("input_quantity", 100), ("isRecycling", True))])
    assert get_property_value(statement, "input_quantity") == "100"
    assert get_property_value(statement, "isRecycling") == "true"
    assert statement.statement_id == "stmt-1"


@pytest.mark.parametrize("payload", [None, "statements", {"subject": "a"}, 42])
def test_parse_statements_rejects_non_list_payloads(payload) -> None:
    with pytest.raises(StatementFormatError):
        parse_statements(payload)


def test_parse_statement_requires_subject_and_object() -> None:
    with pytest.raises(StatementFormatError):
        parse_statements([{"subject": "a", "predicate": "IS_INPUT_OF", "properties": []}])
    with pytest.raises(StatementFormatError):
        parse_statements(["not a mapping"])
