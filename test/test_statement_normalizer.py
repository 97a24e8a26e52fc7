from __future__ import annotations

import pytest

from material_flow_graph.core.config import Settings
from material_flow_graph.core.exceptions import EntityLookupError
from material_flow_graph.core.models import NormalizedStatement, SkippedStatement
from material_flow_graph.statements import StatementNormalizer, build_entity_lookup, normalize_statements
from material_flow_graph.statements.properties import parse_statement


def _statement(subject: str = "a", obj: str = "b", **properties: object) -> dict[str, object]:
    return {
        "subject": subject,
        "predicate": "IS_INPUT_OF",
        "object": obj,
        "properties": [{"key": key, "values": [{"value": str(value)}]} for key, value in properties.items()],
    }


def _entities(*ids: str) -> list[dict[str, str]]:
    return [{"id": entity_id, "name": entity_id.upper()} for entity_id in ids]


def _normalize_one(**properties: object) -> NormalizedStatement | SkippedStatement:
    normalizer = StatementNormalizer(Settings())
    return normalizer.normalize_statement(parse_statement(_statement(**properties)))


def test_valid_statement_extracts_process_and_material_fields() -> None:
    result = _normalize_one(
        processName="Crushing",
        processCategory="recycling",
        flowCategory="downcycling",
        input_quantity="100",
        input_unit="kg",
        output_quantity="90",
        output_unit="kg",
        input_lifecycleStage="waste",
        output_categoryCode="AGGREGATE",
        emissionsTotal="12.5",
        materialLossPercent="10",
        qualityChangeCode="DOWN",
        notes="on site",
    )
    assert isinstance(result, NormalizedStatement)
    assert result.process_name == "Crushing"
    assert result.process_category == "RECYCLING"
    assert result.flow_category == "DOWNCYCLING"
    assert result.input_material.quantity == 100.0
    assert result.input_material.unit == "kg"
    assert result.input_material.lifecycle_stage == "WASTE"
    assert result.output_material.quantity == 90.0
    assert result.output_material.category_code == "AGGREGATE"
    assert result.emissions_total == 12.5
    assert result.emissions_unit == "kgCO2e"
    assert result.material_loss_percent == 10.0
    assert result.quality_change_code == "DOWN"
    assert result.notes == "on site"


@pytest.mark.parametrize(
    "properties",
    [
        {"input_quantity": "10"},
        {"processName": "Unknown Process", "input_quantity": "10"},
        {"processName": "   ", "input_quantity": "10"},
    ],
)
def test_missing_or_placeholder_process_name_is_skipped(properties) -> None:
    result = _normalize_one(**properties)
    assert isinstance(result, SkippedStatement)
    assert result.reason == "missing_process_name"


@pytest.mark.parametrize("quantity", ["0", "-5", "lots", ""])
def test_non_positive_or_non_numeric_quantity_is_skipped(quantity) -> None:
    result = _normalize_one(processName="Crushing", input_quantity=quantity)
    assert isinstance(result, SkippedStatement)
    assert result.reason == "invalid_quantity"


def test_legacy_bare_quantity_and_unit_are_accepted() -> None:
    result = _normalize_one(processName="Casting", quantity="5", unit="t")
    assert isinstance(result, NormalizedStatement)
    assert result.input_material.quantity == 5.0
    assert result.input_material.unit == "t"


def test_unknown_enum_values_are_dropped() -> None:
    result = _normalize_one(
        processName="Casting",
        input_quantity="5",
        flowCategory="SIDEWAYS",
        input_lifecycleStage="LIMBO",
        qualityChangeCode="BETTER",
    )
    assert isinstance(result, NormalizedStatement)
    assert result.flow_category is None
    assert result.input_material.lifecycle_stage is None
    assert result.quality_change_code is None


def test_quality_change_aliases_and_circular_flags() -> None:
    result = _normalize_one(
        processName="Refurbish",
        input_quantity="1",
        qualityChangeCode="upcycled",
        isDeconstruction="TRUE",
        sourceBuildingUuid="building-1",
    )
    assert isinstance(result, NormalizedStatement)
    assert result.quality_change_code == "UP"
    assert result.is_circular is True
    assert result.source_entity_ref == "building-1"


def test_zero_impact_metrics_are_treated_as_absent() -> None:
    result = _normalize_one(processName="Casting", input_quantity="5", emissionsTotal="0", emissionsUnit="tCO2e")
    assert isinstance(result, NormalizedStatement)
    assert result.emissions_total is None
    assert result.emissions_unit == "tCO2e"


def test_normalize_collects_valid_and_skipped_statements() -> None:
    statements = [
        _statement("a", "b", processName="Crushing", input_quantity="10"),
        _statement("b", "c", processName="Casting", input_quantity="zero"),
        _statement("c", "d", input_quantity="3"),
    ]
    result = normalize_statements(statements, _entities("a", "b", "c", "d"), settings=Settings())
    assert [item.process_name for item in result.statements] == ["Crushing"]
    assert [item.reason for item in result.skipped] == ["invalid_quantity", "missing_process_name"]
    assert list(result.entities) == ["a", "b", "c", "d"]


def test_entity_lookup_keeps_first_record_and_accepts_uuid_key() -> None:
    lookup = build_entity_lookup(
        [
            {"uuid": "x", "name": "Concrete", "description": "Structural"},
            {"id": "x", "name": "Duplicate"},
        ]
    )
    assert lookup["x"].name == "Concrete"
    assert lookup["x"].description == "Structural"


@pytest.mark.parametrize("entities", [None, "x", [{"name": "no id"}], ["x"]])
def test_entity_lookup_errors_are_fatal(entities) -> None:
    with pytest.raises(EntityLookupError):
        build_entity_lookup(entities)
