from __future__ import annotations

from material_flow_graph.core.config import Settings
from material_flow_graph.core.models import NormalizedStatement
from material_flow_graph.statements import (
    ProcessForm,
    ProcessMaterial,
    build_process_statements,
    normalize_statements,
    validate_process_form,
)


def _form(**overrides: object) -> ProcessForm:
    values: dict[str, object] = {
        "name": "Crushing",
        "inputs": [ProcessMaterial(entity_id="rubble", quantity=100, unit="kg", name="Rubble")],
        "outputs": [ProcessMaterial(entity_id="aggregate", quantity=90, unit="kg", name="Aggregate")],
    }
    values.update(overrides)
    return ProcessForm(**values)  # type: ignore[arg-type]


def test_valid_form_has_no_errors() -> None:
    assert validate_process_form(_form()) == {}


def test_missing_fields_are_reported() -> None:
    errors = validate_process_form(_form(name="  ", inputs=[], outputs=[]))
    assert set(errors) == {"name", "inputs", "outputs"}


def test_material_on_both_sides_is_rejected() -> None:
    shared = ProcessMaterial(entity_id="steel", quantity=5, unit="t", name="Steel beam")
    errors = validate_process_form(_form(inputs=[shared], outputs=[shared]))
    assert errors == {"duplicates": "The following materials cannot be used as both input and output: Steel beam"}


def test_statements_cover_every_input_output_pair() -> None:
    form = _form(
        inputs=[
            ProcessMaterial(entity_id="rubble", quantity=100, unit="kg"),
            ProcessMaterial(entity_id="rebar", quantity=20, unit="kg"),
        ],
        outputs=[
            ProcessMaterial(entity_id="aggregate", quantity=90, unit="kg"),
            ProcessMaterial(entity_id="scrap", unit="kg"),
        ],
    )
    payloads = build_process_statements(form)
    assert [(item["subject"], item["object"]) for item in payloads] == [
        ("rubble", "aggregate"),
        ("rubble", "scrap"),
        ("rebar", "aggregate"),
        ("rebar", "scrap"),
    ]
    assert {item["predicate"] for item in payloads} == {"IS_INPUT_OF"}
    scrap_keys = [prop["key"] for prop in payloads[1]["properties"]]
    assert "output_quantity" not in scrap_keys


def test_generated_statements_normalize_cleanly() -> None:
    form = _form(
        process_type="mechanical",
        metadata={"processCategory": "recycling", "isRecycling": True, "processName": "ignored"},
        inputs=[
            ProcessMaterial(
                entity_id="rubble",
                quantity=100,
                unit="kg",
                metadata={"lifecycleStage": "WASTE", "origin": "site 4"},
            )
        ],
        outputs=[
            ProcessMaterial(
                entity_id="aggregate",
                quantity=90,
                unit="kg",
                metadata={"lifecycleStage": "SECONDARY_INPUT", "grade": "B"},
            )
        ],
    )
    result = normalize_statements(
        build_process_statements(form),
        [{"id": "rubble", "name": "Rubble"}, {"id": "aggregate", "name": "Aggregate"}],
        settings=Settings(),
    )
    assert result.skipped == []
    [statement] = result.statements
    assert isinstance(statement, NormalizedStatement)
    assert statement.process_name == "Crushing"
    assert statement.process_type == "mechanical"
    assert statement.process_category == "RECYCLING"
    assert statement.is_circular is True
    assert statement.input_material.quantity == 100.0
    assert statement.input_material.lifecycle_stage == "WASTE"
    assert statement.input_material.custom_properties == {"origin": "site 4"}
    assert statement.output_material.quantity == 90.0
    assert statement.output_material.lifecycle_stage == "SECONDARY_INPUT"
    assert statement.output_material.custom_properties == {"grade": "B"}


def test_material_metadata_cannot_override_explicit_quantity() -> None:
    form = _form(
        inputs=[ProcessMaterial(entity_id="rubble", quantity=10, unit="kg", metadata={"quantity": 5, "unit": "t"})],
        outputs=[ProcessMaterial(entity_id="aggregate", quantity=9, unit="kg", metadata={"quantity": 1})],
    )
    result = normalize_statements(
        build_process_statements(form),
        [{"id": "rubble"}, {"id": "aggregate"}],
        settings=Settings(),
    )
    [statement] = result.statements
    assert statement.input_material.quantity == 10.0
    assert statement.input_material.unit == "kg"
    assert statement.output_material.quantity == 9.0
