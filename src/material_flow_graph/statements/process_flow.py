"""Build statement payloads for a process form (inputs x outputs)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from material_flow_graph.core.constants import IS_INPUT_OF

from .properties import INPUT_PREFIX, OUTPUT_PREFIX

_RESERVED_PROCESS_KEYS = frozenset({"processName", "processType", "quantity", "unit"})
_RESERVED_MATERIAL_KEYS = frozenset({"quantity", "unit"})


@dataclass(slots=True)
class ProcessMaterial:
    entity_id: str
    quantity: float | None = None
    unit: str = ""
    name: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class ProcessForm:
    name: str
    inputs: list[ProcessMaterial] = field(default_factory=list)
    outputs: list[ProcessMaterial] = field(default_factory=list)
    process_type: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


def validate_process_form(form: ProcessForm) -> dict[str, str]:
    """Return a mapping of form field to error message; empty when valid."""
    errors: dict[str, str] = {}
    if not (form.name or "").strip():
        errors["name"] = "Process name is required"
    if not form.inputs:
        errors["inputs"] = "At least one input material is required"
    if not form.outputs:
        errors["outputs"] = "At least one output material is required"

    output_ids = {material.entity_id for material in form.outputs}
    duplicates: list[str] = []
    for material in form.inputs:
        if material.entity_id in output_ids:
            label = material.name or material.entity_id
            if label not in duplicates:
                duplicates.append(label)
    if duplicates:
        errors["duplicates"] = (
            "The following materials cannot be used as both input and output: " + ", ".join(duplicates)
        )
    return errors


def build_process_statements(form: ProcessForm, *, predicate: str = IS_INPUT_OF) -> list[dict[str, Any]]:
    """Expand a process form into one statement payload per input/output pair.

    Only input -> output statements are produced; a reverse ``IS_OUTPUT_OF``
    statement would close a cycle with every pair. Material metadata is namespaced
    with ``input_``/``output_`` so both sides can share a statement.
    """
    process_properties = _process_properties(form)
    payloads: list[dict[str, Any]] = []
    for source in form.inputs:
        for target in form.outputs:
            properties = list(process_properties)
            properties.extend(_namespaced(INPUT_PREFIX, source.metadata))
            properties.extend(_namespaced(OUTPUT_PREFIX, target.metadata))
            properties.append(_property("input_quantity", source.quantity))
            properties.append(_property("input_unit", source.unit))
            if target.quantity is not None:
                properties.append(_property("output_quantity", target.quantity))
            if target.unit:
                properties.append(_property("output_unit", target.unit))
            payloads.append(
                {
                    "subject": source.entity_id,
                    "predicate": predicate,
                    "object": target.entity_id,
                    "properties": [prop for prop in properties if prop is not None],
                }
            )
    return payloads


def _process_properties(form: ProcessForm) -> list[dict[str, Any] | None]:
    properties = [_property("processName", form.name.strip())]
    if form.process_type:
        properties.append(_property("processType", form.process_type))
    for key, value in form.metadata.items():
        if key in _RESERVED_PROCESS_KEYS:
            continue
        properties.append(_property(key, value))
    return properties


def _namespaced(prefix: str, metadata: Mapping[str, Any]) -> list[dict[str, Any] | None]:
    return [
        _property(f"{prefix}{key}", value) for key, value in metadata.items() if key not in _RESERVED_MATERIAL_KEYS
    ]


def _property(key: str, value: Any) -> dict[str, Any] | None:
    if value is None:
        return None
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return {"key": key, "values": [{"value": text}]}
