"""Typed access to loosely structured statement property bags."""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Sequence

from material_flow_graph.core.constants import KNOWN_PROPERTY_KEYS, MATERIAL_FIELD_ALIASES
from material_flow_graph.core.exceptions import StatementFormatError
from material_flow_graph.core.models import Statement, StatementProperty

INPUT_PREFIX = "input_"
OUTPUT_PREFIX = "output_"


def parse_statements(raw: Any) -> list[Statement]:
    """Convert the statement store payload into immutable statements."""
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
        raise StatementFormatError(f"Expected a list of statements, got {type(raw).__name__}")
    return [parse_statement(item, index) for index, item in enumerate(raw)]


def parse_statement(item: Any, index: int = 0) -> Statement:
    if isinstance(item, Statement):
        return item
    if not isinstance(item, Mapping):
        raise StatementFormatError(f"statement #{index}: expected a mapping, got {type(item).__name__}")
    subject_id = _coerce_id(item.get("subject"))
    object_id = _coerce_id(item.get("object"))
    if not subject_id or not object_id:
        raise StatementFormatError(f"statement #{index}: `subject` and `object` are required")
    statement_id = _coerce_id(item.get("uuid") or item.get("id")) or None
    return Statement(
        subject_id=subject_id,
        predicate=str(item.get("predicate") or ""),
        object_id=object_id,
        properties=tuple(_parse_properties(item.get("properties"), index)),
        statement_id=statement_id,
    )


def _parse_properties(raw: Any, index: int) -> Iterable[StatementProperty]:
    if raw is None:
        return
    if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
        raise StatementFormatError(f"statement #{index}: `properties` must be a list")
    for prop in raw:
        if not isinstance(prop, Mapping):
            raise StatementFormatError(f"statement #{index}: property entries must be mappings")
        key = prop.get("key")
        if not key:
            continue
        yield StatementProperty(key=str(key), values=tuple(_iter_values(prop.get("values"))))


def _iter_values(raw: Any) -> Iterable[str]:
    if raw is None:
        return
    if isinstance(raw, (str, int, float, Mapping)):
        raw = [raw]
    for entry in raw:
        value = entry.get("value") if isinstance(entry, Mapping) else entry
        if value is None:
            continue
        if isinstance(value, bool):
            yield "true" if value else "false"
        else:
            yield str(value)


def _coerce_id(value: Any) -> str:
    if isinstance(value, Mapping):
        value = value.get("uuid") or value.get("id")
    if value is None:
        return ""
    return str(value).strip()


def get_property_value(statement: Statement, key: str) -> str | None:
    """Return the first value of the first property named ``key`` that has one."""
    for prop in statement.properties:
        if prop.key == key and prop.values:
            return prop.values[0]
    return None


def lookup_property(statement: Statement, candidates: Sequence[str]) -> str | None:
    """Return the first non-empty value among ``candidates``, in order."""
    for key in candidates:
        value = get_property_value(statement, key)
        if value is not None and value.strip():
            return value.strip()
    return None


def lookup_material_field(statement: Statement, side: str, field: str) -> str | None:
    return lookup_property(statement, MATERIAL_FIELD_ALIASES[(side, field)])


def is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() == "true"


def parse_quantity(value: str | None) -> float | None:
    """Parse a finite number, returning ``None`` for anything else."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def extract_custom_properties(statement: Statement) -> tuple[dict[str, str], dict[str, str]]:
    """Split user-defined properties into input-side and output-side maps.

    Unknown ``input_``/``output_`` keys are stored without their prefix. Unknown keys
    without a prefix predate namespacing and are kept on the input side.
    """
    input_props: dict[str, str] = {}
    output_props: dict[str, str] = {}
    for prop in statement.properties:
        key = prop.key
        value = prop.values[0] if prop.values else None
        if not value or key in KNOWN_PROPERTY_KEYS:
            continue
        if key.startswith(INPUT_PREFIX):
            input_props.setdefault(key[len(INPUT_PREFIX) :], value)
        elif key.startswith(OUTPUT_PREFIX):
            output_props.setdefault(key[len(OUTPUT_PREFIX) :], value)
        else:
            input_props.setdefault(key, value)
    return input_props, output_props
