"""Statement normalization: typed fields out of raw property bags."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from material_flow_graph.core.config import Settings, get_settings
from material_flow_graph.core.constants import (
    CIRCULAR_FLAG_KEYS,
    FLOW_CATEGORIES,
    LIFECYCLE_STAGES,
    PLACEHOLDER_PROCESS_NAMES,
    PROCESS_CATEGORIES,
    QUALITY_CHANGE_ALIASES,
    QUALITY_CHANGE_CODES,
    SOURCE_REF_KEYS,
    TARGET_REF_KEYS,
)
from material_flow_graph.core.exceptions import EntityLookupError, StatementFormatError
from material_flow_graph.core.logging import get_logger
from material_flow_graph.core.models import (
    Entity,
    MaterialSide,
    NormalizedStatement,
    SkippedStatement,
    Statement,
)

from .properties import (
    extract_custom_properties,
    get_property_value,
    is_truthy,
    lookup_material_field,
    lookup_property,
    parse_quantity,
    parse_statements,
)

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class NormalizationResult:
    entities: dict[str, Entity]
    statements: list[NormalizedStatement] = field(default_factory=list)
    skipped: list[SkippedStatement] = field(default_factory=list)


def build_entity_lookup(raw_entities: Any) -> dict[str, Entity]:
    """Index resolved entities by id, keeping the first record for repeated ids."""
    if isinstance(raw_entities, (str, bytes, Mapping)) or not isinstance(raw_entities, Iterable):
        raise EntityLookupError(f"Expected a list of entities, got {type(raw_entities).__name__}")
    lookup: dict[str, Entity] = {}
    for index, item in enumerate(raw_entities):
        entity = _parse_entity(item, index)
        if entity.id in lookup:
            LOGGER.debug("normalizer.duplicate_entity", entity=entity.id)
            continue
        lookup[entity.id] = entity
    return lookup


def _parse_entity(item: Any, index: int) -> Entity:
    if isinstance(item, Entity):
        return item
    if not isinstance(item, Mapping):
        raise EntityLookupError(f"entity #{index}: expected a mapping, got {type(item).__name__}")
    entity_id = item.get("id") or item.get("uuid")
    if not entity_id or not str(entity_id).strip():
        raise EntityLookupError(f"entity #{index}: `id` is required")
    name = item.get("name")
    description = item.get("description")
    return Entity(
        id=str(entity_id).strip(),
        name=str(name) if name else None,
        description=str(description) if description else None,
    )


class StatementNormalizer:
    """Extracts process and material metadata from statements.

    Invalid statements are skipped and reported, never raised: the statement
    store accepts partial writes and carries three generations of key naming.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def normalize(self, raw_statements: Any, raw_entities: Any) -> NormalizationResult:
        statements = parse_statements(raw_statements)
        result = NormalizationResult(entities=build_entity_lookup(raw_entities))
        for statement in statements:
            outcome = self.normalize_statement(statement)
            if isinstance(outcome, SkippedStatement):
                result.skipped.append(outcome)
            else:
                result.statements.append(outcome)
        LOGGER.info(
            "normalizer.done",
            statement_count=len(statements),
            valid_count=len(result.statements),
            skipped_count=len(result.skipped),
        )
        return result

    def normalize_statement(self, statement: Statement) -> NormalizedStatement | SkippedStatement:
        if not isinstance(statement, Statement):
            raise StatementFormatError("normalize_statement expects a Statement instance")

        process_name = (get_property_value(statement, "processName") or "").strip()
        if process_name.lower() in PLACEHOLDER_PROCESS_NAMES:
            return self._skip(statement, "missing_process_name", process_name or None)

        raw_quantity = lookup_material_field(statement, "input", "quantity")
        quantity = parse_quantity(raw_quantity)
        if quantity is None or quantity <= 0:
            return self._skip(statement, "invalid_quantity", raw_quantity)

        input_custom, output_custom = extract_custom_properties(statement)
        input_material = self._material_side(statement, "input", input_custom, quantity=quantity)
        output_material = self._material_side(statement, "output", output_custom)

        return NormalizedStatement(
            statement=statement,
            process_name=process_name,
            input_material=input_material,
            output_material=output_material,
            process_type=get_property_value(statement, "processType") or None,
            process_category=_choice(statement, "processCategory", PROCESS_CATEGORIES),
            flow_category=_choice(statement, "flowCategory", FLOW_CATEGORIES),
            is_circular=any(is_truthy(get_property_value(statement, key)) for key in CIRCULAR_FLAG_KEYS),
            emissions_total=_optional_number(statement, "emissionsTotal"),
            emissions_unit=get_property_value(statement, "emissionsUnit") or self._settings.default_emissions_unit,
            material_loss_percent=_optional_number(statement, "materialLossPercent"),
            quality_change_code=_quality_change(statement),
            notes=get_property_value(statement, "notes") or None,
            source_entity_ref=lookup_property(statement, SOURCE_REF_KEYS),
            target_entity_ref=lookup_property(statement, TARGET_REF_KEYS),
        )

    def _material_side(
        self,
        statement: Statement,
        side: str,
        custom_properties: dict[str, str],
        *,
        quantity: float | None = None,
    ) -> MaterialSide:
        if quantity is None:
            quantity = parse_quantity(lookup_material_field(statement, side, "quantity"))
        stage = _normalize_choice(
            lookup_material_field(statement, side, "lifecycleStage"),
            LIFECYCLE_STAGES,
            field_name=f"{side}_lifecycleStage",
            statement=statement,
        )
        return MaterialSide(
            quantity=quantity,
            unit=lookup_material_field(statement, side, "unit") or "",
            lifecycle_stage=stage,
            category_code=lookup_material_field(statement, side, "categoryCode"),
            is_reused_input=is_truthy(lookup_material_field(statement, side, "isReusedInput")),
            is_recycling_material=is_truthy(lookup_material_field(statement, side, "isRecyclingMaterial")),
            custom_properties=custom_properties,
        )

    @staticmethod
    def _skip(statement: Statement, reason: str, detail: str | None) -> SkippedStatement:
        LOGGER.warning(
            "normalizer.skip_statement",
            reason=reason,
            subject=statement.subject_id,
            object=statement.object_id,
            statement_id=statement.statement_id,
            detail=detail,
        )
        return SkippedStatement(
            reason=reason,  # type: ignore[arg-type]
            subject_id=statement.subject_id,
            object_id=statement.object_id,
            statement_id=statement.statement_id,
            detail=detail,
        )


def normalize_statements(
    raw_statements: Any,
    raw_entities: Any,
    *,
    settings: Settings | None = None,
) -> NormalizationResult:
    """Functional wrapper around StatementNormalizer."""
    return StatementNormalizer(settings).normalize(raw_statements, raw_entities)


def _choice(statement: Statement, key: str, allowed: tuple[str, ...]) -> Any:
    return _normalize_choice(
        get_property_value(statement, key),
        allowed,
        field_name=key,
        statement=statement,
    )


def _normalize_choice(
    value: str | None,
    allowed: tuple[str, ...],
    *,
    field_name: str,
    statement: Statement,
) -> Any:
    if value is None or not value.strip():
        return None
    token = value.strip().upper()
    if token in allowed:
        return token
    LOGGER.info(
        "normalizer.unknown_value",
        field=field_name,
        value=value,
        subject=statement.subject_id,
        object=statement.object_id,
    )
    return None


def _quality_change(statement: Statement) -> Any:
    value = get_property_value(statement, "qualityChangeCode")
    if value is None or not value.strip():
        return None
    token = value.strip().upper()
    token = QUALITY_CHANGE_ALIASES.get(token, token)
    return _normalize_choice(token, QUALITY_CHANGE_CODES, field_name="qualityChangeCode", statement=statement)


def _optional_number(statement: Statement, key: str) -> float | None:
    # Zero carries no information for impact metrics.
    number = parse_quantity(get_property_value(statement, key))
    return number or None
