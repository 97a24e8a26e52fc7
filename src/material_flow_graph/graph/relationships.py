"""Directed edge construction with duplicate collapsing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from material_flow_graph.core.config import Settings, get_settings
from material_flow_graph.core.logging import get_logger
from material_flow_graph.core.models import (
    DedupKey,
    Entity,
    MaterialRelationship,
    NormalizedStatement,
    SkippedStatement,
)

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class RelationshipBuildResult:
    relationships: list[MaterialRelationship] = field(default_factory=list)
    skipped: list[SkippedStatement] = field(default_factory=list)


class RelationshipBuilder:
    """Turns normalized statements into deduplicated material relationships."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def build(
        self,
        statements: Iterable[NormalizedStatement],
        entities: Mapping[str, Entity],
    ) -> RelationshipBuildResult:
        result = RelationshipBuildResult()
        seen: dict[DedupKey, MaterialRelationship] = {}
        for statement in statements:
            subject = entities.get(statement.subject_id)
            target = entities.get(statement.object_id)
            if subject is None or target is None:
                LOGGER.warning(
                    "relationships.skip_dangling",
                    subject=statement.subject_id,
                    object=statement.object_id,
                    missing_subject=subject is None,
                    missing_object=target is None,
                )
                result.skipped.append(_skipped(statement, "dangling_entity"))
                continue

            quantity = statement.input_material.quantity
            if quantity is None or not math.isfinite(quantity) or quantity <= 0:
                result.skipped.append(_skipped(statement, "invalid_quantity"))
                continue

            relationship = self._relationship(statement, subject, target)
            key = relationship.dedup_key
            if key in seen:
                LOGGER.debug(
                    "relationships.duplicate",
                    subject=statement.subject_id,
                    object=statement.object_id,
                    process=statement.process_name,
                    statement_id=statement.statement.statement_id,
                )
                result.skipped.append(_skipped(statement, "duplicate"))
                continue
            seen[key] = relationship
            result.relationships.append(relationship)
        return result

    def _relationship(
        self,
        statement: NormalizedStatement,
        subject: Entity,
        target: Entity,
    ) -> MaterialRelationship:
        unnamed = self._settings.unnamed_entity_label
        return MaterialRelationship(
            subject_id=subject.id,
            subject_name=subject.name or unnamed,
            object_id=target.id,
            object_name=target.name or unnamed,
            process_name=statement.process_name,
            input_material=statement.input_material,
            output_material=statement.output_material,
            predicate=statement.statement.predicate or self._settings.statement_predicate,
            process_category=statement.process_category,
            flow_category=statement.flow_category,
            is_circular=statement.is_circular,
            emissions_total=statement.emissions_total,
            emissions_unit=statement.emissions_unit,
            material_loss_percent=statement.material_loss_percent,
            quality_change_code=statement.quality_change_code,
            notes=statement.notes,
        )


def build_relationships(
    statements: Iterable[NormalizedStatement],
    entities: Mapping[str, Entity],
    *,
    settings: Settings | None = None,
) -> RelationshipBuildResult:
    """Functional wrapper around RelationshipBuilder."""
    return RelationshipBuilder(settings).build(statements, entities)


def _skipped(statement: NormalizedStatement, reason: str) -> SkippedStatement:
    return SkippedStatement(
        reason=reason,  # type: ignore[arg-type]
        subject_id=statement.subject_id,
        object_id=statement.object_id,
        statement_id=statement.statement.statement_id,
        detail=statement.process_name,
    )
