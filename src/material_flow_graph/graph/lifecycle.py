"""Lifecycle stage resolution and material node construction."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from material_flow_graph.core.config import Settings, get_settings
from material_flow_graph.core.constants import ROLE_DEFAULT_STAGES
from material_flow_graph.core.models import (
    Entity,
    GraphRole,
    LifecycleStage,
    MaterialNode,
    NormalizedStatement,
)


def resolve_lifecycle_stage(
    entity_id: str,
    graph_role: GraphRole | None,
    statements: Sequence[NormalizedStatement],
) -> LifecycleStage | None:
    """Resolve the lifecycle stage of ``entity_id``.

    Priority: an explicit stage on any touching statement (first match in
    statement order), then the reuse and recycling flags, then the default
    stage of the graph role. Each statement is read from the side the entity
    occupies: input side as subject, output side as object.
    """
    sides = [side for side in (statement.side_for(entity_id) for statement in statements) if side]
    for side in sides:
        if side.lifecycle_stage:
            return side.lifecycle_stage
    if any(side.is_reused_input for side in sides):
        return "REUSED_COMPONENT"
    if any(side.is_recycling_material for side in sides):
        return "SECONDARY_INPUT"
    if graph_role is None:
        return None
    return ROLE_DEFAULT_STAGES.get(graph_role)  # type: ignore[return-value]


def resolve_category_code(entity_id: str, statements: Sequence[NormalizedStatement]) -> str | None:
    for statement in statements:
        side = statement.side_for(entity_id)
        if side and side.category_code:
            return side.category_code
    return None


def index_statements(statements: Iterable[NormalizedStatement]) -> dict[str, list[NormalizedStatement]]:
    """Group statements by every entity they touch, preserving input order."""
    index: dict[str, list[NormalizedStatement]] = {}
    for statement in statements:
        index.setdefault(statement.subject_id, []).append(statement)
        if statement.object_id != statement.subject_id:
            index.setdefault(statement.object_id, []).append(statement)
    return index


def build_material_nodes(
    entities: Mapping[str, Entity],
    statements: Sequence[NormalizedStatement],
    roles: Mapping[str, GraphRole],
    *,
    settings: Settings | None = None,
) -> list[MaterialNode]:
    """Create one node per resolved entity that participates in ``statements``."""
    resolved_settings = settings or get_settings()
    touching = index_statements(statements)
    nodes: list[MaterialNode] = []
    for entity_id, entity in entities.items():
        role = roles.get(entity_id)
        if role is None:
            continue
        related = touching.get(entity_id, [])
        nodes.append(
            MaterialNode(
                id=entity_id,
                display_name=entity.name or resolved_settings.unnamed_entity_label,
                graph_role=role,
                lifecycle_stage=resolve_lifecycle_stage(entity_id, role, related),
                category_code=resolve_category_code(entity_id, related),
                description=entity.description or resolved_settings.uncategorized_label,
                source_entity_ref=_first(statement.source_entity_ref for statement in related),
                target_entity_ref=_first(statement.target_entity_ref for statement in related),
            )
        )
    return nodes


def _first(values: Iterable[str | None]) -> str | None:
    for value in values:
        if value:
            return value
    return None
