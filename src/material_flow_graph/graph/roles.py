"""Graph role classification from subject/object adjacency."""

from __future__ import annotations

from typing import Iterable

from material_flow_graph.core.models import GraphRole, NormalizedStatement, Statement


def classify_roles(statements: Iterable[NormalizedStatement | Statement]) -> dict[str, GraphRole]:
    """Return the graph role of every id referenced by ``statements``.

    An id that is never an object is an input, one that is never a subject is
    an output; an id present in both sets is intermediate.
    """
    pairs = [_endpoints(statement) for statement in statements]
    all_subjects = {subject for subject, _ in pairs}
    all_objects = {obj for _, obj in pairs}

    roles: dict[str, GraphRole] = {}
    for subject, obj in pairs:
        for entity_id in (subject, obj):
            if entity_id in roles:
                continue
            roles[entity_id] = _role_for(entity_id, all_subjects, all_objects)
    return roles


def _role_for(entity_id: str, subjects: set[str], objects: set[str]) -> GraphRole:
    if entity_id in subjects and entity_id in objects:
        return "intermediate"
    if entity_id in subjects:
        return "input"
    return "output"


def _endpoints(statement: NormalizedStatement | Statement) -> tuple[str, str]:
    if isinstance(statement, NormalizedStatement):
        statement = statement.statement
    return statement.subject_id, statement.object_id
