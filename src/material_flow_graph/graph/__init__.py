"""Graph stages: roles, lifecycle stages, relationships, cycles and layers."""

from .cycles import CycleDetector, build_adjacency, detect_and_remove_cycles, find_cycles
from .layers import assign_layers, layer_for
from .lifecycle import (
    build_material_nodes,
    index_statements,
    resolve_category_code,
    resolve_lifecycle_stage,
)
from .relationships import RelationshipBuilder, RelationshipBuildResult, build_relationships
from .roles import classify_roles

__all__ = [
    "CycleDetector",
    "build_adjacency",
    "detect_and_remove_cycles",
    "find_cycles",
    "assign_layers",
    "layer_for",
    "build_material_nodes",
    "index_statements",
    "resolve_category_code",
    "resolve_lifecycle_stage",
    "RelationshipBuilder",
    "RelationshipBuildResult",
    "build_relationships",
    "classify_roles",
]
