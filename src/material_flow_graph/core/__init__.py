"""Shared core utilities for the material flow graph processor."""

from .config import Settings, get_settings
from .exceptions import (
    EntityLookupError,
    MaterialFlowError,
    StatementFetchError,
    StatementFormatError,
)
from .logging import configure_logging
from .models import (
    CyclePruneResult,
    CycleReport,
    Entity,
    FlowDashboard,
    FlowGraph,
    FlowStats,
    LayoutGraph,
    LayoutNode,
    MaterialNode,
    MaterialRelationship,
    MaterialSide,
    NormalizedStatement,
    SkippedStatement,
    Statement,
    StatementProperty,
)

__all__ = [
    "Settings",
    "Entity",
    "Statement",
    "StatementProperty",
    "MaterialSide",
    "NormalizedStatement",
    "SkippedStatement",
    "MaterialNode",
    "MaterialRelationship",
    "CycleReport",
    "CyclePruneResult",
    "FlowStats",
    "FlowDashboard",
    "FlowGraph",
    "LayoutNode",
    "LayoutGraph",
    "MaterialFlowError",
    "StatementFormatError",
    "EntityLookupError",
    "StatementFetchError",
    "get_settings",
    "configure_logging",
]
