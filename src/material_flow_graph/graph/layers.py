"""Ordinal layer assignment for layered flow diagrams."""

from __future__ import annotations

from material_flow_graph.core.constants import DEFAULT_LAYER, ROLE_LAYERS, STAGE_LAYERS
from material_flow_graph.core.models import LayoutNode, MaterialNode


def layer_for(lifecycle_stage: str | None, graph_role: str | None = None) -> float:
    """Map a lifecycle stage (or the graph role when no stage is known) to a layer."""
    if lifecycle_stage in STAGE_LAYERS:
        return STAGE_LAYERS[lifecycle_stage]
    if graph_role in ROLE_LAYERS:
        return ROLE_LAYERS[graph_role]
    return DEFAULT_LAYER


def assign_layers(nodes: list[MaterialNode]) -> list[LayoutNode]:
    return [LayoutNode(node=node, layer=layer_for(node.lifecycle_stage, node.graph_role)) for node in nodes]
