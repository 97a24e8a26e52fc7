"""End-to-end material flow graph pipeline (normalize -> layout)."""

from __future__ import annotations

from typing import Any

from material_flow_graph.core.config import Settings, get_settings
from material_flow_graph.core.logging import get_logger
from material_flow_graph.core.models import FlowGraph, LayoutGraph
from material_flow_graph.flow_stats import compute_flow_stats, partition_flows
from material_flow_graph.graph import (
    CycleDetector,
    RelationshipBuilder,
    assign_layers,
    build_material_nodes,
    classify_roles,
)
from material_flow_graph.statements import StatementNormalizer

LOGGER = get_logger(__name__)


class FlowGraphPipeline:
    """Runs every stage over the full statement set on each call; nothing is cached."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._normalizer = StatementNormalizer(self._settings)
        self._relationships = RelationshipBuilder(self._settings)
        self._cycles = CycleDetector(self._settings)

    def build(self, raw_statements: Any, raw_entities: Any) -> FlowGraph:
        normalized = self._normalizer.normalize(raw_statements, raw_entities)
        # Roles come only from statements whose endpoints both resolve.
        resolved = [
            statement
            for statement in normalized.statements
            if statement.subject_id in normalized.entities and statement.object_id in normalized.entities
        ]
        roles = classify_roles(resolved)
        nodes = build_material_nodes(
            normalized.entities,
            resolved,
            roles,
            settings=self._settings,
        )
        built = self._relationships.build(normalized.statements, normalized.entities)
        pruned = self._cycles.prune(built.relationships)

        LOGGER.info(
            "pipeline.graph_built",
            node_count=len(nodes),
            edge_count=len(pruned.valid_edges),
            removed_count=len(pruned.removed_edges),
            skipped_count=len(normalized.skipped) + len(built.skipped),
        )
        return FlowGraph(
            nodes=nodes,
            edges=pruned.valid_edges,
            removed_edges=pruned.removed_edges,
            cycle_report=pruned.cycle_report,
            diagnostics=normalized.skipped + built.skipped,
        )

    def layout(self, graph: FlowGraph) -> LayoutGraph:
        return compute_layout(graph)

    def build_layout(self, raw_statements: Any, raw_entities: Any) -> LayoutGraph:
        return self.layout(self.build(raw_statements, raw_entities))


def compute_layout(graph: FlowGraph) -> LayoutGraph:
    """Attach layers, partition flows and aggregate statistics for ``graph``."""
    standard_flows, recycling_flows = partition_flows(graph.edges)
    return LayoutGraph(
        nodes=assign_layers(graph.nodes),
        edges=list(graph.edges),
        standard_flows=standard_flows,
        recycling_flows=recycling_flows,
        stats=compute_flow_stats(graph.edges),
        cycle_report=graph.cycle_report,
        diagnostics=list(graph.diagnostics),
    )


def build_flow_graph(raw_statements: Any, raw_entities: Any, *, settings: Settings | None = None) -> FlowGraph:
    return FlowGraphPipeline(settings).build(raw_statements, raw_entities)


def build_layout_graph(raw_statements: Any, raw_entities: Any, *, settings: Settings | None = None) -> LayoutGraph:
    """Functional wrapper around FlowGraphPipeline."""
    return FlowGraphPipeline(settings).build_layout(raw_statements, raw_entities)
