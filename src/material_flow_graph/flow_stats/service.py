"""Aggregate flow statistics for reporting."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from material_flow_graph.core.constants import CIRCULAR_FLOW_CATEGORIES
from material_flow_graph.core.models import (
    EnvironmentalImpact,
    FlowDashboard,
    FlowStats,
    MaterialRelationship,
)

# The dashboard counts downcycling as linear, unlike the diagram partition.
DASHBOARD_CIRCULAR_CATEGORIES = frozenset({"RECYCLING", "REUSE", "CIRCULAR"})


def is_circular_flow(edge: MaterialRelationship) -> bool:
    return edge.flow_category in CIRCULAR_FLOW_CATEGORIES or edge.is_circular


def partition_flows(
    edges: Iterable[MaterialRelationship],
) -> tuple[list[MaterialRelationship], list[MaterialRelationship]]:
    """Split edges into ``(standard_flows, recycling_flows)``, preserving order."""
    standard: list[MaterialRelationship] = []
    recycling: list[MaterialRelationship] = []
    for edge in edges:
        (recycling if is_circular_flow(edge) else standard).append(edge)
    return standard, recycling


def compute_flow_stats(edges: Sequence[MaterialRelationship]) -> FlowStats:
    """Count flows and sum input quantities, overall and for circular flows."""
    _, recycling = partition_flows(edges)
    total_quantity = sum(edge.input_quantity for edge in edges)
    recycling_quantity = sum(edge.input_quantity for edge in recycling)
    return FlowStats(
        total_flows=len(edges),
        recycling_flows=len(recycling),
        recycling_rate=_rate(recycling_quantity, total_quantity),
        total_quantity=total_quantity,
        recycling_quantity=recycling_quantity,
    )


def summarize_dashboard(edges: Sequence[MaterialRelationship]) -> FlowDashboard:
    """Build the KPI, breakdown and impact summary shown on the process dashboard."""
    circular_flows = sum(1 for edge in edges if _is_dashboard_circular(edge))

    materials: set[str] = set()
    process_categories: dict[str, int] = {}
    lifecycle_stages: dict[str, int] = {}
    impact = EnvironmentalImpact()
    for edge in edges:
        materials.add(edge.subject_id)
        materials.add(edge.object_id)

        category = edge.process_category or "UNKNOWN"
        process_categories[category] = process_categories.get(category, 0) + 1
        for side in (edge.input_material, edge.output_material):
            if side.lifecycle_stage:
                stage = side.lifecycle_stage
                lifecycle_stages[stage] = lifecycle_stages.get(stage, 0) + 1

        if edge.emissions_total:
            impact.total_emissions += edge.emissions_total
        if edge.material_loss_percent:
            impact.total_material_loss += edge.material_loss_percent
            impact.material_loss_count += 1
        if edge.quality_change_code == "UP":
            impact.upcycled_processes += 1
        elif edge.quality_change_code == "DOWN":
            impact.downcycled_processes += 1

    return FlowDashboard(
        total_flows=len(edges),
        circular_flows=circular_flows,
        circularity_rate=_rate(circular_flows, len(edges)),
        total_materials=len(materials),
        reused_components=lifecycle_stages.get("REUSED_COMPONENT", 0),
        process_categories=process_categories,
        lifecycle_stages=lifecycle_stages,
        environmental=impact,
    )


def _is_dashboard_circular(edge: MaterialRelationship) -> bool:
    if edge.flow_category in DASHBOARD_CIRCULAR_CATEGORIES:
        return True
    return "SECONDARY_INPUT" in (edge.input_material.lifecycle_stage, edge.output_material.lifecycle_stage)


def _rate(part: float, total: float) -> int:
    if total <= 0:
        return 0
    # Half-up rounding, so 12.5 reports as 13.
    return min(100, max(0, math.floor(part / total * 100 + 0.5)))
