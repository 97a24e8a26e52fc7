"""Cycle detection and pruning to keep the flow graph acyclic."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from material_flow_graph.core.config import Settings, get_settings
from material_flow_graph.core.logging import get_logger
from material_flow_graph.core.models import (
    CyclePruneResult,
    CycleReport,
    EdgeKey,
    MaterialRelationship,
)

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class _TraversalState:
    """Mutable depth-first search state, owned by a single traversal."""

    visited: set[str] = field(default_factory=set)
    on_stack: set[str] = field(default_factory=set)
    path: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)
    cyclic_edges: dict[EdgeKey, None] = field(default_factory=dict)

    def enter(self, node: str) -> None:
        self.visited.add(node)
        self.on_stack.add(node)
        self.path.append(node)

    def leave(self, node: str) -> None:
        self.on_stack.discard(node)
        self.path.pop()

    def record_cycle(self, node: str, repeated: str) -> None:
        start = self.path.index(repeated)
        self.cycles.append(self.path[start:] + [repeated])
        for index in range(start, len(self.path) - 1):
            self.cyclic_edges[(self.path[index], self.path[index + 1])] = None
        self.cyclic_edges[(node, repeated)] = None


def build_adjacency(edges: Iterable[MaterialRelationship]) -> dict[str, list[str]]:
    """Return ``subject_id -> [object_id, ...]`` in edge order, targets de-duplicated."""
    adjacency: dict[str, list[str]] = {}
    for edge in edges:
        targets = adjacency.setdefault(edge.subject_id, [])
        if edge.object_id not in targets:
            targets.append(edge.object_id)
    return adjacency


def _traverse(adjacency: dict[str, list[str]]) -> _TraversalState:
    state = _TraversalState()
    for root in adjacency:
        if root not in state.visited:
            _visit(root, adjacency, state)
    return state


def _visit(root: str, adjacency: dict[str, list[str]], state: _TraversalState) -> None:
    state.enter(root)
    stack: list[tuple[str, Iterator[str]]] = [(root, iter(adjacency.get(root, ())))]
    while stack:
        node, neighbors = stack[-1]
        descended = False
        for neighbor in neighbors:
            if neighbor in state.on_stack:
                state.record_cycle(node, neighbor)
            elif neighbor not in state.visited:
                state.enter(neighbor)
                stack.append((neighbor, iter(adjacency.get(neighbor, ()))))
                descended = True
                break
        if not descended:
            stack.pop()
            state.leave(node)


def find_cycles(edges: Sequence[MaterialRelationship]) -> list[list[str]]:
    """Return every cycle found by a depth-first pass over ``edges``."""
    return _traverse(build_adjacency(edges)).cycles


class CycleDetector:
    """Removes every edge implicated in a detected cycle.

    No minimal feedback edge set is computed: each edge on any cycle found,
    including the closing back edge, is dropped together with its parallel
    edges, which always leaves a DAG.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def prune(self, edges: Sequence[MaterialRelationship]) -> CyclePruneResult:
        state = _traverse(build_adjacency(edges))
        cyclic = state.cyclic_edges

        valid_edges: list[MaterialRelationship] = []
        removed_edges: list[MaterialRelationship] = []
        for edge in edges:
            if edge.edge_key in cyclic:
                removed_edges.append(edge)
            else:
                valid_edges.append(edge)

        names = _name_lookup(edges)
        report = CycleReport(
            cycles=state.cycles,
            cycle_labels=[self._labels(cycle, names) for cycle in state.cycles],
            cyclic_edges=list(cyclic),
            removed_count=len(removed_edges),
        )
        if state.cycles:
            LOGGER.warning(
                "cycles.pruned",
                total_cycles=report.total_cycles,
                removed_count=report.removed_count,
                cycles=report.cycle_labels,
            )
        return CyclePruneResult(valid_edges=valid_edges, removed_edges=removed_edges, cycle_report=report)

    def _labels(self, cycle: list[str], names: dict[str, str]) -> list[str]:
        width = self._settings.cycle_label_id_chars
        return [names.get(node_id) or f"{node_id[:width]}..." for node_id in cycle]


def detect_and_remove_cycles(
    edges: Sequence[MaterialRelationship],
    *,
    settings: Settings | None = None,
) -> CyclePruneResult:
    """Functional wrapper around CycleDetector."""
    return CycleDetector(settings).prune(edges)


def _name_lookup(edges: Sequence[MaterialRelationship]) -> dict[str, str]:
    names: dict[str, str] = {}
    for edge in edges:
        names.setdefault(edge.subject_id, edge.subject_name)
        names.setdefault(edge.object_id, edge.object_name)
    return names
