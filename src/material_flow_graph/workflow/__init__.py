"""Pipeline orchestration and the statement store boundary."""

from .fetch import MaterialFlowService, StatementFetchResult, StatementSource, participating_ids
from .pipeline import FlowGraphPipeline, build_flow_graph, build_layout_graph, compute_layout

__all__ = [
    "FlowGraphPipeline",
    "MaterialFlowService",
    "StatementFetchResult",
    "StatementSource",
    "build_flow_graph",
    "build_layout_graph",
    "compute_layout",
    "participating_ids",
]
