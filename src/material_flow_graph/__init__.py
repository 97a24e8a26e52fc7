"""Material flow graph processor: statements in, acyclic layered flow graph out."""

from .core import Settings, configure_logging, get_settings
from .flow_stats import compute_flow_stats, summarize_dashboard
from .workflow import FlowGraphPipeline, MaterialFlowService, build_flow_graph, build_layout_graph

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "compute_flow_stats",
    "summarize_dashboard",
    "FlowGraphPipeline",
    "MaterialFlowService",
    "build_flow_graph",
    "build_layout_graph",
]
