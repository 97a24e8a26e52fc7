"""Flow statistics and dashboard summaries."""

from .service import compute_flow_stats, is_circular_flow, partition_flows, summarize_dashboard

__all__ = [
    "compute_flow_stats",
    "is_circular_flow",
    "partition_flows",
    "summarize_dashboard",
]
