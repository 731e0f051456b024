"""Device operation services."""

from .collection import CollectionWorkflow, province_for_agent
from .identifiers import resolve_device
from .stats import aggregate_collections, summarize_totals
from .swap import SwapStep, SwapWorkflow

__all__ = [
    "resolve_device",
    "SwapWorkflow",
    "SwapStep",
    "CollectionWorkflow",
    "province_for_agent",
    "aggregate_collections",
    "summarize_totals",
]
