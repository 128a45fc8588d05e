"""Solver-Modul (PQ-Baum, Greedy-Zeitvergabe, Kandidaten-Suche)."""

from .pq_tree import NodeType, PQNode, PQTree
from .allocation import TimeAllocator
from .scheduler import RunStats, SchedulingEngine

__all__ = [
    "NodeType",
    "PQNode",
    "PQTree",
    "TimeAllocator",
    "RunStats",
    "SchedulingEngine",
]
