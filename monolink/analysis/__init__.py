"""Graph analysis: building the repo graph and checking it for cycles."""

from monolink.analysis.cycle_detector import CycleReport, detect_cycle, ensure_acyclic
from monolink.analysis.dependency_graph import DependencyGraphBuilder, build_graph
from monolink.analysis.graph_models import DependencyEdge, DependencyGraph, Repo

__all__ = [
    "CycleReport",
    "DependencyEdge",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "Repo",
    "build_graph",
    "detect_cycle",
    "ensure_acyclic",
]
