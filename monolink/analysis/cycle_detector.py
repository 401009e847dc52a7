"""Cycle detection over the repo graph using three-color DFS."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from monolink.analysis.graph_models import DependencyGraph, Repo
from monolink.errors import CircularDependencyError

logger = logging.getLogger(__name__)


@dataclass
class CycleReport:
    found: bool = False
    node: str | None = None  # node on the cycle where it was detected
    path: list[str] = field(default_factory=list)  # the cycle, first node repeated at the end
    visited: list[str] = field(default_factory=list)  # visit order


def detect_cycle(graph: DependencyGraph) -> CycleReport:
    """Return the first cycle found, checking every component of the graph.

    Nodes are keyed by name, and dependency targets resolve through
    ``graph.resolve`` so an app shadows a package of the same name.
    Dangling targets are ignored.
    """
    report = CycleReport()
    visited: set[str] = set()
    stack: list[str] = []
    on_stack: set[str] = set()

    def visit(repo: Repo) -> bool:
        if repo.name in on_stack:
            idx = stack.index(repo.name)
            report.found = True
            report.node = repo.name
            report.path = stack[idx:] + [repo.name]
            return True
        if repo.name in visited:
            return False

        visited.add(repo.name)
        report.visited.append(repo.name)
        stack.append(repo.name)
        on_stack.add(repo.name)

        for dep_name in repo.deps.names:
            dep = graph.resolve(dep_name)
            if dep is not None and visit(dep):
                return True

        stack.pop()
        on_stack.discard(repo.name)
        return False

    for repo in graph.nodes:
        if visit(repo):
            logger.debug("Cycle reached from %s: %s", repo.name, " -> ".join(report.path))
            break

    return report


def ensure_acyclic(graph: DependencyGraph) -> None:
    """Raise CircularDependencyError if the graph has any cycle."""
    report = detect_cycle(graph)
    if report.found:
        raise CircularDependencyError(report.node or "", report.path)
