"""Dependency graph builder — discovers repos and reads their manifests."""

from __future__ import annotations

import logging

from monolink.analysis.graph_models import DependencyGraph, Repo
from monolink.context import RunContext
from monolink.models import RepoKind
from monolink.scanner import discover_repos, read_dependency_spec

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Build a dependency graph from the repos found on disk."""

    def __init__(self, context: RunContext):
        self.context = context

    def build(self) -> DependencyGraph:
        listing = discover_repos(self.context)

        apps = [self._load(RepoKind.APP, name) for name in listing.apps]
        packages = [self._load(RepoKind.PACKAGE, name) for name in listing.packages]
        graph = DependencyGraph.from_repos(apps, packages)

        for edge in graph.dangling():
            logger.debug(
                "%s declares %s, which is not in the workspace",
                edge.consumer.name, edge.target_name,
            )
        return graph

    def _load(self, kind: RepoKind, name: str) -> Repo:
        repo_path = self.context.repo_path(kind, name)
        deps = read_dependency_spec(repo_path, self.context.config.manifest_name)
        return Repo(name=name, kind=kind, deps=deps)


def build_graph(context: RunContext) -> DependencyGraph:
    return DependencyGraphBuilder(context).build()
