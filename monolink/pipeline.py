"""Pipeline orchestrator: discover -> build graph -> cycle check -> materialize / codegen."""

from __future__ import annotations

import logging
from typing import Callable

from monolink.analysis import DependencyGraph, build_graph, ensure_acyclic
from monolink.codegen import generate_all_stubs
from monolink.context import RunContext
from monolink.errors import MaterializationError
from monolink.exporter import artifact_path, artifact_source, materialize
from monolink.models import MaterializeMode

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def load_graph(context: RunContext) -> DependencyGraph:
    """Build the graph from disk and refuse it if it has a cycle."""
    graph = build_graph(context)
    ensure_acyclic(graph)
    return graph


def process_all_dependencies(
    graph: DependencyGraph,
    mode: MaterializeMode,
    context: RunContext,
    progress: ProgressCallback | None = None,
) -> int:
    """Materialize every resolvable edge, packages before apps.

    Returns the number of artifacts materialized. A MaterializationError
    propagates unless ``context.config.keep_going`` is set, in which case it
    is recorded as a fatal diagnostic and the remaining edges still run.
    """
    action = "Linking" if mode is MaterializeMode.LINK else "Building"
    logger.info("%s all dependencies...", action)

    repos = [*graph.packages, *graph.apps]
    count = 0
    for i, repo in enumerate(repos):
        if progress:
            progress("Processing", i, len(repos))
        logger.info("Processing %s...", repo.name)

        for edge in graph.edges(repo):
            dependency = graph.resolve(edge.target_name)
            if dependency is None:
                logger.debug("Skipping %s -> %s: not in workspace", repo.name, edge.target_name)
                continue

            for artifact in edge.artifacts:
                source = artifact_source(context, dependency.kind, dependency.name, artifact)
                target = artifact_path(
                    context, repo.kind, repo.name, dependency.kind, dependency.name, artifact,
                )
                try:
                    materialize(source, target, mode, skip_dirs=context.config.copy_skip_dirs)
                    count += 1
                except MaterializationError as e:
                    if not context.config.keep_going:
                        raise
                    context.error(e, repo=repo.name, dependency=dependency.name, fatal=True)

    if progress:
        progress("Processing", len(repos), len(repos))

    if context.ok:
        logger.info("✅ All dependencies %s successfully", "linked" if mode is MaterializeMode.LINK else "built")
    return count


def run_materialize(context: RunContext, mode: MaterializeMode,
                    progress: ProgressCallback | None = None) -> int:
    graph = load_graph(context)
    return process_all_dependencies(graph, mode, context, progress=progress)


def run_codegen(context: RunContext) -> int:
    graph = load_graph(context)
    return generate_all_stubs(graph, context)
