"""Deterministic workspace paths for materialized dependencies."""

from __future__ import annotations

from pathlib import Path

from monolink.context import RunContext
from monolink.models import ArtifactType, RepoKind

# Directory inside each consumer repo that holds its materialized dependencies
VENDOR_DIR = "repo"


def dependency_root(context: RunContext, consumer_kind: RepoKind, consumer: str,
                    dep_kind: RepoKind, dep: str) -> Path:
    """``<consumer>/repo/<dep kind dir>/<dep>``."""
    return (
        context.repo_path(consumer_kind, consumer)
        / VENDOR_DIR
        / context.config.kind_dir(dep_kind)
        / dep
    )


def artifact_path(context: RunContext, consumer_kind: RepoKind, consumer: str,
                  dep_kind: RepoKind, dep: str, artifact: ArtifactType) -> Path:
    return dependency_root(context, consumer_kind, consumer, dep_kind, dep) / artifact.value


def artifact_source(context: RunContext, dep_kind: RepoKind, dep: str, artifact: ArtifactType) -> Path:
    """Where an artifact of a dependency lives in the dependency's own repo."""
    repo_path = context.repo_path(dep_kind, dep)
    if artifact is ArtifactType.CONTENTS:
        return repo_path
    return repo_path / context.config.interface_dir
