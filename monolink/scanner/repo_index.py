"""Discover app and package repos under the workspace root."""

from __future__ import annotations

import logging
from pathlib import Path

from monolink.context import RunContext
from monolink.errors import StructuralWarning
from monolink.models import RepoKind, RepoListing

logger = logging.getLogger(__name__)


def list_repo_names(kind_root: Path) -> list[str]:
    """Immediate subdirectories of a kind root, sorted. Files are ignored."""
    if not kind_root.is_dir():
        return []
    return sorted(p.name for p in kind_root.iterdir() if p.is_dir())


def required_files(context: RunContext) -> list[str]:
    return [context.config.interface_file, context.config.generator_script]


def validate_structure(kind: RepoKind, name: str, context: RunContext) -> list[StructuralWarning]:
    """Record a StructuralWarning for each conventional file the repo lacks."""
    repo_path = context.repo_path(kind, name)
    found: list[StructuralWarning] = []
    for rel in required_files(context):
        if not (repo_path / rel).exists():
            warning = StructuralWarning(name, rel, repo_path)
            context.warn(warning, repo=name)
            found.append(warning)
    return found


def discover_repos(context: RunContext) -> RepoListing:
    """List app and package names; missing required files are advisory."""
    apps = list_repo_names(context.apps_root)
    packages = list_repo_names(context.packages_root)

    for name in apps:
        validate_structure(RepoKind.APP, name, context)
    for name in packages:
        validate_structure(RepoKind.PACKAGE, name, context)

    logger.debug("Discovered %d app(s), %d package(s)", len(apps), len(packages))
    return RepoListing(apps=tuple(apps), packages=tuple(packages))
