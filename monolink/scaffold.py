"""Scaffold a new app or package repo."""

from __future__ import annotations

import logging
from pathlib import Path

from monolink.context import RunContext
from monolink.models import RepoKind

logger = logging.getLogger(__name__)

MANIFEST_TEMPLATE = (
    "apps:\n"
    "  # - app-name\n"
    "packages:\n"
    "  # - name: package-name\n"
    "  #   grpc: true\n"
)

INTERFACE_TEMPLATE = "// Define your proto files here\n"

GENERATOR_TEMPLATE = (
    "#!/bin/sh\n"
    "# Replace with actual implementation for your language.\n"
    "# Available: $PROTO_FILE_PATH, $PROTOS_PATH, $OUTPUT_PATH\n"
)


def create_repo(kind: RepoKind, name: str, context: RunContext) -> Path | None:
    """Create a repo skeleton. Returns its path, or None if it already exists."""
    name = name.strip()
    if not name:
        raise ValueError("Name cannot be empty")
    if "/" in name or "\\" in name or name in (".", ".."):
        raise ValueError(f"Invalid repo name: {name!r}")

    config = context.config
    repo_path = context.repo_path(kind, name)
    if repo_path.exists():
        logger.error('❌ %s "%s" already exists', kind.value, name)
        return None

    logger.info("Creating new %s: %s", kind.value, name)

    interface = repo_path / config.interface_file
    interface.parent.mkdir(parents=True, exist_ok=True)
    interface.write_text(INTERFACE_TEMPLATE, encoding="utf-8")

    (repo_path / config.manifest_name).write_text(MANIFEST_TEMPLATE, encoding="utf-8")

    script = repo_path / config.generator_script
    script.write_text(GENERATOR_TEMPLATE, encoding="utf-8")
    script.chmod(0o755)

    logger.info("✅ Created new %s: %s", kind.value, name)
    return repo_path
