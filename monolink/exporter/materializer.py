"""Project one dependency into a consumer workspace, as a symlink or a copy."""

from __future__ import annotations

import fnmatch
import logging
import os
import shutil
from pathlib import Path

from monolink.errors import MaterializationError
from monolink.models import MaterializeMode, WorkspaceConfig

logger = logging.getLogger(__name__)


def materialize(
    source: Path,
    target: Path,
    mode: MaterializeMode,
    skip_dirs: list[str] | None = None,
) -> None:
    """Replace ``target`` with a link to, or a copy of, ``source``.

    Whatever already sits at ``target`` is removed first, so repeated runs
    converge on the requested mode.
    """
    if skip_dirs is None:
        skip_dirs = WorkspaceConfig().copy_skip_dirs
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        _remove_existing(target)

        if mode is MaterializeMode.LINK:
            resolved = source.resolve()
            if not resolved.exists():
                raise FileNotFoundError(f"source does not exist: {resolved}")
            os.symlink(resolved, target, target_is_directory=True)
            logger.info("🔗 Linked %s to %s", source, target)
        else:
            shutil.copytree(
                source.resolve(),
                target,
                symlinks=True,
                ignore=_ignore_patterns(skip_dirs),
            )
            logger.info("📦 Copied %s to %s", source, target)
    except OSError as e:
        raise MaterializationError(source, target, str(e)) from e


def _remove_existing(target: Path) -> None:
    if target.is_symlink():
        target.unlink()
    elif target.is_dir():
        shutil.rmtree(target)
    elif target.exists():
        target.unlink()


def _ignore_patterns(skip_dirs: list[str]):
    def ignore(directory: str, names: list[str]) -> set[str]:
        return {
            name for name in names
            if any(fnmatch.fnmatch(name, pattern) for pattern in skip_dirs)
        }
    return ignore
