"""Shared fixtures: throwaway monorepo workspaces."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from monolink.context import RunContext

OK_SCRIPT = '#!/bin/sh\necho "$PROTO_FILE_PATH" > "$OUTPUT_PATH/generated.txt"\n'


def _make_repo(root: Path, kind_dir: str, name: str, deps: dict | str | None = None,
              proto: bool = True, script: str | None = OK_SCRIPT) -> Path:
    repo = root / kind_dir / name
    repo.mkdir(parents=True)
    (repo / "src").mkdir()
    (repo / "src" / "main.txt").write_text(f"{name}\n")
    if proto:
        (repo / "protos").mkdir()
        (repo / "protos" / "index.proto").write_text(f'syntax = "proto3";\npackage {name};\n')
    if script is not None:
        (repo / "gen-grpc-stubs.sh").write_text(script)
    if deps is not None:
        text = deps if isinstance(deps, str) else yaml.safe_dump(deps)
        (repo / "deps.yaml").write_text(text)
    return repo


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    (tmp_path / "apps").mkdir()
    (tmp_path / "packages").mkdir()
    return tmp_path


@pytest.fixture
def context(workspace: Path) -> RunContext:
    return RunContext(root=workspace)


@pytest.fixture
def make_repo(workspace: Path):
    """Create a repo under the workspace: ``make_repo("apps", "web", deps={...})``."""
    def factory(kind_dir: str, name: str, **kwargs) -> Path:
        return _make_repo(workspace, kind_dir, name, **kwargs)
    return factory
