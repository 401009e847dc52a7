"""Load and normalize one repo's ``deps.yaml`` manifest."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, ValidationError

from monolink.errors import ManifestFormatError, SchemaValidationError
from monolink.models import DependencySpec, PackageDependency

logger = logging.getLogger(__name__)


class _PackageEntry(BaseModel):
    name: StrictStr
    grpc: StrictBool = False


class _ManifestSchema(BaseModel):
    # unknown top-level keys are dropped
    model_config = ConfigDict(extra="ignore")

    apps: list[StrictStr] | None = None
    packages: list[Any] | None = None


def read_dependency_spec(repo_path: Path, manifest_name: str = "deps.yaml") -> DependencySpec:
    """Read a repo's manifest. A missing or empty manifest means no dependencies."""
    path = repo_path / manifest_name
    if not path.is_file():
        return DependencySpec()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ManifestFormatError(f"not valid UTF-8: {e}", path=path) from e
    except yaml.YAMLError as e:
        raise ManifestFormatError(f"invalid YAML: {e}", path=path) from e

    return parse_dependency_spec(data, path=path)


def parse_dependency_spec(data: Any, path: Path | None = None) -> DependencySpec:
    """Validate an already-loaded manifest document."""
    if data is None:
        return DependencySpec()
    if not isinstance(data, dict):
        raise SchemaValidationError("<root>", "expected a mapping with 'apps'/'packages'", path=path)

    try:
        manifest = _ManifestSchema.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err["loc"]) or "<root>"
        raise SchemaValidationError(field, err["msg"], path=path) from e

    packages = tuple(
        _normalize_package(entry, index, path)
        for index, entry in enumerate(manifest.packages or [])
    )
    return DependencySpec(apps=tuple(manifest.apps or []), packages=packages)


def _normalize_package(entry: Any, index: int, path: Path | None) -> PackageDependency:
    if isinstance(entry, str):
        return PackageDependency(name=entry)

    if isinstance(entry, dict):
        try:
            parsed = _PackageEntry.model_validate(entry)
        except ValidationError as e:
            raise ManifestFormatError(
                f"invalid package dependency at packages.{index}: {entry!r}", path=path,
            ) from e
        return PackageDependency(name=parsed.name, grpc=parsed.grpc)

    raise ManifestFormatError(
        f"invalid package dependency at packages.{index}: {entry!r}", path=path,
    )
