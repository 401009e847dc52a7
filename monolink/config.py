"""Optional ``monolink.yaml`` workspace configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, ValidationError

from monolink.errors import ManifestFormatError, SchemaValidationError
from monolink.models import WorkspaceConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "monolink.yaml"


class _ConfigSchema(BaseModel):
    model_config = ConfigDict(extra="forbid")

    apps_dir: StrictStr | None = None
    packages_dir: StrictStr | None = None
    manifest_name: StrictStr | None = None
    interface_file: StrictStr | None = None
    generator_script: StrictStr | None = None
    keep_going: StrictBool | None = None
    generator_timeout: float | None = None
    copy_skip_dirs: list[StrictStr] | None = None


def load_workspace_config(root: Path) -> WorkspaceConfig:
    """Load ``monolink.yaml`` from the workspace root, falling back to defaults."""
    config = WorkspaceConfig()
    path = root / CONFIG_FILE
    if not path.is_file():
        return config

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ManifestFormatError(f"not valid UTF-8: {e}", path=path) from e
    except yaml.YAMLError as e:
        raise ManifestFormatError(f"invalid YAML: {e}", path=path) from e
    if data is None:
        return config
    if not isinstance(data, dict):
        raise SchemaValidationError("<root>", "expected a mapping", path=path)

    try:
        parsed = _ConfigSchema.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err["loc"]) or "<root>"
        raise SchemaValidationError(field, err["msg"], path=path) from e

    for key, value in parsed.model_dump(exclude_none=True).items():
        setattr(config, key, value)
    logger.debug("Loaded workspace config from %s", path)
    return config
