"""Error taxonomy for the dependency engine."""

from __future__ import annotations

from pathlib import Path


class MonolinkError(Exception):
    """Base class for every error the engine raises."""


class SchemaValidationError(MonolinkError):
    """A manifest or config document does not match its schema."""

    def __init__(self, field: str, message: str, path: Path | None = None):
        self.field = field
        self.path = path
        where = f"{path}: " if path else ""
        super().__init__(f"{where}invalid field {field!r}: {message}")


class ManifestFormatError(MonolinkError):
    """A manifest entry has a shape the reader cannot normalize."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        where = f"{path}: " if path else ""
        super().__init__(f"{where}{message}")


class CircularDependencyError(MonolinkError):
    def __init__(self, node: str, path: list[str] | None = None):
        self.node = node
        self.path = list(path or [])
        chain = " -> ".join(self.path) if self.path else node
        super().__init__(f"Circular dependency detected in {node}: {chain}")


class MaterializationError(MonolinkError):
    """Linking or copying one dependency edge failed on the filesystem."""

    def __init__(self, source: Path, target: Path, reason: str):
        self.source = source
        self.target = target
        super().__init__(f"Failed to materialize {source} -> {target}: {reason}")


class CodegenProcessError(MonolinkError):
    """A generator script failed, or its expected input was missing."""

    def __init__(self, consumer: str, dependency: str | None, direction: str, reason: str):
        self.consumer = consumer
        self.dependency = dependency
        self.direction = direction  # "client" | "server"
        target = f"{consumer} -> {dependency}" if dependency else consumer
        super().__init__(f"Error generating gRPC {direction} stub for {target}: {reason}")


class StructuralWarning(UserWarning):
    """A repo is missing a conventionally required file. Recorded, never raised."""

    def __init__(self, repo: str, missing: str, repo_path: Path):
        self.repo = repo
        self.missing = missing
        self.repo_path = repo_path
        super().__init__(f"{missing} not found in {repo_path}")


__all__ = [
    "MonolinkError",
    "SchemaValidationError",
    "ManifestFormatError",
    "CircularDependencyError",
    "MaterializationError",
    "CodegenProcessError",
    "StructuralWarning",
]
