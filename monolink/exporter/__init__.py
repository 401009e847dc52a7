"""Exporter layer: materializing dependencies into consumer workspaces."""

from monolink.exporter.layout import artifact_path, artifact_source, dependency_root
from monolink.exporter.materializer import materialize

__all__ = ["artifact_path", "artifact_source", "dependency_root", "materialize"]
