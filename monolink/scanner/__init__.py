"""Scanner layer: repo discovery and manifest reading."""

from monolink.scanner.manifest_reader import parse_dependency_spec, read_dependency_spec
from monolink.scanner.repo_index import discover_repos, list_repo_names, validate_structure

__all__ = [
    "discover_repos",
    "list_repo_names",
    "parse_dependency_spec",
    "read_dependency_spec",
    "validate_structure",
]
