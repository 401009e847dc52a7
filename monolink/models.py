"""Data models for the monolink dependency engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class RepoKind(enum.Enum):
    APP = "app"
    PACKAGE = "package"


class MaterializeMode(enum.Enum):
    LINK = "link"
    COPY = "copy"


class ArtifactType(enum.Enum):
    CONTENTS = "contents"  # full dependency tree
    PROTOS = "protos"  # interface-definition subtree only


@dataclass(frozen=True)
class PackageDependency:
    """A normalized entry from a manifest's ``packages`` list."""
    name: str
    grpc: bool = False


@dataclass(frozen=True)
class DependencySpec:
    """Dependencies declared by one repo, in declaration order."""
    apps: tuple[str, ...] = ()
    packages: tuple[PackageDependency, ...] = ()

    @property
    def names(self) -> list[str]:
        """All target names, apps first."""
        return [*self.apps, *(pkg.name for pkg in self.packages)]

    @property
    def is_empty(self) -> bool:
        return not self.apps and not self.packages


@dataclass(frozen=True)
class RepoListing:
    """Result from the discovery stage."""
    apps: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()


@dataclass
class WorkspaceConfig:
    """Configuration for a monorepo workspace."""
    apps_dir: str = "apps"
    packages_dir: str = "packages"
    manifest_name: str = "deps.yaml"
    interface_file: str = "protos/index.proto"
    generator_script: str = "gen-grpc-stubs.sh"
    keep_going: bool = False
    generator_timeout: float | None = None
    copy_skip_dirs: list[str] = field(default_factory=lambda: [
        ".git", ".hg", ".svn", "node_modules",
    ])

    def kind_dir(self, kind: RepoKind) -> str:
        return self.apps_dir if kind is RepoKind.APP else self.packages_dir

    @property
    def interface_dir(self) -> str:
        """Directory of the interface file, relative to a repo root."""
        parent, _, _ = self.interface_file.rpartition("/")
        return parent or "."

    @property
    def interface_name(self) -> str:
        return self.interface_file.rpartition("/")[2]
