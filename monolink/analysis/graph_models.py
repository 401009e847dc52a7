"""Data models for the repo dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field

from monolink.models import ArtifactType, DependencySpec, RepoKind


@dataclass(frozen=True)
class Repo:
    name: str
    kind: RepoKind
    deps: DependencySpec = field(default_factory=DependencySpec)


@dataclass(frozen=True)
class DependencyEdge:
    consumer: Repo
    target_name: str
    declared_as: RepoKind  # which manifest list the edge came from
    artifacts: tuple[ArtifactType, ...]
    grpc: bool = False


@dataclass(frozen=True)
class DependencyGraph:
    apps: tuple[Repo, ...] = ()
    packages: tuple[Repo, ...] = ()
    name_index: dict[str, list[Repo]] = field(default_factory=dict, compare=False)  # name -> [repos], apps first

    @classmethod
    def from_repos(cls, apps: list[Repo], packages: list[Repo]) -> DependencyGraph:
        index: dict[str, list[Repo]] = {}
        for repo in [*apps, *packages]:
            index.setdefault(repo.name, []).append(repo)
        return cls(apps=tuple(apps), packages=tuple(packages), name_index=index)

    @property
    def nodes(self) -> list[Repo]:
        """All repos, apps then packages."""
        return [*self.apps, *self.packages]

    def resolve(self, name: str) -> Repo | None:
        """First repo named ``name`` in apps-then-packages order, or None if dangling."""
        matches = self.name_index.get(name)
        return matches[0] if matches else None

    def edges(self, repo: Repo) -> list[DependencyEdge]:
        """Edges declared by ``repo``: package edges first, then app edges."""
        edges: list[DependencyEdge] = []
        for pkg in repo.deps.packages:
            artifacts = (ArtifactType.CONTENTS, ArtifactType.PROTOS) if pkg.grpc else (ArtifactType.CONTENTS,)
            edges.append(DependencyEdge(
                consumer=repo,
                target_name=pkg.name,
                declared_as=RepoKind.PACKAGE,
                artifacts=artifacts,
                grpc=pkg.grpc,
            ))
        for app in repo.deps.apps:
            edges.append(DependencyEdge(
                consumer=repo,
                target_name=app,
                declared_as=RepoKind.APP,
                artifacts=(ArtifactType.PROTOS,),
                grpc=True,
            ))
        return edges

    def dangling(self) -> list[DependencyEdge]:
        """Edges whose target name matches no discovered repo."""
        return [
            edge
            for repo in self.nodes
            for edge in self.edges(repo)
            if self.resolve(edge.target_name) is None
        ]
