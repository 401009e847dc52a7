"""Tests for graph building, name resolution and cycle detection."""

import pytest

from monolink.analysis import DependencyGraph, Repo, build_graph, detect_cycle, ensure_acyclic
from monolink.errors import CircularDependencyError, SchemaValidationError
from monolink.models import ArtifactType, DependencySpec, PackageDependency, RepoKind


# ── Helpers ───────────────────────────────────────────────────

def _app(name, apps=(), packages=()):
    return Repo(name, RepoKind.APP, _spec(apps, packages))

def _pkg(name, apps=(), packages=()):
    return Repo(name, RepoKind.PACKAGE, _spec(apps, packages))

def _spec(apps, packages):
    return DependencySpec(
        apps=tuple(apps),
        packages=tuple(p if isinstance(p, PackageDependency) else PackageDependency(p) for p in packages),
    )

def _graph(apps=(), packages=()):
    return DependencyGraph.from_repos(list(apps), list(packages))

# ── Graph builder ─────────────────────────────────────────────

class TestGraphBuilder:
    def test_build_from_disk(self, context, make_repo):
        make_repo("apps", "web", deps={"apps": ["api"], "packages": ["utils"]})
        make_repo("apps", "api", deps={"packages": [{"name": "auth", "grpc": True}]})
        make_repo("packages", "utils")
        make_repo("packages", "auth")

        graph = build_graph(context)

        assert [r.name for r in graph.apps] == ["api", "web"]
        assert [r.name for r in graph.packages] == ["auth", "utils"]
        web = graph.resolve("web")
        assert web.kind is RepoKind.APP
        assert web.deps.apps == ("api",)
        assert graph.resolve("api").deps.packages == (PackageDependency("auth", True),)

    def test_dangling_dependency_is_kept(self, context, make_repo):
        make_repo("apps", "web", deps={"packages": ["ghost"]})
        graph = build_graph(context)
        assert graph.resolve("ghost") is None
        assert [e.target_name for e in graph.dangling()] == ["ghost"]

    def test_malformed_manifest_aborts(self, context, make_repo):
        make_repo("apps", "web", deps={"apps": "api"})
        with pytest.raises(SchemaValidationError):
            build_graph(context)

class TestResolution:
    def test_app_wins_name_collision(self):
        graph = _graph(apps=[_app("shared")], packages=[_pkg("shared"), _pkg("x", packages=["shared"])])
        assert graph.resolve("shared").kind is RepoKind.APP

    def test_edges_carry_artifacts(self):
        consumer = _app("web", apps=["api"], packages=["utils", PackageDependency("auth", True)])
        graph = _graph(apps=[consumer])
        edges = graph.edges(consumer)
        assert [(e.target_name, e.artifacts) for e in edges] == [
            ("utils", (ArtifactType.CONTENTS,)),
            ("auth", (ArtifactType.CONTENTS, ArtifactType.PROTOS)),
            ("api", (ArtifactType.PROTOS,)),
        ]

# ── Cycle detection ───────────────────────────────────────────

class TestCycleDetector:
    def test_empty_graph(self):
        report = detect_cycle(_graph())
        assert not report.found
        assert report.visited == []

    def test_acyclic_visits_every_node_once(self):
        graph = _graph(
            apps=[_app("web", apps=["api"], packages=["utils"]), _app("api", packages=["utils", "auth"])],
            packages=[_pkg("utils"), _pkg("auth", packages=["utils"]), _pkg("lonely")],
        )
        report = detect_cycle(graph)
        assert not report.found
        assert sorted(report.visited) == ["api", "auth", "lonely", "utils", "web"]
        assert len(report.visited) == len(set(report.visited))

    def test_self_dependency(self):
        report = detect_cycle(_graph(packages=[_pkg("a", packages=["a"])]))
        assert report.found
        assert report.node == "a"
        assert report.path == ["a", "a"]

    def test_cycle_in_disconnected_component(self):
        graph = _graph(
            apps=[_app("web", packages=["utils"])],
            packages=[_pkg("utils"), _pkg("b", packages=["c"]), _pkg("c", packages=["d"]), _pkg("d", packages=["b"])],
        )
        report = detect_cycle(graph)
        assert report.found
        assert report.node in {"b", "c", "d"}
        assert report.path[0] == report.path[-1]
        assert set(report.path) == {"b", "c", "d"}

    def test_cycle_through_apps_and_packages(self):
        graph = _graph(
            apps=[_app("web", packages=["core"])],
            packages=[_pkg("core", apps=["web"])],
        )
        report = detect_cycle(graph)
        assert report.found
        assert report.node in {"web", "core"}

    def test_dangling_edges_ignored(self):
        graph = _graph(apps=[_app("web", apps=["nowhere"], packages=["ghost"])])
        assert not detect_cycle(graph).found

    def test_collision_resolves_to_app(self):
        # "shared" the package would close a cycle; "shared" the app does not.
        graph = _graph(
            apps=[_app("shared")],
            packages=[_pkg("shared", packages=["x"]), _pkg("x", packages=["shared"])],
        )
        assert not detect_cycle(graph).found

    def test_ensure_acyclic_raises(self):
        graph = _graph(packages=[_pkg("a", packages=["b"]), _pkg("b", packages=["a"])])
        with pytest.raises(CircularDependencyError) as exc:
            ensure_acyclic(graph)
        assert exc.value.node in {"a", "b"}
        assert "a -> b -> a" in str(exc.value) or "b -> a -> b" in str(exc.value)
