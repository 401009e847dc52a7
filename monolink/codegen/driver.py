"""Drive per-repo gRPC stub generator scripts across dependency edges."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from monolink.analysis.graph_models import DependencyEdge, DependencyGraph, Repo
from monolink.context import RunContext
from monolink.errors import CodegenProcessError
from monolink.exporter.layout import dependency_root
from monolink.models import ArtifactType, RepoKind

logger = logging.getLogger(__name__)

STUB_DIR = "stub"
SERVER_OUTPUT_DIR = "generated"


def run_generator(
    repo_path: Path,
    script: str,
    proto_file: Path,
    protos_dir: Path,
    output_dir: Path,
    timeout: float | None = None,
) -> None:
    """Run ``sh ./<script>`` inside ``repo_path`` with the generator env contract.

    Streams are inherited so generator output is shown live. Blocks until the
    script exits; ``timeout`` is only applied when given.
    """
    env = {
        **os.environ,
        "PROTO_FILE_PATH": str(proto_file.resolve()),
        "PROTOS_PATH": str(protos_dir.resolve()),
        "OUTPUT_PATH": str(output_dir.resolve()),
    }
    subprocess.run(
        ["sh", f"./{script}"],
        cwd=repo_path,
        env=env,
        check=True,
        timeout=timeout,
    )


def generate_client_stub(consumer: Repo, dependency: Repo, context: RunContext) -> Path:
    """Generate client bindings for ``dependency`` inside ``consumer``.

    The dependency's interface file must already be materialized under the
    consumer's ``repo/`` directory.
    """
    config = context.config
    dep_root = dependency_root(context, consumer.kind, consumer.name, dependency.kind, dependency.name)
    protos_dir = dep_root / ArtifactType.PROTOS.value
    proto_file = protos_dir / config.interface_name

    if not proto_file.exists():
        raise CodegenProcessError(
            consumer.name, dependency.name, "client",
            f"{config.interface_name} not found in {protos_dir}",
        )

    output_dir = dep_root / STUB_DIR
    output_dir.mkdir(parents=True, exist_ok=True)

    _invoke(
        context.repo_path(consumer.kind, consumer.name),
        proto_file, protos_dir, output_dir, context,
        consumer=consumer.name, dependency=dependency.name, direction="client",
    )
    return output_dir


def generate_server_stub(repo: Repo, context: RunContext) -> Path:
    """Generate server-side bindings from a repo's own interface file."""
    config = context.config
    repo_path = context.repo_path(repo.kind, repo.name)
    protos_dir = repo_path / config.interface_dir
    proto_file = repo_path / config.interface_file

    if not proto_file.exists():
        raise CodegenProcessError(
            repo.name, None, "server", f"{config.interface_name} not found in {repo_path}",
        )

    output_dir = repo_path / SERVER_OUTPUT_DIR / STUB_DIR
    output_dir.mkdir(parents=True, exist_ok=True)

    _invoke(
        repo_path, proto_file, protos_dir, output_dir, context,
        consumer=repo.name, dependency=None, direction="server",
    )
    return output_dir


def _invoke(repo_path: Path, proto_file: Path, protos_dir: Path, output_dir: Path,
            context: RunContext, consumer: str, dependency: str | None, direction: str) -> None:
    script = context.config.generator_script
    if not (repo_path / script).exists():
        raise CodegenProcessError(consumer, dependency, direction, f"{script} not found in {repo_path}")
    try:
        run_generator(
            repo_path, script, proto_file, protos_dir, output_dir,
            timeout=context.config.generator_timeout,
        )
    except subprocess.CalledProcessError as e:
        raise CodegenProcessError(
            consumer, dependency, direction, f"{script} exited with status {e.returncode}",
        ) from e
    except subprocess.TimeoutExpired as e:
        raise CodegenProcessError(
            consumer, dependency, direction, f"{script} timed out after {e.timeout}s",
        ) from e
    except OSError as e:
        raise CodegenProcessError(consumer, dependency, direction, str(e)) from e


def has_own_interface(repo: Repo, context: RunContext) -> bool:
    repo_path = context.repo_path(repo.kind, repo.name)
    return (
        (repo_path / context.config.interface_file).exists()
        and (repo_path / context.config.generator_script).exists()
    )


def client_stub_edges(graph: DependencyGraph, repo: Repo) -> list[DependencyEdge]:
    """Edges that need client bindings: app edges first, then grpc package edges."""
    edges = [edge for edge in graph.edges(repo) if edge.grpc]
    return (
        [edge for edge in edges if edge.declared_as is RepoKind.APP]
        + [edge for edge in edges if edge.declared_as is RepoKind.PACKAGE]
    )


def generate_all_stubs(graph: DependencyGraph, context: RunContext) -> int:
    """Generate server and client stubs for every repo, apps first.

    Failures are recorded on the context and never stop the run. Returns the
    number of generator runs that succeeded.
    """
    logger.info("Generating gRPC stubs...")
    succeeded = 0

    for repo in graph.nodes:
        if has_own_interface(repo, context):
            try:
                generate_server_stub(repo, context)
                succeeded += 1
            except CodegenProcessError as e:
                context.error(e, repo=repo.name)

        for edge in client_stub_edges(graph, repo):
            dependency = graph.resolve(edge.target_name)
            if dependency is None:
                continue
            label = "app" if edge.declared_as is RepoKind.APP else "package with grpc: true"
            logger.info(
                "Generating gRPC stub for %s -> %s/%s (%s)",
                repo.name, context.config.kind_dir(dependency.kind), dependency.name, label,
            )
            try:
                generate_client_stub(repo, dependency, context)
                succeeded += 1
            except CodegenProcessError as e:
                context.error(e, repo=repo.name, dependency=dependency.name)

    logger.info("✅ gRPC stubs generated")
    return succeeded
