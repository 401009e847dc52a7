"""Per-invocation run context shared by every phase."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from monolink.models import RepoKind, WorkspaceConfig

logger = logging.getLogger(__name__)


@dataclass
class Diagnostic:
    level: str  # "warning" | "error"
    message: str
    kind: str = ""  # exception/warning class name
    repo: str | None = None
    dependency: str | None = None
    fatal: bool = False


@dataclass
class RunContext:
    """Workspace roots, configuration and the diagnostics gathered so far."""
    root: Path = field(default_factory=lambda: Path("."))
    config: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def apps_root(self) -> Path:
        return self.root / self.config.apps_dir

    @property
    def packages_root(self) -> Path:
        return self.root / self.config.packages_dir

    def kind_root(self, kind: RepoKind) -> Path:
        return self.apps_root if kind is RepoKind.APP else self.packages_root

    def repo_path(self, kind: RepoKind, name: str) -> Path:
        return self.kind_root(kind) / name

    def warn(self, exc: Exception, repo: str | None = None, dependency: str | None = None) -> None:
        logger.warning("⚠️  %s", exc)
        self.diagnostics.append(Diagnostic(
            level="warning",
            message=str(exc),
            kind=type(exc).__name__,
            repo=repo,
            dependency=dependency,
        ))

    def error(
        self,
        exc: Exception,
        repo: str | None = None,
        dependency: str | None = None,
        fatal: bool = False,
    ) -> None:
        logger.error("❌ %s", exc)
        self.diagnostics.append(Diagnostic(
            level="error",
            message=str(exc),
            kind=type(exc).__name__,
            repo=repo,
            dependency=dependency,
            fatal=fatal,
        ))

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "warning"]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "error"]

    @property
    def ok(self) -> bool:
        """Overall status of the run.

        Non-fatal errors (a failed generator script) are reported but leave
        the run successful.
        """
        return not any(d.fatal for d in self.diagnostics)

    def summary(self) -> dict[str, int]:
        return {"warnings": len(self.warnings), "errors": len(self.errors)}
