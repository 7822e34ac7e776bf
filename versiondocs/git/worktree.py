"""Isolated checkouts of documented branches through ``git worktree``."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..errors import CommandError
from ..logging import get_logger
from ..process import Runner, run_command


class WorktreeManager:
    """Creates and prunes the worktrees used to build each version."""

    def __init__(self, runner: Runner | None = None, *, cwd: Optional[Path] = None) -> None:
        self._runner = runner or run_command
        self._cwd = cwd
        self.logger = get_logger("git.worktree")

    def add(self, path: Path, branch_ref: str) -> Path:
        """Check out ``branch_ref`` into ``path``."""
        try:
            self._runner(["git", "worktree", "add", str(path), branch_ref], cwd=self._cwd)
        except CommandError as exc:
            raise CommandError(
                exc.command,
                exc.returncode,
                f"failed to add worktree on path {path} for version {branch_ref}: {exc.output}",
            ) from exc
        self.logger.debug("Worktree for %s created in %s", branch_ref, path)
        return path

    def prune(self) -> None:
        """Drop the bookkeeping of worktrees whose directory was removed."""
        self._runner(["git", "worktree", "prune"], cwd=self._cwd)


__all__ = ["WorktreeManager"]
