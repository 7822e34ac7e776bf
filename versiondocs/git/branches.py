"""Discovery of the branches to document."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..logging import get_logger
from ..process import Runner, run_command

BASE_REMOTE = "origin/"
BRANCH_VERSION_PATTERN = "origin/v*"


def short_name(branch_ref: str) -> str:
    """Strip the remote prefix from ``branch_ref`` (``origin/v1.4`` -> ``v1.4``)."""
    if branch_ref.startswith(BASE_REMOTE):
        return branch_ref[len(BASE_REMOTE):]
    return branch_ref


class BranchResolver:
    """Lists the remote branches to build, experimental branch first."""

    def __init__(
        self,
        runner: Runner | None = None,
        *,
        cwd: Optional[Path] = None,
        pattern: str = BRANCH_VERSION_PATTERN,
    ) -> None:
        self._runner = runner or run_command
        self._cwd = cwd
        self._pattern = pattern
        self.logger = get_logger("git.branches")

    def list_remote_branches(self) -> List[str]:
        """Return the remote version branches in descending lexical order."""
        raw = self._runner(
            ["git", "branch", "--remotes", "--list", self._pattern], cwd=self._cwd
        )
        branches = [line.strip() for line in raw.splitlines() if line.strip()]
        branches.sort(reverse=True)
        return branches

    def resolve(
        self,
        experimental: str = "",
        excluded: Iterable[str] = (),
    ) -> List[str]:
        """Return the ordered branch references to document."""
        listed = self.list_remote_branches()

        branches: List[str] = []
        if experimental:
            experimental_ref = BASE_REMOTE + experimental
            if experimental_ref not in listed:
                branches.append(experimental_ref)
        branches.extend(listed)

        branches = filter_excluded(branches, excluded)
        if not branches:
            self.logger.warning("No branch to build.")
        else:
            self.logger.debug("Branches to build: %s", ", ".join(branches))
        return branches


def filter_excluded(branches: Sequence[str], excluded: Iterable[str]) -> List[str]:
    """Drop every branch whose short name appears in ``excluded``."""
    excluded_names = {short_name(name.strip()) for name in excluded if name and name.strip()}
    if not excluded_names:
        return list(branches)
    return [branch for branch in branches if short_name(branch) not in excluded_names]


__all__ = ["BASE_REMOTE", "BranchResolver", "filter_excluded", "short_name"]
