"""Git collaborators: branch discovery and worktrees."""

from .branches import BASE_REMOTE, BranchResolver, filter_excluded, short_name
from .worktree import WorktreeManager

__all__ = ["BASE_REMOTE", "BranchResolver", "WorktreeManager", "filter_excluded", "short_name"]
