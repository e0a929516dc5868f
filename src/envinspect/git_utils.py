"""Git utilities for checking whether files are tracked."""

import logging
from pathlib import Path

from git import Git
from git.exc import GitCommandError, GitCommandNotFound

logger = logging.getLogger(__name__)


def is_git_repository(path: str | Path) -> bool:
    """Check if ``path`` is inside a git working tree."""
    try:
        Git(str(path)).rev_parse("--git-dir")
        return True
    except (GitCommandError, GitCommandNotFound, OSError):
        return False


def is_tracked(repo_root: str | Path, relative_path: str) -> bool:
    """Check if git tracks ``relative_path`` (relative to ``repo_root``).

    Anything that prevents a definite answer (not a repository, git missing,
    file untracked) counts as not tracked.
    """
    try:
        output = Git(str(repo_root)).ls_files("--error-unmatch", "--", relative_path)
    except GitCommandError:
        return False
    except (GitCommandNotFound, OSError) as e:
        logger.debug(f"git unavailable while checking {relative_path}: {e}")
        return False
    return bool(output.strip())
