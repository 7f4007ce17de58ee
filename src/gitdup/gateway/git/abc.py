"""Abstract interface for the git operations a duplicate needs.

Every method runs inside an existing working copy. Mutations accept a
``verbose`` flag: when set, git's own output streams to the terminal instead
of being captured for error reporting.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class Git(ABC):
    """Abstract git operations for dependency injection."""

    @abstractmethod
    def reset_hard(self, cwd: Path, *, verbose: bool) -> None:
        """Discard tracked modifications (``git reset --hard``).

        Untracked files are left in place.

        Raises:
            CommandFailure: If git exits non-zero
        """
        ...

    @abstractmethod
    def clean_untracked(self, cwd: Path, *, verbose: bool) -> None:
        """Remove untracked files and directories (``git clean -fd``).

        Ignored files are kept, so local secrets such as ``.env`` survive.

        Raises:
            CommandFailure: If git exits non-zero
        """
        ...

    @abstractmethod
    def list_remotes(self, cwd: Path) -> list[str]:
        """List configured remote names (``git remote``).

        Raises:
            CommandFailure: If git exits non-zero
        """
        ...

    @abstractmethod
    def fetch_all_prune(self, cwd: Path, *, verbose: bool) -> None:
        """Fetch every remote and prune stale refs (``git fetch --all --prune``).

        Raises:
            CommandFailure: If git exits non-zero
        """
        ...

    @abstractmethod
    def fetch_pr_ref(
        self, *, repo_root: Path, remote: str, pr_number: int, local_branch: str, verbose: bool
    ) -> None:
        """Fetch a pull request head into a local branch.

        Command: git fetch <remote> pull/<number>/head:<local_branch>

        Raises:
            CommandFailure: If git exits non-zero
        """
        ...

    @abstractmethod
    def checkout(self, cwd: Path, ref: str, *, verbose: bool) -> None:
        """Check out a branch or ref (``git checkout <ref>``).

        Raises:
            CommandFailure: If git exits non-zero, e.g. the ref does not exist
        """
        ...
