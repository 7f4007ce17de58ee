"""Fake Git implementation for testing."""

from __future__ import annotations

from pathlib import Path

from gitdup.gateway.git.abc import Git


class FakeGit(Git):
    """In-memory fake that records every git call.

    Constructor Injection:
    ---------------------
    - remotes: Remote names returned by list_remotes()
    - list_remotes_raises: Exception to raise from list_remotes()
    - fetch_all_raises: Exception to raise from fetch_all_prune()
    - fetch_pr_raises: Exception to raise from fetch_pr_ref()
    - checkout_raises: Exception to raise from checkout()
    - reset_raises: Exception to raise from reset_hard()
    - clean_raises: Exception to raise from clean_untracked()

    Mutation Tracking:
    -----------------
    - commands: Ordered list of git argument lists, as the real gateway
      would have run them (``["reset", "--hard"]``, ...)
    - calls: Ordered list of (cwd, verbose) pairs matching ``commands``
    """

    def __init__(
        self,
        *,
        remotes: list[str] | None = None,
        list_remotes_raises: Exception | None = None,
        fetch_all_raises: Exception | None = None,
        fetch_pr_raises: Exception | None = None,
        checkout_raises: Exception | None = None,
        reset_raises: Exception | None = None,
        clean_raises: Exception | None = None,
    ) -> None:
        self._remotes = remotes or []
        self._list_remotes_raises = list_remotes_raises
        self._fetch_all_raises = fetch_all_raises
        self._fetch_pr_raises = fetch_pr_raises
        self._checkout_raises = checkout_raises
        self._reset_raises = reset_raises
        self._clean_raises = clean_raises

        self._commands: list[list[str]] = []
        self._calls: list[tuple[Path, bool]] = []

    def _record(self, cwd: Path, args: list[str], verbose: bool) -> None:
        self._commands.append(args)
        self._calls.append((cwd, verbose))

    def reset_hard(self, cwd: Path, *, verbose: bool) -> None:
        self._record(cwd, ["reset", "--hard"], verbose)
        if self._reset_raises is not None:
            raise self._reset_raises

    def clean_untracked(self, cwd: Path, *, verbose: bool) -> None:
        self._record(cwd, ["clean", "-fd"], verbose)
        if self._clean_raises is not None:
            raise self._clean_raises

    def list_remotes(self, cwd: Path) -> list[str]:
        self._record(cwd, ["remote"], False)
        if self._list_remotes_raises is not None:
            raise self._list_remotes_raises
        return list(self._remotes)

    def fetch_all_prune(self, cwd: Path, *, verbose: bool) -> None:
        self._record(cwd, ["fetch", "--all", "--prune"], verbose)
        if self._fetch_all_raises is not None:
            raise self._fetch_all_raises

    def fetch_pr_ref(
        self, *, repo_root: Path, remote: str, pr_number: int, local_branch: str, verbose: bool
    ) -> None:
        self._record(repo_root, ["fetch", remote, f"pull/{pr_number}/head:{local_branch}"], verbose)
        if self._fetch_pr_raises is not None:
            raise self._fetch_pr_raises

    def checkout(self, cwd: Path, ref: str, *, verbose: bool) -> None:
        self._record(cwd, ["checkout", ref], verbose)
        if self._checkout_raises is not None:
            raise self._checkout_raises

    @property
    def commands(self) -> list[list[str]]:
        """Read-only access to recorded git commands for test assertions."""
        return list(self._commands)

    @property
    def calls(self) -> list[tuple[Path, bool]]:
        """Read-only access to (cwd, verbose) pairs for test assertions."""
        return list(self._calls)
