"""Production implementation of Git using subprocess."""

from pathlib import Path

from gitdup.gateway.git.abc import Git
from gitdup.subprocess_utils import run_subprocess_with_context


class RealGit(Git):
    """Runs the git executable inside the given working copy."""

    def reset_hard(self, cwd: Path, *, verbose: bool) -> None:
        run_subprocess_with_context(
            cmd=["git", "reset", "--hard"],
            operation_context="reset tracked changes",
            cwd=cwd,
            stream_output=verbose,
        )

    def clean_untracked(self, cwd: Path, *, verbose: bool) -> None:
        # No -x: ignored files are exactly what a duplicate must keep
        run_subprocess_with_context(
            cmd=["git", "clean", "-fd"],
            operation_context="remove untracked files",
            cwd=cwd,
            stream_output=verbose,
        )

    def list_remotes(self, cwd: Path) -> list[str]:
        result = run_subprocess_with_context(
            cmd=["git", "remote"],
            operation_context="list remotes",
            cwd=cwd,
        )
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def fetch_all_prune(self, cwd: Path, *, verbose: bool) -> None:
        run_subprocess_with_context(
            cmd=["git", "fetch", "--all", "--prune"],
            operation_context="fetch all remotes",
            cwd=cwd,
            stream_output=verbose,
        )

    def fetch_pr_ref(
        self, *, repo_root: Path, remote: str, pr_number: int, local_branch: str, verbose: bool
    ) -> None:
        """Fetch a PR ref into a local branch.

        Uses GitHub's special refs/pull/<number>/head reference.
        """
        run_subprocess_with_context(
            cmd=["git", "fetch", remote, f"pull/{pr_number}/head:{local_branch}"],
            operation_context=f"fetch PR #{pr_number} into branch '{local_branch}'",
            cwd=repo_root,
            stream_output=verbose,
        )

    def checkout(self, cwd: Path, ref: str, *, verbose: bool) -> None:
        run_subprocess_with_context(
            cmd=["git", "checkout", ref],
            operation_context=f"checkout '{ref}'",
            cwd=cwd,
            stream_output=verbose,
        )
