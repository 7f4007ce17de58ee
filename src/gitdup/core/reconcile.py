"""Git reconciliation inside the duplicate.

Every step runs in the destination and never touches the source. Each is a
generator that brackets its git commands with start/done events; a failing
command raises CommandFailure out of the generator.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from gitdup.core.errors import CommandFailure
from gitdup.core.events import (
    BranchCheckoutDone,
    BranchCheckoutStarted,
    CleanDone,
    CleanStarted,
    PrCheckoutDone,
    PrCheckoutStarted,
    ProgressEvent,
    ResetDone,
    ResetStarted,
)
from gitdup.gateway.git.abc import Git

logger = logging.getLogger(__name__)


def pr_branch_name(pr_number: int) -> str:
    """Local branch name a pull request is fetched into."""
    return f"pr-{pr_number}"


def reset_tracked_changes(git: Git, dest: Path, *, verbose: bool) -> Iterator[ProgressEvent]:
    """Bring tracked files back to HEAD; untracked files stay."""
    yield ResetStarted(dest=dest)
    git.reset_hard(dest, verbose=verbose)
    yield ResetDone(dest=dest)


def clean_untracked_files(git: Git, dest: Path, *, verbose: bool) -> Iterator[ProgressEvent]:
    """Remove untracked files while keeping ignored ones."""
    yield CleanStarted(dest=dest)
    git.clean_untracked(dest, verbose=verbose)
    yield CleanDone(dest=dest)


def refresh_remotes(git: Git, dest: Path, *, verbose: bool) -> None:
    """Fetch and prune all remotes, if there are any.

    Best effort: a purely local repository has no remotes, and an unreachable
    remote should not block checking out a branch that already exists locally.
    The checkout that follows reports a missing branch on its own.
    """
    try:
        remotes = git.list_remotes(dest)
        if remotes:
            git.fetch_all_prune(dest, verbose=verbose)
        else:
            logger.debug("No remotes configured in %s, skipping fetch", dest)
    except CommandFailure as e:
        logger.debug("Skipping remote refresh in %s: %s", dest, e)


def checkout_branch(
    git: Git, dest: Path, branch: str, *, verbose: bool
) -> Iterator[ProgressEvent]:
    """Refresh remotes, then check out branch."""
    yield BranchCheckoutStarted(dest=dest, branch=branch)
    refresh_remotes(git, dest, verbose=verbose)
    git.checkout(dest, branch, verbose=verbose)
    yield BranchCheckoutDone(dest=dest, branch=branch)


def checkout_pull_request(
    git: Git, dest: Path, pr_number: int, remote: str, *, verbose: bool
) -> Iterator[ProgressEvent]:
    """Fetch ``pull/<n>/head`` from remote into ``pr-<n>`` and check it out."""
    local_branch = pr_branch_name(pr_number)
    yield PrCheckoutStarted(dest=dest, pr_number=pr_number, remote=remote)
    git.fetch_pr_ref(
        repo_root=dest,
        remote=remote,
        pr_number=pr_number,
        local_branch=local_branch,
        verbose=verbose,
    )
    git.checkout(dest, local_branch, verbose=verbose)
    yield PrCheckoutDone(dest=dest, pr_number=pr_number, remote=remote)
