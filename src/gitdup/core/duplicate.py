"""Duplication workflow.

Stages run strictly in order and each one completes before the next starts:

    validate -> resolve destination -> copy -> reset -> [clean]
             -> [branch | pull request] -> [install]

A failing stage raises out of the generator and nothing after it runs. A
failed run may leave a partially populated destination behind; it is not
rolled back.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

from gitdup.core.context import GitDupContext
from gitdup.core.destination import default_destination
from gitdup.core.events import CompletionEvent, DuplicationDone, ProgressEvent
from gitdup.core.package_manager import install_dependencies
from gitdup.core.reconcile import (
    checkout_branch,
    checkout_pull_request,
    clean_untracked_files,
    pr_branch_name,
    reset_tracked_changes,
)
from gitdup.core.tree_copy import run_copy_stage
from gitdup.core.types import DuplicationRequest, DuplicationResult, is_package_project
from gitdup.core.validation import ensure_git_repo, prepare_destination, validate_destination

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


def resolve_destination(ctx: GitDupContext, source: Path, dest: Path | None) -> Path:
    """Absolute destination path; relative paths are taken from the source."""
    if dest is None:
        return default_destination(source, ctx.time)
    # abspath, not resolve(): a symlinked destination must stay visible to validation
    return Path(os.path.abspath(source / dest.expanduser()))


def execute_duplication(
    ctx: GitDupContext, request: DuplicationRequest
) -> Generator[ProgressEvent | CompletionEvent[DuplicationResult], None, None]:
    """Duplicate request.source, yielding progress events as stages finish.

    Yields:
        ProgressEvent for each stage boundary, then a CompletionEvent with the
        DuplicationResult

    Raises:
        NotARepository: If the source has no .git
        InvalidDestination: If the destination cannot receive the copy
        CopyFailure: If copying fails
        CommandFailure: If a git or install command fails
    """
    source = request.source.resolve()
    ensure_git_repo(source)

    dest = resolve_destination(ctx, source, request.dest)
    validate_destination(source, dest)
    prepare_destination(dest)

    package_project = is_package_project(source)
    logger.debug("Duplicating %s to %s (package project: %s)", source, dest, package_project)

    yield from run_copy_stage(source, dest, is_package_project=package_project)

    yield from reset_tracked_changes(ctx.git, dest, verbose=request.verbose)
    if request.clean:
        yield from clean_untracked_files(ctx.git, dest, verbose=request.verbose)

    checked_out: str | None = None
    if request.branch:
        if request.pr_number is not None:
            logger.debug("Branch %s given, ignoring PR #%d", request.branch, request.pr_number)
        yield from checkout_branch(ctx.git, dest, request.branch, verbose=request.verbose)
        checked_out = request.branch
    elif request.pr_number is not None:
        yield from checkout_pull_request(
            ctx.git, dest, request.pr_number, request.remote, verbose=request.verbose
        )
        checked_out = pr_branch_name(request.pr_number)

    if package_project:
        yield from install_dependencies(
            ctx.shell, dest, install=request.install, verbose=request.verbose
        )

    yield DuplicationDone(dest=dest)
    yield CompletionEvent(DuplicationResult(source=source, dest=dest, checked_out=checked_out))


def duplicate(
    ctx: GitDupContext,
    request: DuplicationRequest,
    *,
    on_progress: ProgressCallback | None = None,
) -> DuplicationResult:
    """Run the duplication, forwarding progress events to on_progress.

    Returns:
        The DuplicationResult of the run

    Raises:
        GitDupError: Whatever the failing stage raised
        RuntimeError: If the workflow ends without a result
    """
    for event in execute_duplication(ctx, request):
        if isinstance(event, CompletionEvent):
            return event.result
        if on_progress is not None:
            on_progress(event)
    raise RuntimeError("Duplication ended without completion")
