"""Recursive project copy with exclusion rules.

Everything is copied, dotfiles and the .git directory included, because
ignored local files (``.env`` and friends) are the reason to duplicate
instead of cloning. Two things are left behind:

- ``.git/index``: git rebuilds it on reset, and a stale copy can make the
  duplicate misreport its working tree state.
- ``node_modules`` at any depth, for package projects: it is large,
  platform-specific and reinstalled afterwards.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from pathlib import Path, PurePath

from gitdup.core.errors import CopyFailure
from gitdup.core.events import CopyDone, CopySkipDependencies, CopyStarted, ProgressEvent
from gitdup.core.types import DEPENDENCY_CACHE_DIR

logger = logging.getLogger(__name__)

GIT_INDEX_PATH = PurePath(".git", "index")


def should_exclude(rel_path: PurePath, *, is_package_project: bool) -> bool:
    """Decide whether a path, relative to the source root, is left out."""
    if rel_path == GIT_INDEX_PATH:
        return True
    if is_package_project and DEPENDENCY_CACHE_DIR in rel_path.parts:
        return True
    return False


def copy_tree(source: Path, dest: Path, *, is_package_project: bool) -> None:
    """Copy source into the existing, empty dest directory.

    Symlinks are copied as links.

    Raises:
        CopyFailure: On any I/O error during the copy
    """

    def ignore(directory: str, names: list[str]) -> set[str]:
        rel_dir = PurePath(os.path.relpath(directory, source))
        skipped = {
            name
            for name in names
            if should_exclude(rel_dir / name, is_package_project=is_package_project)
        }
        if skipped:
            logger.debug("Skipping %s in %s", sorted(skipped), directory)
        return skipped

    try:
        shutil.copytree(source, dest, symlinks=True, ignore=ignore, dirs_exist_ok=True)
    except shutil.Error as e:
        # copytree collects per-file failures and raises them together
        failures = "; ".join(f"{src}: {reason}" for src, _, reason in e.args[0])
        raise CopyFailure(source, dest, failures) from e
    except OSError as e:
        raise CopyFailure(source, dest, str(e)) from e


def run_copy_stage(
    source: Path, dest: Path, *, is_package_project: bool
) -> Iterator[ProgressEvent]:
    """Copy the tree, bracketed by its progress events."""
    if is_package_project:
        yield CopySkipDependencies(source=source)
    yield CopyStarted(source=source, dest=dest)
    copy_tree(source, dest, is_package_project=is_package_project)
    yield CopyDone(dest=dest)
