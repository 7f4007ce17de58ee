"""Preconditions checked before anything is written."""

import logging
from pathlib import Path

from gitdup.core.errors import InvalidDestination, NotARepository

logger = logging.getLogger(__name__)


def ensure_git_repo(source: Path) -> None:
    """Raise NotARepository unless source has a .git entry.

    A .git file (linked worktree or submodule) counts as well as a directory.
    """
    if not (source / ".git").exists():
        raise NotARepository(source)


def is_sub_path(parent: Path, child: Path) -> bool:
    """Check whether child lies strictly inside parent.

    Uses path containment rather than string prefixes, so ``/work/app-dup``
    is not considered inside ``/work/app``.
    """
    if child == parent:
        return False
    return child.is_relative_to(parent)


def validate_destination(source: Path, dest: Path) -> None:
    """Check that dest can receive a duplicate of source.

    dest must be absolute. Containment is checked on resolved paths so a
    symlinked ancestor cannot hide a destination inside source. Nothing is
    written.

    Raises:
        InvalidDestination: If dest is source, lies inside source, exists as
            something other than a directory, or is a non-empty directory
    """
    real_source = source.resolve()
    # The last component stays literal; a symlink there is rejected below
    real_dest = dest.parent.resolve() / dest.name
    if real_dest == real_source:
        raise InvalidDestination("Destination is the same as the current directory.", dest=dest)
    if is_sub_path(real_source, real_dest):
        raise InvalidDestination(
            "Destination must not be inside the current directory.", dest=dest
        )

    if dest.is_symlink() or dest.exists():
        if dest.is_symlink() or not dest.is_dir():
            raise InvalidDestination(
                f"Destination exists and is not a directory: {dest}", dest=dest
            )
        if any(dest.iterdir()):
            raise InvalidDestination(f"Destination directory must be empty: {dest}", dest=dest)


def prepare_destination(dest: Path) -> None:
    """Create dest (and missing parents) if it does not exist yet."""
    if dest.exists():
        return
    logger.debug("Creating destination %s", dest)
    dest.mkdir(parents=True, exist_ok=True)
