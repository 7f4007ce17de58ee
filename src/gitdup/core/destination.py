"""Default destination naming.

When no destination is given the duplicate becomes a sibling of the source:
``<name>-dup``, then ``<name>-dup-1``, ``<name>-dup-2`` and so on. The choice
is advisory; validate_destination() re-checks it before copying.
"""

import logging
from pathlib import Path

from gitdup.gateway.time.abc import Time

logger = logging.getLogger(__name__)

# Candidates probed before falling back to a timestamp, counting "<name>-dup"
MAX_NUMBERED_ATTEMPTS = 1000


def default_destination(source: Path, time: Time) -> Path:
    """Pick the first unused sibling name for a duplicate of source."""
    parent = source.parent
    base = source.name

    candidate = parent / f"{base}-dup"
    if not _path_exists(candidate):
        return candidate

    for i in range(1, MAX_NUMBERED_ATTEMPTS):
        candidate = parent / f"{base}-dup-{i}"
        if not _path_exists(candidate):
            return candidate

    stamp = time.now().strftime("%Y%m%d%H%M%S")
    logger.debug("All numbered destinations taken, using timestamp %s", stamp)
    return parent / f"{base}-dup-{stamp}"


def _path_exists(path: Path) -> bool:
    # A dangling symlink still occupies the name
    return path.exists() or path.is_symlink()
