"""Request and result types for a duplication run."""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_REMOTE = "origin"

# A package project is recognised by its manifest; its dependency cache is
# regenerated by the install step instead of being copied.
PACKAGE_MANIFEST = "package.json"
DEPENDENCY_CACHE_DIR = "node_modules"


@dataclass(frozen=True)
class DuplicationRequest:
    """Everything a single duplication run needs to know.

    Attributes:
        source: Project directory to duplicate (the invocation's cwd)
        dest: Destination directory, or None to pick a sibling automatically
        branch: Branch to check out in the duplicate. Takes precedence over
            pr_number when both are given.
        pr_number: Pull request to fetch and check out as ``pr-<number>``
        remote: Remote used for the pull request fetch
        clean: Remove untracked (but not ignored) files after the reset
        verbose: Stream command output instead of capturing it
        install: Run the package manager install for package projects
    """

    source: Path
    dest: Path | None = None
    branch: str | None = None
    pr_number: int | None = None
    remote: str = DEFAULT_REMOTE
    clean: bool = False
    verbose: bool = False
    install: bool = True


@dataclass(frozen=True)
class DuplicationResult:
    """Outcome of a successful run.

    Attributes:
        source: Resolved source directory
        dest: Resolved destination directory
        checked_out: Branch name or ``pr-<number>``, None if nothing was checked out
    """

    source: Path
    dest: Path
    checked_out: str | None


@dataclass(frozen=True)
class PackageManagerChoice:
    """Install command chosen for the duplicate."""

    command: str
    args: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]


def is_package_project(project_dir: Path) -> bool:
    """Check whether project_dir has a package manifest at its root."""
    return (project_dir / PACKAGE_MANIFEST).exists()
