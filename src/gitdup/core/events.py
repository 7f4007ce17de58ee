"""Progress events emitted while a duplicate is built.

Each event is a frozen dataclass with a literal ``kind`` discriminant, and
ProgressEvent is their union, so consumers can ``match`` exhaustively.
Events are yielded in execution order; a CompletionEvent carrying the
result always comes last on success.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Literal, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CopySkipDependencies:
    """Dependency-cache directories will not be copied."""

    source: Path
    kind: Literal["copy:skip-node_modules"] = "copy:skip-node_modules"


@dataclass(frozen=True)
class CopyStarted:
    source: Path
    dest: Path
    kind: Literal["copy:start"] = "copy:start"


@dataclass(frozen=True)
class CopyDone:
    dest: Path
    kind: Literal["copy:done"] = "copy:done"


@dataclass(frozen=True)
class ResetStarted:
    dest: Path
    kind: Literal["git:reset:start"] = "git:reset:start"


@dataclass(frozen=True)
class ResetDone:
    dest: Path
    kind: Literal["git:reset:done"] = "git:reset:done"


@dataclass(frozen=True)
class CleanStarted:
    dest: Path
    kind: Literal["git:clean:start"] = "git:clean:start"


@dataclass(frozen=True)
class CleanDone:
    dest: Path
    kind: Literal["git:clean:done"] = "git:clean:done"


@dataclass(frozen=True)
class BranchCheckoutStarted:
    dest: Path
    branch: str
    kind: Literal["git:branch:start"] = "git:branch:start"


@dataclass(frozen=True)
class BranchCheckoutDone:
    dest: Path
    branch: str
    kind: Literal["git:branch:done"] = "git:branch:done"


@dataclass(frozen=True)
class PrCheckoutStarted:
    dest: Path
    pr_number: int
    remote: str
    kind: Literal["git:pr:start"] = "git:pr:start"


@dataclass(frozen=True)
class PrCheckoutDone:
    dest: Path
    pr_number: int
    remote: str
    kind: Literal["git:pr:done"] = "git:pr:done"


@dataclass(frozen=True)
class InstallStarted:
    dest: Path
    manager: str
    kind: Literal["node:install:start"] = "node:install:start"


@dataclass(frozen=True)
class InstallDone:
    dest: Path
    manager: str
    kind: Literal["node:install:done"] = "node:install:done"


@dataclass(frozen=True)
class InstallSkipped:
    dest: Path
    reason: str
    kind: Literal["node:install:skip"] = "node:install:skip"


@dataclass(frozen=True)
class DuplicationDone:
    dest: Path
    kind: Literal["done"] = "done"


ProgressEvent = (
    CopySkipDependencies
    | CopyStarted
    | CopyDone
    | ResetStarted
    | ResetDone
    | CleanStarted
    | CleanDone
    | BranchCheckoutStarted
    | BranchCheckoutDone
    | PrCheckoutStarted
    | PrCheckoutDone
    | InstallStarted
    | InstallDone
    | InstallSkipped
    | DuplicationDone
)


@dataclass(frozen=True)
class CompletionEvent(Generic[T]):
    """Final event of an operation stream, carrying its result."""

    result: T
