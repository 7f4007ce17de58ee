"""Rendering of duplication progress events.

On an interactive terminal the current step is shown on a rich status
spinner; otherwise (pipes, CI, --verbose where command output is streamed)
every step is printed as its own line.
"""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.status import Status

from gitdup.core.events import (
    BranchCheckoutDone,
    BranchCheckoutStarted,
    CleanDone,
    CleanStarted,
    CopyDone,
    CopySkipDependencies,
    CopyStarted,
    DuplicationDone,
    InstallDone,
    InstallSkipped,
    InstallStarted,
    PrCheckoutDone,
    PrCheckoutStarted,
    ProgressEvent,
    ResetDone,
    ResetStarted,
)
from gitdup.output.output import user_output

INDENT = "  "


def format_path_link(path: Path) -> str:
    """Show an absolute path together with its file:// URL."""
    url = click.style(f"({path.as_uri()})", dim=True)
    return f"{click.style(str(path), underline=True)} {url}"


def count_steps(*, clean: bool, checkout: bool, install: bool) -> int:
    """Number of numbered steps a run will show: copy and reset, plus options."""
    return 2 + int(clean) + int(checkout) + int(install)


class ProgressRenderer:
    """Turns the event stream into step lines or a spinner."""

    def __init__(self, *, total_steps: int, animate: bool, console: Console | None = None) -> None:
        self._total_steps = total_steps
        self._animate = animate
        self._console = console if console is not None else Console(stderr=True)
        self._status: Status | None = None
        self._step = 0

    def __call__(self, event: ProgressEvent) -> None:
        self.handle(event)

    def handle(self, event: ProgressEvent) -> None:
        match event:
            case CopySkipDependencies():
                # Informational only; node_modules is reinstalled later
                pass
            case CopyStarted(dest=dest):
                self._begin_step(f"Copying project to {dest}")
            case CopyDone(dest=dest):
                self._update(f"Copied to {dest}")
            case ResetStarted():
                self._begin_step("Resetting tracked changes")
            case ResetDone():
                self._update("Reset complete")
            case CleanStarted():
                self._begin_step("Cleaning untracked files")
            case CleanDone():
                self._update("Clean complete")
            case BranchCheckoutStarted(branch=branch):
                self._begin_step(f"Checkout branch {branch}")
            case BranchCheckoutDone(branch=branch):
                self._update(f"Checked out {branch}")
            case PrCheckoutStarted(pr_number=pr_number, remote=remote):
                self._begin_step(f"Fetch + checkout PR {pr_number} from {remote}")
            case PrCheckoutDone(pr_number=pr_number):
                self._update(f"Checked out PR {pr_number}")
            case InstallStarted(manager=manager):
                self._begin_step(f"Installing dependencies ({manager})")
            case InstallDone(manager=manager):
                self._update(f"Install complete ({manager})")
            case InstallSkipped(reason=reason):
                self._note(f"Skipping install: {reason}")
            case DuplicationDone():
                self._finish("✔", "green", "Done - duplicate ready")

    def fail(self) -> None:
        """Stop any spinner and report the run as failed."""
        self._finish("✖", "red", "Failed")

    def _label(self) -> str:
        return f"step {self._step}/{self._total_steps}"

    def _begin_step(self, text: str) -> None:
        self._step += 1
        self._update(text)

    def _update(self, text: str) -> None:
        if not self._animate:
            user_output(f"{INDENT}{click.style(self._label(), dim=True)} {text}")
            return
        renderable = f"[dim]{self._label()}[/dim] {escape(text)}"
        if self._status is None:
            self._status = self._console.status(renderable, spinner="dots")
            self._status.start()
        else:
            self._status.update(renderable)

    def _note(self, text: str) -> None:
        if self._animate:
            self._console.print(f"{INDENT}[dim]{escape(text)}[/dim]")
        else:
            user_output(f"{INDENT}{click.style(text, dim=True)}")

    def _finish(self, symbol: str, color: str, text: str) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
        if self._animate:
            self._console.print(f"{INDENT}[{color}]{symbol}[/{color}] {escape(text)}")
        else:
            user_output(f"{INDENT}{click.style(symbol, fg=color)} {text}")
