"""Application context with dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gitdup.cli.config import GitDupConfig, load_global_config, load_project_config, merge_configs
from gitdup.gateway.git.abc import Git
from gitdup.gateway.git.real import RealGit
from gitdup.gateway.shell.abc import Shell
from gitdup.gateway.shell.real import RealShell
from gitdup.gateway.terminal.abc import Terminal
from gitdup.gateway.terminal.real import RealTerminal
from gitdup.gateway.time.abc import Time
from gitdup.gateway.time.real import RealTime


@dataclass(frozen=True)
class GitDupContext:
    """Immutable context holding all dependencies for a gitdup run.

    Created at the CLI entry point and passed to the core. Tests build one
    directly with fake gateways.
    """

    git: Git
    shell: Shell
    time: Time
    terminal: Terminal

    # Directory gitdup was invoked from; this is the duplication source
    cwd: Path

    # Global config overlaid with the project's .gitdup.toml
    config: GitDupConfig

    @staticmethod
    def for_test(
        *,
        cwd: Path,
        git: Git | None = None,
        shell: Shell | None = None,
        time: Time | None = None,
        terminal: Terminal | None = None,
        config: GitDupConfig | None = None,
    ) -> GitDupContext:
        """Create a context with fakes for every gateway not supplied."""
        from gitdup.gateway.git.fake import FakeGit
        from gitdup.gateway.shell.fake import FakeShell
        from gitdup.gateway.terminal.fake import FakeTerminal
        from gitdup.gateway.time.fake import FakeTime

        return GitDupContext(
            git=git if git is not None else FakeGit(),
            shell=shell if shell is not None else FakeShell(),
            time=time if time is not None else FakeTime(),
            terminal=terminal if terminal is not None else FakeTerminal(is_stdout_tty=False),
            cwd=cwd,
            config=config if config is not None else GitDupConfig.defaults(),
        )


def create_context(cwd: Path | None = None) -> GitDupContext:
    """Create the production context.

    Raises:
        ConfigError: If a configuration file is malformed
    """
    resolved_cwd = (cwd if cwd is not None else Path.cwd()).resolve()
    config = merge_configs(load_global_config(), load_project_config(resolved_cwd))
    return GitDupContext(
        git=RealGit(),
        shell=RealShell(),
        time=RealTime(),
        terminal=RealTerminal(),
        cwd=resolved_cwd,
        config=config,
    )
