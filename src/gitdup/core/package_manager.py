"""Package manager detection and dependency install for package projects.

Detection is an ordered list of rules. Each rule either names a candidate
manager for the project or passes; a candidate is only accepted when its
executable answers ``--version``. The first accepted candidate wins:

1. the ``packageManager`` field of package.json
2. lock files: bun.lockb, pnpm-lock.yaml, yarn.lock, package-lock.json
3. npm as a last resort
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from gitdup.core.events import InstallDone, InstallSkipped, InstallStarted, ProgressEvent
from gitdup.core.types import PACKAGE_MANIFEST, PackageManagerChoice
from gitdup.gateway.shell.abc import Shell

logger = logging.getLogger(__name__)

INSTALL_DISABLED_REASON = "install disabled by option"
NO_PACKAGE_MANAGER_REASON = "no package manager available"

BUN_LOCKFILE = "bun.lockb"
PNPM_LOCKFILE = "pnpm-lock.yaml"
YARN_LOCKFILE = "yarn.lock"
NPM_LOCKFILE = "package-lock.json"


@dataclass(frozen=True)
class DetectionRule:
    """One step of the detection chain.

    Attributes:
        name: Label used in debug logs and tests
        candidate: Returns the manager name this rule proposes for a project
            directory, or None if the rule does not apply
    """

    name: str
    candidate: Callable[[Path], str | None]


def read_declared_manager(project_dir: Path) -> str | None:
    """Return the manager named in package.json's ``packageManager`` field.

    ``"pnpm@9.1.0"`` yields ``"pnpm"``. A missing or unreadable manifest, or
    one that is not valid JSON, yields None: the field is only a hint and the
    lock file rules still apply.
    """
    manifest = project_dir / PACKAGE_MANIFEST
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Ignoring unreadable %s: %s", manifest, e)
        return None

    if not isinstance(data, dict):
        return None
    declared = data.get("packageManager")
    if not isinstance(declared, str) or not declared:
        return None
    return declared.split("@")[0]


def _lockfile_rule(lockfile: str, manager: str) -> DetectionRule:
    def candidate(project_dir: Path) -> str | None:
        if (project_dir / lockfile).exists():
            return manager
        return None

    return DetectionRule(name=lockfile, candidate=candidate)


DETECTION_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(name="packageManager field", candidate=read_declared_manager),
    _lockfile_rule(BUN_LOCKFILE, "bun"),
    _lockfile_rule(PNPM_LOCKFILE, "pnpm"),
    _lockfile_rule(YARN_LOCKFILE, "yarn"),
    _lockfile_rule(NPM_LOCKFILE, "npm"),
    DetectionRule(name="npm fallback", candidate=lambda _project_dir: "npm"),
)


def install_command_for(
    shell: Shell, manager: str, project_dir: Path
) -> PackageManagerChoice | None:
    """Build the install command for manager, if its executable is available.

    Lock-file-aware managers get their frozen install mode so duplicating a
    project never upgrades its dependencies. Unrecognised manager names are
    treated as npm.
    """
    if manager == "bun":
        if not shell.is_tool_available("bun", project_dir):
            return None
        return PackageManagerChoice(command="bun", args=("install",))

    if manager == "pnpm":
        if not shell.is_tool_available("pnpm", project_dir):
            return None
        if (project_dir / PNPM_LOCKFILE).exists():
            return PackageManagerChoice(command="pnpm", args=("install", "--frozen-lockfile"))
        return PackageManagerChoice(command="pnpm", args=("install",))

    if manager == "yarn":
        if not shell.is_tool_available("yarn", project_dir):
            return None
        # --immutable/--frozen-lockfile differ between Yarn 1 and Berry
        return PackageManagerChoice(command="yarn", args=("install",))

    if not shell.is_tool_available("npm", project_dir):
        return None
    if (project_dir / NPM_LOCKFILE).exists():
        return PackageManagerChoice(command="npm", args=("ci",))
    return PackageManagerChoice(command="npm", args=("install",))


def detect_package_manager(
    shell: Shell,
    project_dir: Path,
    rules: tuple[DetectionRule, ...] = DETECTION_RULES,
) -> PackageManagerChoice | None:
    """Walk the detection rules in order and return the first usable manager."""
    for rule in rules:
        manager = rule.candidate(project_dir)
        if manager is None:
            continue
        choice = install_command_for(shell, manager, project_dir)
        if choice is not None:
            logger.debug("Rule %r selected %s", rule.name, " ".join(choice.argv))
            return choice
        logger.debug("Rule %r proposed %s but it is not available", rule.name, manager)
    return None


def install_dependencies(
    shell: Shell, dest: Path, *, install: bool, verbose: bool
) -> Iterator[ProgressEvent]:
    """Install dependencies in the duplicate of a package project.

    Skipping is reported as an event, not an error: a duplicate without
    installed dependencies is still a valid duplicate. A failing install
    raises CommandFailure.
    """
    if not install:
        yield InstallSkipped(dest=dest, reason=INSTALL_DISABLED_REASON)
        return

    choice = detect_package_manager(shell, dest)
    if choice is None:
        yield InstallSkipped(dest=dest, reason=NO_PACKAGE_MANAGER_REASON)
        return

    yield InstallStarted(dest=dest, manager=choice.command)
    shell.run_command(choice.argv, dest, verbose=verbose)
    yield InstallDone(dest=dest, manager=choice.command)
