"""End-to-end duplication against real git repositories."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from gitdup.cli.cli import cli
from gitdup.cli.config import GitDupConfig
from gitdup.core.context import GitDupContext
from gitdup.core.duplicate import duplicate
from gitdup.core.errors import CommandFailure
from gitdup.core.types import DuplicationRequest
from gitdup.gateway.git.real import RealGit
from gitdup.gateway.shell.fake import FakeShell
from gitdup.gateway.terminal.fake import FakeTerminal
from gitdup.gateway.time.real import RealTime
from tests.integration.git_helpers import commit_file, git, init_git_repo, requires_git

pytestmark = [pytest.mark.integration, requires_git]


def _real_context(cwd: Path, shell: FakeShell | None = None) -> GitDupContext:
    return GitDupContext(
        git=RealGit(),
        shell=shell if shell is not None else FakeShell(),
        time=RealTime(),
        terminal=FakeTerminal(is_stdout_tty=False),
        cwd=cwd,
        config=GitDupConfig.defaults(),
    )


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    init_git_repo(repo, "main")
    commit_file(repo, ".gitignore", ".env\n", "chore: ignore env")
    return repo


def test_duplicate_contains_git_metadata(repo: Path, tmp_path: Path) -> None:
    dest = tmp_path / "dup"

    result = duplicate(_real_context(repo), DuplicationRequest(source=repo, dest=dest))

    assert result.dest == dest
    assert (dest / ".git").is_dir()
    assert (dest / ".git" / "index").exists()
    assert git(dest, "status", "--porcelain") == ""


def test_reset_discards_tracked_modifications(repo: Path, tmp_path: Path) -> None:
    (repo / "README.md").write_text("# Edited locally\n", encoding="utf-8")
    dest = tmp_path / "dup"

    duplicate(_real_context(repo), DuplicationRequest(source=repo, dest=dest))

    assert (dest / "README.md").read_text(encoding="utf-8") == "# Test\n"
    # The source keeps its edits
    assert (repo / "README.md").read_text(encoding="utf-8") == "# Edited locally\n"


def test_untracked_and_ignored_files_survive_without_clean(repo: Path, tmp_path: Path) -> None:
    (repo / "scratch.txt").write_text("notes\n", encoding="utf-8")
    (repo / ".env").write_text("TOKEN=abc\n", encoding="utf-8")
    dest = tmp_path / "dup"

    duplicate(_real_context(repo), DuplicationRequest(source=repo, dest=dest))

    assert (dest / "scratch.txt").read_text(encoding="utf-8") == "notes\n"
    assert (dest / ".env").read_text(encoding="utf-8") == "TOKEN=abc\n"


def test_clean_removes_untracked_but_keeps_ignored(repo: Path, tmp_path: Path) -> None:
    (repo / "scratch.txt").write_text("notes\n", encoding="utf-8")
    (repo / "build").mkdir()
    (repo / "build" / "out.txt").write_text("x", encoding="utf-8")
    (repo / ".env").write_text("TOKEN=abc\n", encoding="utf-8")
    dest = tmp_path / "dup"

    duplicate(_real_context(repo), DuplicationRequest(source=repo, dest=dest, clean=True))

    assert not (dest / "scratch.txt").exists()
    assert not (dest / "build").exists()
    assert (dest / ".env").read_text(encoding="utf-8") == "TOKEN=abc\n"
    assert (repo / "scratch.txt").exists()


def test_branch_checkout_in_local_only_repo(repo: Path, tmp_path: Path) -> None:
    git(repo, "branch", "feature")
    dest = tmp_path / "dup"

    result = duplicate(
        _real_context(repo), DuplicationRequest(source=repo, dest=dest, branch="feature")
    )

    assert result.checked_out == "feature"
    assert git(dest, "branch", "--show-current").strip() == "feature"
    # The source stays on its own branch
    assert git(repo, "branch", "--show-current").strip() == "main"


def test_branch_checkout_of_missing_branch_fails(repo: Path, tmp_path: Path) -> None:
    dest = tmp_path / "dup"

    with pytest.raises(CommandFailure, match="checkout 'does-not-exist'"):
        duplicate(
            _real_context(repo),
            DuplicationRequest(source=repo, dest=dest, branch="does-not-exist"),
        )


def test_pull_request_checkout_from_remote(repo: Path, tmp_path: Path) -> None:
    remote = tmp_path / "remote.git"
    git(tmp_path, "init", "--quiet", "--bare", str(remote))
    git(repo, "remote", "add", "upstream", str(remote))
    git(repo, "push", "--quiet", "upstream", "main")

    git(repo, "checkout", "--quiet", "-b", "contribution")
    commit_file(repo, "feature.txt", "from the PR\n", "feat: contribution")
    git(repo, "push", "--quiet", "upstream", "HEAD:refs/pull/7/head")
    pr_head = git(repo, "rev-parse", "HEAD").strip()
    git(repo, "checkout", "--quiet", "main")
    git(repo, "branch", "--quiet", "-D", "contribution")

    dest = tmp_path / "dup"
    result = duplicate(
        _real_context(repo),
        DuplicationRequest(source=repo, dest=dest, pr_number=7, remote="upstream"),
    )

    assert result.checked_out == "pr-7"
    assert git(dest, "branch", "--show-current").strip() == "pr-7"
    assert git(dest, "rev-parse", "HEAD").strip() == pr_head
    assert (dest / "feature.txt").read_text(encoding="utf-8") == "from the PR\n"


def test_pull_request_fetch_failure_is_reported(repo: Path, tmp_path: Path) -> None:
    dest = tmp_path / "dup"

    with pytest.raises(CommandFailure, match="fetch PR #3"):
        duplicate(
            _real_context(repo),
            DuplicationRequest(source=repo, dest=dest, pr_number=3, remote="origin"),
        )


def test_package_project_skips_node_modules_and_install(repo: Path, tmp_path: Path) -> None:
    commit_file(repo, "package.json", json.dumps({"name": "tmp", "version": "1.0.0"}), "pkg")
    (repo / "node_modules" / ".bin").mkdir(parents=True)
    (repo / "node_modules" / "leftpad.txt").write_text("x", encoding="utf-8")
    shell = FakeShell(available_tools={"npm"})
    dest = tmp_path / "node-dup"

    events: list[str] = []
    result = duplicate(
        _real_context(repo, shell),
        DuplicationRequest(source=repo, dest=dest, install=False),
        on_progress=lambda event: events.append(event.kind),
    )

    assert result.dest == dest
    assert not (dest / "node_modules").exists()
    assert (dest / "package.json").exists()
    assert "node:install:skip" in events
    assert shell.commands == []


def test_cli_duplicates_repository(repo: Path, tmp_path: Path) -> None:
    dest = tmp_path / "cli-dup"

    result = CliRunner().invoke(cli, [str(dest)], obj=_real_context(repo), catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert (dest / ".git").is_dir()
