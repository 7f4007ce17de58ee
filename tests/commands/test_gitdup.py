"""Tests for the gitdup command using fake gateways."""

import json
import logging
from pathlib import Path

from click.testing import CliRunner

from gitdup.cli.cli import cli
from gitdup.cli.config import GitDupConfig
from gitdup.core.context import GitDupContext
from gitdup.core.errors import CommandFailure
from gitdup.gateway.git.fake import FakeGit
from gitdup.gateway.shell.fake import FakeShell


def _make_repo(tmp_path: Path) -> Path:
    source = tmp_path / "app"
    (source / ".git").mkdir(parents=True)
    (source / "README.md").write_text("# app\n", encoding="utf-8")
    return source


def test_gitdup_duplicates_into_given_destination(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    dest = tmp_path / "dup"
    ctx = GitDupContext.for_test(cwd=source)

    result = CliRunner().invoke(cli, [str(dest)], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "source:" in result.output
    assert "target:" in result.output
    assert "step 1/2 Copying project" in result.output
    assert "duplicated:" in result.output
    assert "checked out:" not in result.output
    assert (dest / "README.md").exists()


def test_gitdup_defaults_to_sibling_destination(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    ctx = GitDupContext.for_test(cwd=source)

    result = CliRunner().invoke(cli, [], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "target:" not in result.output
    assert (tmp_path / "app-dup" / "README.md").exists()


def test_gitdup_reports_checked_out_branch(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    git = FakeGit()
    ctx = GitDupContext.for_test(cwd=source, git=git)

    result = CliRunner().invoke(cli, ["-b", "feature", "--clean"], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "step 4/4 Checked out feature" in result.output
    assert "checked out: feature" in result.output
    assert ["clean", "-fd"] in git.commands


def test_gitdup_pr_uses_configured_remote(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    git = FakeGit()
    config = GitDupConfig(remote="upstream", clean=False, install=True)
    ctx = GitDupContext.for_test(cwd=source, git=git, config=config)

    result = CliRunner().invoke(cli, ["--pr", "5"], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert ["fetch", "upstream", "pull/5/head:pr-5"] in git.commands
    assert "checked out: pr-5" in result.output


def test_gitdup_remote_flag_overrides_config(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    git = FakeGit()
    config = GitDupConfig(remote="upstream", clean=False, install=True)
    ctx = GitDupContext.for_test(cwd=source, git=git, config=config)

    result = CliRunner().invoke(
        cli, ["--pr", "5", "-r", "fork"], obj=ctx, catch_exceptions=False
    )

    assert result.exit_code == 0, result.output
    assert ["fetch", "fork", "pull/5/head:pr-5"] in git.commands


def test_gitdup_config_clean_can_be_disabled_by_flag(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    git = FakeGit()
    config = GitDupConfig(remote="origin", clean=True, install=True)
    ctx = GitDupContext.for_test(cwd=source, git=git, config=config)

    result = CliRunner().invoke(cli, ["--no-clean"], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert ["clean", "-fd"] not in git.commands


def test_gitdup_no_install_skips_package_manager(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    (source / "package.json").write_text(json.dumps({"name": "app"}), encoding="utf-8")
    shell = FakeShell(available_tools={"npm"})
    ctx = GitDupContext.for_test(cwd=source, shell=shell)

    result = CliRunner().invoke(cli, ["--no-install"], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "Skipping install: install disabled by option" in result.output
    assert shell.commands == []


def test_gitdup_installs_for_package_projects(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    (source / "package.json").write_text(json.dumps({"name": "app"}), encoding="utf-8")
    (source / "yarn.lock").write_text("", encoding="utf-8")
    shell = FakeShell(available_tools={"yarn"})
    ctx = GitDupContext.for_test(cwd=source, shell=shell)

    result = CliRunner().invoke(cli, [], obj=ctx, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "step 3/3 Installing dependencies (yarn)" in result.output
    assert shell.commands == [(["yarn", "install"], tmp_path / "app-dup", False)]


def test_gitdup_fails_outside_repository(tmp_path: Path) -> None:
    ctx = GitDupContext.for_test(cwd=tmp_path)

    result = CliRunner().invoke(cli, [], obj=ctx)

    assert result.exit_code == 1
    assert "Error: Not a git repository" in result.output
    assert "Failed" in result.output


def test_gitdup_fails_for_non_empty_destination(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    dest = tmp_path / "dup"
    dest.mkdir()
    (dest / "x.txt").write_text("", encoding="utf-8")
    ctx = GitDupContext.for_test(cwd=source)

    result = CliRunner().invoke(cli, [str(dest)], obj=ctx)

    assert result.exit_code == 1
    assert "Destination directory must be empty" in result.output
    assert [p.name for p in dest.iterdir()] == ["x.txt"]


def test_gitdup_reports_command_output_on_failure(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    failure = CommandFailure(
        cmd=["git", "checkout", "nope"],
        operation_context="checkout 'nope'",
        returncode=1,
        output="error: pathspec 'nope' did not match any file(s) known to git",
    )
    ctx = GitDupContext.for_test(cwd=source, git=FakeGit(checkout_raises=failure))

    result = CliRunner().invoke(cli, ["-b", "nope"], obj=ctx)

    assert result.exit_code == 1
    assert "Command failed: git checkout nope" in result.output
    assert "did not match any file(s)" in result.output


def test_gitdup_rejects_non_positive_pr_number(tmp_path: Path) -> None:
    source = _make_repo(tmp_path)
    ctx = GitDupContext.for_test(cwd=source)

    result = CliRunner().invoke(cli, ["--pr", "0"], obj=ctx)

    assert result.exit_code == 2
    assert not (tmp_path / "app-dup").exists()


def test_gitdup_debug_flag_logs_workflow(tmp_path: Path, caplog) -> None:
    source = _make_repo(tmp_path)
    ctx = GitDupContext.for_test(cwd=source)

    with caplog.at_level(logging.DEBUG, logger="gitdup"):
        result = CliRunner().invoke(
            cli, [str(tmp_path / "dup"), "--debug"], obj=ctx, catch_exceptions=False
        )

    assert result.exit_code == 0, result.output
    assert any("Duplicating" in record.getMessage() for record in caplog.records)
