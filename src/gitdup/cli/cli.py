import logging
from pathlib import Path

import click

from gitdup.cli.progress import INDENT, ProgressRenderer, count_steps, format_path_link
from gitdup.core.context import GitDupContext, create_context
from gitdup.core.duplicate import duplicate, resolve_destination
from gitdup.core.errors import GitDupError
from gitdup.core.types import DuplicationRequest, is_package_project
from gitdup.output.output import machine_output, user_output

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


def build_request(
    ctx: GitDupContext,
    *,
    dest: Path | None,
    branch: str | None,
    pr_number: int | None,
    remote: str | None,
    clean: bool | None,
    install: bool | None,
    verbose: bool,
) -> DuplicationRequest:
    """Combine CLI flags with configured defaults. Flags left unset fall back to config."""
    return DuplicationRequest(
        source=ctx.cwd,
        dest=dest,
        branch=branch,
        pr_number=pr_number,
        remote=remote if remote is not None else ctx.config.remote,
        clean=clean if clean is not None else ctx.config.clean,
        verbose=verbose,
        install=install if install is not None else ctx.config.install,
    )


def _print_header(ctx: GitDupContext, request: DuplicationRequest) -> None:
    title = click.style("gitdup", fg="magenta", bold=True)
    user_output(f"{title} {click.style('duplicate a repo for branching work', dim=True)}")
    user_output(f"{INDENT}{click.style('source:', fg='cyan')} {format_path_link(request.source)}")
    if request.dest is not None:
        target = resolve_destination(ctx, request.source, request.dest)
        user_output(f"{INDENT}{click.style('target:', fg='cyan')} {format_path_link(target)}")


@click.command("gitdup", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="gitdup")
@click.argument("dest", required=False, type=click.Path(path_type=Path))
@click.option("-b", "--branch", help="Branch name to checkout in the duplicate")
@click.option(
    "-p",
    "--pr",
    "pr_number",
    type=click.IntRange(min=1),
    help="PR number to fetch and checkout (GitHub remotes)",
)
@click.option("-r", "--remote", help="Remote to use for PR fetch (default: origin)")
@click.option(
    "--clean/--no-clean",
    default=None,
    help="Also remove untracked files (keeps ignored like .env)",
)
@click.option(
    "--install/--no-install",
    default=None,
    help="Run the package manager install in Node projects (default: on)",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose output for git operations")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    dest: Path | None,
    branch: str | None,
    pr_number: int | None,
    remote: str | None,
    clean: bool | None,
    install: bool | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Duplicate the current project directory, reset git changes, and
    optionally checkout a PR/branch.

    DEST must not exist or must be an empty directory. It defaults to a
    sibling named <cwd>-dup, or <cwd>-dup-N if that is taken.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    renderer: ProgressRenderer | None = None
    try:
        # Only create context if not already provided (e.g., by tests)
        if ctx.obj is None:
            ctx.obj = create_context()
        gitdup_ctx: GitDupContext = ctx.obj

        request = build_request(
            gitdup_ctx,
            dest=dest,
            branch=branch,
            pr_number=pr_number,
            remote=remote,
            clean=clean,
            install=install,
            verbose=verbose,
        )
        _print_header(gitdup_ctx, request)

        total_steps = count_steps(
            clean=request.clean,
            checkout=bool(request.branch) or request.pr_number is not None,
            install=is_package_project(request.source) and request.install,
        )
        renderer = ProgressRenderer(
            total_steps=total_steps,
            animate=gitdup_ctx.terminal.is_stdout_tty() and not verbose,
        )
        result = duplicate(gitdup_ctx, request, on_progress=renderer)
    except GitDupError as e:
        if renderer is not None:
            renderer.fail()
        user_output(INDENT + click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e

    duplicated = click.style("duplicated:", fg="green")
    machine_output(f"{INDENT}{duplicated} {format_path_link(result.dest)}")
    if result.checked_out is not None:
        checked_out = click.style(result.checked_out, bold=True)
        machine_output(f"{INDENT}{click.style('checked out:', fg='green')} {checked_out}")


def main() -> None:
    """CLI entry point used by the `gitdup` console script."""
    cli()
