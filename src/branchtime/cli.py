"""Command line interface for branchtime."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.text import Text

from branchtime import __version__
from branchtime.display import render_branch, render_summary
from branchtime.git import BranchScope, GitError, GitRepo
from branchtime.log import get_logger, setup_logging

app = typer.Typer(help="List git branches sorted by latest commit time", add_completion=False)
console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

logger = get_logger(__name__)


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    try:
        return GitRepo(path)
    except GitError as err:
        err_console.print(Text.assemble(("Error:", "red"), f" {err}"))
        raise typer.Exit(code=1) from err


def version_callback(value: bool) -> None:
    if value:
        console.print(f"branchtime {__version__}")
        raise typer.Exit()


@app.command()
def main(
    path: Annotated[Path, typer.Argument(help="Path to git repository")] = Path("."),
    show_remote: Annotated[bool, typer.Option("--show-remote", "-r", help="Show remote branches")] = False,
    show_all: Annotated[bool, typer.Option("--show-all", "-a", help="Show both local and remote branches")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show the summary of each branch's latest commit")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Log debug information to stderr")] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show the version and exit"),
    ] = None,
) -> None:
    """List branches oldest to newest by their latest commit."""
    setup_logging(debug)
    repo = get_repo(path)
    try:
        scope = BranchScope.from_flags(show_remote=show_remote, show_all=show_all)
        logger.debug("Listing %s branches in %s", scope.value, path)

        for record in repo.branch_records(scope):
            console.print(render_branch(record))
            if verbose:
                console.print(render_summary(record))
    finally:
        repo.close()


if __name__ == "__main__":
    app()
