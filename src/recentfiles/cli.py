"""Command-line interface for recentfiles."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from recentfiles.aggregation import collect_recent_files
from recentfiles.cache import CommitMetadataCache
from recentfiles.exceptions import RecentFilesError
from recentfiles.extraction import get_commits
from recentfiles.filters import default_filter_chain
from recentfiles.git import GitCLIProvider, OperationToken
from recentfiles.logging_config import configure_logging
from recentfiles.models import FilterConfig, Options, Settings
from recentfiles.report import TIMESTAMP_FORMAT, build_reports, format_report_line

app = typer.Typer(
    name="recentfiles",
    help="List source files touched by the most recent commits of a Git repository",
    add_completion=False,
)
console = Console()


@app.command()
def recent(
    repo_path: Path = typer.Argument(Path("."), help="Path to Git working tree"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=0, help="Number of recent commits to walk"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Deadline in seconds for all git calls"),
    extension: Optional[str] = typer.Option(None, "--extension", "-e", help="Source file extension to report"),
    include_tests: bool = typer.Option(False, "--include-tests", help="Keep test files"),
    include_mocks: bool = typer.Option(False, "--include-mocks", help="Keep files under mock directories"),
    include_generated: bool = typer.Option(False, "--include-generated", help="Keep generated protocol files"),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON array instead of text lines"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level for diagnostics on stderr"),
) -> None:
    """Print each recently touched file with the commit it was first seen in."""
    try:
        settings = Settings()
        configure_logging(log_level or settings.log_level)

        token = OperationToken.with_timeout(timeout if timeout is not None else settings.timeout_seconds)
        options = Options(commit_limit=limit if limit is not None else settings.commit_limit)
        filter_chain = default_filter_chain(
            FilterConfig(source_extension=extension or settings.source_extension),
            include_generated=include_generated,
            include_mocks=include_mocks,
            include_tests=include_tests,
        )

        provider = GitCLIProvider(repo_path)
        cache = CommitMetadataCache()

        files = collect_recent_files(get_commits, provider, options, token, cache, filter_chain)
        reports = build_reports(files, token)

        if as_json:
            payload = [report.model_dump(mode="json") for report in reports]
            console.print(json.dumps(payload, indent=2), markup=False, highlight=False, soft_wrap=True)
            return

        for report in reports:
            console.print(format_report_line(report), markup=False, highlight=False, soft_wrap=True)

    except (RecentFilesError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def commits(
    repo_path: Path = typer.Argument(Path("."), help="Path to Git working tree"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=0, help="Number of recent commits to list"),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Deadline in seconds for all git calls"),
) -> None:
    """List the recent commits walked by the recent command."""
    try:
        settings = Settings()
        configure_logging(settings.log_level)

        token = OperationToken.with_timeout(timeout if timeout is not None else settings.timeout_seconds)
        options = Options(commit_limit=limit if limit is not None else settings.commit_limit)
        provider = GitCLIProvider(repo_path)
        cache = CommitMetadataCache()

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Hash", style="cyan", width=10)
        table.add_column("Date", style="blue")
        table.add_column("Changed since", justify="right", style="yellow")

        for commit in get_commits(provider, options, token, cache):
            table.add_row(
                commit.hash,
                commit.commit_time(token).strftime(TIMESTAMP_FORMAT),
                str(len(commit.get_files(token))),
            )

        console.print(table)

    except (RecentFilesError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from recentfiles import __version__

    console.print(f"[bold]recentfiles[/bold] version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
