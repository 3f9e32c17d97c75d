"""Command-line interface for tierfix."""

from typing import Annotated, Optional

import typer
from rich.console import Console

from tierfix.infrastructure.config import load_config
from tierfix.infrastructure.logging import (
    LogConfig,
    configure_logging,
    get_logger,
    logger_sink,
)
from tierfix.report import RunReport
from tierfix.stores import get_storage_client
from tierfix.stores.tiering import ConfigurationError, run_tiering

EXIT_PARSE_ARGS = 1
EXIT_OTHER = 2

app = typer.Typer(
    name="tierfix",
    help="Move the blobs of an Azure Storage container to a colder access tier",
    add_completion=False,
)


@app.callback()
def main_callback() -> None:
    """Move the blobs of an Azure Storage container to a colder access tier."""


@app.command(name="run")
def run_cmd(
    container: Annotated[
        Optional[str],
        typer.Option("--container", "-c", help="Container to scan"),
    ] = None,
    connection_string: Annotated[
        Optional[str],
        typer.Option(
            "--connection-string",
            envvar="TIERFIX_CONNECTION_STRING",
            help="Azure Storage connection string",
            show_default=False,
        ),
    ] = None,
    account_url: Annotated[
        Optional[str],
        typer.Option(
            "--account-url",
            envvar="TIERFIX_ACCOUNT_URL",
            help="Account URL, authenticated with the default Azure credential",
        ),
    ] = None,
    dry_run: Annotated[
        Optional[bool],
        typer.Option("--dry-run/--no-dry-run", help="Only log what would be changed"),
    ] = None,
    max_blobs: Annotated[
        Optional[int],
        typer.Option("--max-blobs", min=1, help="Abort if more blobs than this are listed (default 5000)"),
    ] = None,
    blob_path: Annotated[
        Optional[str],
        typer.Option("--blob-path", help="Fix only this blob (path inside the container)"),
    ] = None,
    tier: Annotated[
        Optional[str],
        typer.Option("--tier", "-t", help="Target tier (hot, cool, cold, archive)"),
    ] = None,
    all_blobs: Annotated[
        bool,
        typer.Option("--all", help="Consider every blob, not only those outside the target tier"),
    ] = False,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", min=1, help="Concurrent tier changes after listing"),
    ] = None,
    keep_going: Annotated[
        bool,
        typer.Option("--keep-going", help="Continue after a failed tier change"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Pause before running so a debugger can attach"),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Log level (debug, info, warning, error)"),
    ] = "info",
    log_format: Annotated[
        str,
        typer.Option("--log-format", help="Log format (console, json)"),
    ] = "console",
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the run result as JSON"),
    ] = False,
) -> None:
    """Set eligible blobs of a container to the target tier."""
    try:
        configure_logging(LogConfig(level=log_level, format=log_format))
        config = load_config(
            container=container,
            connection_string=connection_string,
            dry_run=dry_run,
            max_objects=max_blobs,
            blob_path=blob_path,
            target_tier=tier,
            listing="all" if all_blobs else None,
            max_workers=workers,
            fail_fast=False if keep_going else None,
            debug=debug or None,
        )
    except (ConfigurationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_PARSE_ARGS)

    get_logger("tierfix.cli").info(f"Configuration: {config.to_json()}")

    if config.debug:
        typer.prompt("Press Enter to continue", default="", show_default=False)

    try:
        client = get_storage_client(
            "azure",
            connection_string=config.connection_string,
            account_url=account_url,
        )
        log = logger_sink(get_logger("tierfix.run"))
        result = run_tiering(config, client, log)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_PARSE_ARGS)
    except Exception as e:
        typer.echo(f"An error happened: {e}", err=True)
        raise typer.Exit(EXIT_OTHER)

    report = RunReport(config=config, result=result)
    if json_output:
        typer.echo(report.to_json())
    else:
        report.print(Console())

    if not result.success:
        raise typer.Exit(EXIT_OTHER)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
