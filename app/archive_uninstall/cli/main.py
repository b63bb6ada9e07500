"""Main CLI application entry point.

Defines the Typer application: a single command that removes the
contents of an archive from a target directory.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from archive_uninstall import __version__
from archive_uninstall.archive.types import TYPE_HINTS, resolve_archive_type
from archive_uninstall.cli.display import RunReporter, print_run_summary
from archive_uninstall.core.config import load_config
from archive_uninstall.core.context import RunContext
from archive_uninstall.core.runner import run_uninstall
from archive_uninstall.errors import (
    ConfigError,
    UndeterminedArchiveTypeError,
    UninstallError,
    UnrecognizedArchiveTypeError,
)
from archive_uninstall.utils.formatting import make_console, print_error

logger = logging.getLogger(__name__)

# Exit codes
EXIT_FATAL = 1
EXIT_CONFIG = 3
EXIT_TYPE_UNDETERMINED = 10
EXIT_TYPE_UNRECOGNIZED = 12

ERR_TYPE_DETERMINATION = (
    "Unable to determine the file's archive type. Specify with the --type argument."
)
ERR_UNRECOGNIZED_TYPE = "The type specified with the --type argument was not recognized."
ERR_WALK = "An error occurred while walking the archive."

app = typer.Typer(
    name="archive-uninstall",
    help="A tool to remove archive contents from a target directory.",
    rich_markup_mode="rich",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"archive-uninstall version {__version__}")
        raise typer.Exit()


@app.command(no_args_is_help=True)
def uninstall(
    archive: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="The archive that will be compared to the target directory.",
        ),
    ],
    target_dir: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=False,
            dir_okay=True,
            help="The target directory from which to remove files.",
        ),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose mode."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Enable dry run mode. No files will be removed from target directory.",
        ),
    ] = False,
    remove_dirs: Annotated[
        bool,
        typer.Option("--remove-dirs", help="Remove directories left empty."),
    ] = False,
    verify: Annotated[
        bool,
        typer.Option("--verify", help="Only remove verified files."),
    ] = False,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable color output in verbose mode."),
    ] = False,
    archive_type: Annotated[
        str | None,
        typer.Option(
            "--type",
            "-t",
            help=f"The archive type ({', '.join(TYPE_HINTS)}). "
            "Determined from archive filename, if not specified.",
        ),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Configuration file with default options.",
        ),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Remove the files of ARCHIVE from TARGET_DIR.

    Files are matched by their path inside the archive. With --verify
    only files whose content matches the archive are removed.
    """
    errors = make_console(no_color=no_color, stderr=True)
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e), errors)
        raise typer.Exit(code=EXIT_CONFIG) from None

    try:
        resolved_type = resolve_archive_type(archive.name, archive_type)
    except UndeterminedArchiveTypeError:
        print_error(ERR_TYPE_DETERMINATION, errors)
        raise typer.Exit(code=EXIT_TYPE_UNDETERMINED) from None
    except UnrecognizedArchiveTypeError:
        print_error(ERR_UNRECOGNIZED_TYPE, errors)
        raise typer.Exit(code=EXIT_TYPE_UNRECOGNIZED) from None

    context = RunContext.from_options(
        archive_path=archive,
        target_dir=target_dir,
        archive_type=resolved_type,
        defaults=config.defaults,
        verbose=verbose,
        dry_run=dry_run,
        verify=verify,
        remove_dirs=remove_dirs,
        no_color=no_color,
    )

    output = make_console(no_color=context.no_color)
    errors = make_console(no_color=context.no_color, stderr=True)
    reporter = RunReporter(output, verbose=context.verbose, dry_run=context.dry_run)

    try:
        summary = run_uninstall(context, reporter)
    except UninstallError as e:
        logger.debug("Run aborted: %s", e)
        print_error(f"{ERR_WALK} {e}", errors)
        raise typer.Exit(code=EXIT_FATAL) from None

    if context.verbose:
        print_run_summary(output, summary, dry_run=context.dry_run)


if __name__ == "__main__":
    app()
