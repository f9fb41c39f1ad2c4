"""
Command-line interface for mv-git.

Moves (or copies) every Git repository found directly inside SOURCE
into DESTINATION, leaving other directories in place.
"""

import sys
from pathlib import Path

import click

from mv_git import __version__
from mv_git.core.config import Config
from mv_git.core.exceptions import ConfigurationError, RelocationError
from mv_git.utils.logging_config import setup_logging

EXIT_ERROR = 1
EXIT_PARTIAL = 2


@click.command()
@click.version_option(version=__version__)
@click.argument("source", type=click.Path())
@click.argument("destination", type=click.Path())
@click.option(
    "--copy", "-c",
    is_flag=True,
    help="Copy repositories instead of moving them"
)
@click.option(
    "--dry-run", "-n",
    is_flag=True,
    help="Show what would be relocated without touching the filesystem"
)
@click.option(
    "--format", "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Summary output format (default: text)"
)
@click.option(
    "--git-info",
    is_flag=True,
    help="Record branch and commit of each relocated repository"
)
@click.option(
    "--config", "config_path",
    type=click.Path(),
    help="Path to JSON configuration file"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output"
)
@click.option(
    "--log-file",
    type=click.Path(),
    help="Path to log file"
)
def cli(source, destination, copy, dry_run, format, git_info, config_path, verbose, log_file):
    """
    Relocate Git repositories from SOURCE into DESTINATION.

    Every directory directly inside SOURCE that contains a .git entry
    is moved (or copied with --copy) to DESTINATION, which is created
    if missing. Files matched by the repository's root .gitignore are
    not transferred.

    Examples:

        mv-git ~/projects ~/archive

        mv-git ~/projects /mnt/backup/projects --copy

        mv-git ~/projects ~/archive --dry-run -f json
    """
    try:
        Config.reset()
        if config_path:
            Config.load_from_file(config_path)
        config = Config.load_from_env()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    if copy:
        config.transfer.copy_mode = True
    if dry_run:
        config.transfer.dry_run = True
    if git_info:
        config.transfer.collect_git_info = True
    if verbose:
        config.verbose = True
    if log_file:
        config.log_file = log_file

    log_level = "DEBUG" if config.verbose else "INFO"
    setup_logging(level=log_level, log_file=Path(config.log_file) if config.log_file else None)

    from mv_git.relocation.relocator import Relocator
    from mv_git.reporting.formatter import get_formatter

    try:
        summary = Relocator(config).run(source, destination)
    except RelocationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    click.echo(get_formatter(format).format(summary))

    if not summary.succeeded:
        click.echo(
            f"Error: {len(summary.failed)} repositories could not be relocated",
            err=True,
        )
        sys.exit(EXIT_PARTIAL)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
