# cli.py - Command line interface for transcription-cli
"""
transcription-cli - Utilities for working with the transcription courses in this repository

COMMANDS:
    transcription-cli new ID              Create a new transcription course
    transcription-cli verify-courses      Verify that all transcription courses are valid
    transcription-cli verify-links        Verify that all external links in the courses resolve
    transcription-cli version             Show version information

EXAMPLES:
    # Create trane::transcription::guitar::blues under courses/guitar/blues
    transcription-cli new guitar::blues

    # Check the course tree loads
    transcription-cli verify-courses

    # Check every YouTube link, four at a time, with debug output
    TRANSCRIPTION_LINK_WORKERS=4 transcription-cli -vv verify-links
"""

import sys
from pathlib import Path

import click

from transcription_cli import __version__
from transcription_cli.config_utils import get_config
from transcription_cli.errors import LibraryLoadError, TranscriptionCliError
from transcription_cli.icons import CREATE
from transcription_cli.log_utils import setup_logging
from transcription_cli.scaffold_course import create_course
from transcription_cli.verify_courses import verify_courses
from transcription_cli.verify_links import validate_all_links


# ============================================================================
# Click Group Setup
# ============================================================================

@click.group()
@click.option('--verbose', '-v', count=True, help='Show progress (-v) or debug output (-vv)')
def cli(verbose: int):
    """
    transcription-cli - Manage the transcription courses in this repository
    """
    setup_logging(verbose)


# ============================================================================
# Course Setup
# ============================================================================

@cli.command()
@click.argument('course_id')
def new(course_id: str):
    """
    Create a new transcription course

    COURSE_ID is the id of the course to create without the
    trane::transcription:: prefix (the prefix is accepted too).

    Examples:
        transcription-cli new guitar::blues
        transcription-cli new trane::transcription::guitar::blues
    """
    try:
        manifest_path = create_course(course_id)
    except TranscriptionCliError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    click.echo(f"{CREATE} Created: {manifest_path}")


# ============================================================================
# Validation
# ============================================================================

@cli.command('verify-courses')
def verify_courses_command():
    """
    Verify that all transcription courses are valid

    Loads every course under the working directory. Problems are reported
    but do not change the exit status.
    """
    try:
        verify_courses(Path.cwd(), Path.cwd())
    except LibraryLoadError as e:
        click.echo(f"Error validating courses: {e}", err=True)
        return

    click.echo("All courses are valid.")


@cli.command('verify-links')
def verify_links_command():
    """
    Verify that all external links in the transcription courses resolve

    Prints one line per invalid link, or a confirmation when every link
    is valid. Invalid links do not change the exit status.
    """
    try:
        config = get_config()
    except TranscriptionCliError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    try:
        library = verify_courses(Path.cwd(), Path.cwd())
    except LibraryLoadError as e:
        click.echo(f"Error validating courses: {e}", err=True)
        return

    validate_all_links(
        library,
        workers=config.link_workers,
        timeout=config.link_timeout,
        oembed_url=config.oembed_url,
    )


# ============================================================================
# Version
# ============================================================================

@cli.command()
def version():
    """Show transcription-cli version"""
    click.echo(f"transcription-cli v{__version__}")
    click.echo("Course utilities for Trane transcription courses")


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == '__main__':
    cli()
