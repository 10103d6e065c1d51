"""Main CLI entry point for kibela-sync command.

This module provides the Typer application that serves as the entry point
for the kibela-sync command-line tool. Global options are handled by the
app callback; each sync operation is its own subcommand.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.errors import CLIError
from src.cli.models import CLIOptions, ExitCode, exit_code_for
from src.cli.output import OutputHandler
from src.sync_engine.engine import SyncEngine
from src.sync_engine.errors import SyncEngineError

VERSION = "0.1.0"

app = typer.Typer(
    name="kibela-sync",
    help="""Sync Kibela notes with a local directory of Markdown files.

QUICK START:
  kibela-sync pull                     # Download every note into ./notes
  kibela-sync push notes/12345.md      # Send local edits of a note
  kibela-sync publish --file draft.md  # Create a new note from a file
  kibela-sync config show              # Show resolved settings

Credentials come from KIBELA_TEAM and KIBELA_TOKEN (or a .env file),
or from ~/.kibela-sync/config.yaml.""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

config_app = typer.Typer(
    help="Inspect configuration",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

# Module logger
logger = logging.getLogger(__name__)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    # Repeated invocations in one process (tests) must not stack handlers
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter("%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"kibela-sync_{timestamp}.log"

        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt=date_format,
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"kibela-sync version {VERSION}")
        raise typer.Exit()


def _options(ctx: typer.Context) -> CLIOptions:
    return ctx.obj if isinstance(ctx.obj, CLIOptions) else CLIOptions()


def _build_engine(options: CLIOptions, output: OutputHandler, directory: Optional[str] = None) -> SyncEngine:
    """Load configuration and create the engine, exiting on config errors."""
    try:
        config = ConfigLoader.load(options.config_path, directory)
    except CLIError as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.debug(f"Team: {config.team}, directory: {config.directory}")
    return SyncEngine(config)


def _exit_with_failure(output: OutputHandler, action: str, error: SyncEngineError) -> None:
    output.print_failure(action, error)
    raise typer.Exit(exit_code_for(error.kind))


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to config file (default: ~/.kibela-sync/config.yaml)",
        metavar="FILE",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Sync Kibela notes with a local directory of Markdown files."""
    _configure_logging(verbosity, logdir)
    ctx.obj = CLIOptions(verbosity=verbosity, no_color=no_color, config_path=config_path)


@app.command()
def pull(
    ctx: typer.Context,
    directory: Optional[str] = typer.Option(
        None,
        "--dir",
        "-d",
        help="Sync directory (overrides config and KIBELA_DIR)",
        metavar="DIR",
    ),
) -> None:
    """Download every note into the sync directory.

    Existing files of the same name are overwritten.
    """
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)
    engine = _build_engine(options, output, directory)

    try:
        with output.spinner("Pulling notes..."):
            result = engine.pull()
    except SyncEngineError as e:
        if e.written:
            output.warning(f"{e.written} note(s) were written to {engine.directory} before the failure")
        _exit_with_failure(output, "pull notes", e)

    output.print_pull_summary(result, str(engine.directory))
    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def push(
    ctx: typer.Context,
    file: str = typer.Argument(
        ...,
        help="Note file with an id in its frontmatter",
    ),
) -> None:
    """Send a pulled note file back to Kibela as an update."""
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)
    engine = _build_engine(options, output)

    try:
        with output.spinner(f"Pushing {file}..."):
            note = engine.push(file)
    except SyncEngineError as e:
        _exit_with_failure(output, f"push {file}", e)

    output.success(f"Updated note {note.id}")
    if note.url:
        output.info(f"  {note.url}")
    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def publish(
    ctx: typer.Context,
    file: Optional[str] = typer.Option(
        None,
        "--file",
        "-f",
        help="File to publish (reads standard input when omitted)",
        metavar="FILE",
    ),
    directory: Optional[str] = typer.Option(
        None,
        "--dir",
        "-d",
        help="Sync directory the new note is written to",
        metavar="DIR",
    ),
) -> None:
    """Create a new note from frontmatter Markdown and save it locally."""
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)

    if file:
        try:
            content = Path(file).read_text(encoding="utf-8")
        except OSError as e:
            output.error(f"Cannot read {file}: {e}")
            raise typer.Exit(ExitCode.GENERAL_ERROR)
        except UnicodeDecodeError as e:
            output.error(f"Cannot read {file}: not valid UTF-8 text (byte {e.start})")
            raise typer.Exit(ExitCode.GENERAL_ERROR)
    elif sys.stdin.isatty():
        output.error("Nothing to publish: pass --file or pipe a note on standard input")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    else:
        content = sys.stdin.read()

    if not content.strip():
        output.error("Nothing to publish: input is empty")
        raise typer.Exit(ExitCode.INVALID_DOCUMENT)

    engine = _build_engine(options, output, directory)

    try:
        with output.spinner("Publishing note..."):
            result = engine.publish(content)
    except SyncEngineError as e:
        _exit_with_failure(output, "publish note", e)

    output.success(f"Published note {result.note.id} to {result.path}")
    if result.note.url:
        output.info(f"  {result.note.url}")
    raise typer.Exit(ExitCode.SUCCESS)


@config_app.command("show")
def config_show(
    ctx: typer.Context,
    directory: Optional[str] = typer.Option(
        None,
        "--dir",
        "-d",
        help="Sync directory override to apply",
        metavar="DIR",
    ),
) -> None:
    """Show the resolved team, token (masked) and directory with their sources."""
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)

    try:
        resolved = ConfigLoader.resolve(options.config_path, directory)
    except CLIError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    rows = (
        ("team", resolved.team or "(not set)"),
        ("token", ConfigLoader.mask_token(resolved.token)),
        ("directory", resolved.directory),
    )
    for key, value in rows:
        source = resolved.sources.get(key)
        suffix = f"  ({source})" if source else ""
        output.print(f"{key}: {value}{suffix}")

    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
