"""Main CLI entry point for confluence-md command.

This module provides the Typer application that converts Confluence view
HTML (a page body as returned by the REST API) into markdown. Input comes
from a file or stdin; markdown goes to stdout or an output file.
"""

import dataclasses
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.errors import CLIError, ConfigError, FilesystemError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.content_converter import MarkdownConverter, ParseError

VERSION = "0.1.0"

app = typer.Typer(
    name="confluence-md",
    help="""Convert Confluence view HTML into compact Markdown.

QUICK START:
  confluence-md page.html                  # Print markdown to stdout
  cat page.html | confluence-md            # Read HTML from stdin
  confluence-md page.html -o page.md       # Write markdown to a file""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)


# Console and file handlers share the date format; the file adds the logger name
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_CONSOLE_FORMAT = "%(asctime)s [%(levelname)8s] %(message)s"
_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _log_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def _attach_handler(app_logger: logging.Logger, handler: logging.Handler,
                    level: int, fmt: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=_DATE_FORMAT))
    app_logger.addHandler(handler)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Route converter logs to stderr and, optionally, a timestamped file.

    Only the 'src' logger is touched; the root logger and third-party
    loggers keep their configuration. Handlers left by an earlier call are
    closed and replaced, so repeated invocations in one process log once.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2 or more=DEBUG
        logdir: Directory for a confluence-md_<timestamp>.log file
    """
    level = _log_level(verbosity)
    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    _attach_handler(app_logger, logging.StreamHandler(sys.stderr), level, _CONSOLE_FORMAT)

    if not logdir:
        return

    log_path = Path(logdir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f"confluence-md_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    _attach_handler(app_logger, logging.FileHandler(log_file, encoding="utf-8"), level, _FILE_FORMAT)
    logger.info(f"Logging to file: {log_file}")


def _read_input(file: Optional[str]) -> bytes:
    """Read raw HTML bytes from a file, or stdin when file is None or '-'.

    Raises:
        FilesystemError: If the file cannot be read
    """
    if file is None or file == "-":
        return typer.get_binary_stream("stdin").read()

    try:
        with open(file, "rb") as f:
            return f.read()
    except FileNotFoundError:
        raise FilesystemError(file, "read", "File not found")
    except PermissionError:
        raise FilesystemError(file, "read", "Permission denied")
    except OSError as e:
        raise FilesystemError(file, "read", str(e))


def _write_output(output_path: str, markdown: str) -> None:
    """Write markdown to a file, creating parent directories.

    Raises:
        FilesystemError: If the file cannot be written
    """
    try:
        path = Path(output_path)
        if path.parent != Path("."):
            path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown + "\n", encoding="utf-8")
    except PermissionError:
        raise FilesystemError(output_path, "write", "Permission denied")
    except OSError as e:
        raise FilesystemError(output_path, "write", str(e))


@app.command()
def main_command(
    file: Optional[str] = typer.Argument(
        None,
        help="HTML file to convert (reads stdin when omitted or '-')",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write markdown to this file instead of stdout",
        metavar="PATH",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help=f"YAML settings file (default: {ConfigLoader.DEFAULT_CONFIG_FILE} if present)",
        metavar="PATH",
    ),
    bullet: Optional[str] = typer.Option(
        None,
        "--bullet",
        help="Bullet marker for unordered lists: -, * or +",
    ),
    no_escape: bool = typer.Option(
        False,
        "--no-escape",
        help="Do not backslash-escape markdown characters in text",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
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
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Convert Confluence view HTML into compact Markdown.

    \b
    EXAMPLES:
      confluence-md page.html
      confluence-md page.html -o page.md --bullet '*'
      curl -s "$PAGE_BODY_URL" | confluence-md --config team.yaml
    """
    if version:
        typer.echo(f"confluence-md version {VERSION}")
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        options = ConfigLoader.resolve(config_path)
        if bullet is not None:
            if bullet not in ConfigLoader.CHOICES["bullet_marker"]:
                raise ConfigError(f"Value {bullet!r} is not one of '-', '*', '+'", "bullet_marker")
            options = dataclasses.replace(options, bullet_marker=bullet)
        if no_escape:
            options = dataclasses.replace(options, escape_markdown=False)
        output.debug(f"Options: {options}")

        source = file if file not in (None, "-") else "stdin"
        output.info(f"Converting {source}...")
        html = _read_input(file)
        markdown = MarkdownConverter(options).convert(html)
        if not markdown:
            output.warning(f"No content found in {source}")

        if output_path:
            _write_output(output_path, markdown)
            output.success(f"Wrote {output_path}")
        else:
            typer.echo(markdown)

        raise typer.Exit(ExitCode.SUCCESS)

    except ParseError as e:
        logger.error(f"Conversion failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.PARSE_ERROR)

    except CLIError as e:
        logger.error(f"Conversion failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except typer.Exit:
        raise

    except Exception as e:
        logger.exception("Unexpected error during conversion")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
