"""Command-line interface for Confluence HTML to markdown conversion.

This package provides the `confluence-md` CLI tool that reads a Confluence
page body (view HTML) from a file or stdin and prints compact markdown,
with settings from an optional YAML file.
"""

from .config import ConfigLoader
from .models import ExitCode
from .errors import (
    CLIError,
    ConfigError,
    FilesystemError,
)

__all__ = [
    'ConfigLoader',
    'ExitCode',
    'CLIError',
    'ConfigError',
    'FilesystemError',
]
