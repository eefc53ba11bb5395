"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Conversion completed successfully
    - GENERAL_ERROR (1): Configuration or filesystem problem
    - PARSE_ERROR (2): Input HTML could not be decoded or parsed

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
