"""Data models for CLI operations.

This module defines all data models used by the CLI module.
All models use dataclasses for clean, type-safe data structures,
following the patterns established in src/sync_engine/models.py.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional

from src.sync_engine.errors import ErrorKind


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Configuration, local I/O or unexpected failures
    - INVALID_DOCUMENT (2): Note file lacks metadata required by the command
    - AUTH_ERROR (3): Authentication failure
    - NETWORK_ERROR (4): DNS failure or timeout
    - REMOTE_ERROR (5): The API rejected the request (not found, permission,
      GraphQL or protocol errors)

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_DOCUMENT = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    REMOTE_ERROR = 5


EXIT_CODES_BY_KIND: Dict[ErrorKind, ExitCode] = {
    ErrorKind.AUTH_FAILURE: ExitCode.AUTH_ERROR,
    ErrorKind.NETWORK_UNREACHABLE: ExitCode.NETWORK_ERROR,
    ErrorKind.TIMEOUT: ExitCode.NETWORK_ERROR,
    ErrorKind.NOT_FOUND: ExitCode.REMOTE_ERROR,
    ErrorKind.PERMISSION_DENIED: ExitCode.REMOTE_ERROR,
    ErrorKind.GRAPHQL_GENERIC: ExitCode.REMOTE_ERROR,
    ErrorKind.PROTOCOL_VIOLATION: ExitCode.REMOTE_ERROR,
    ErrorKind.INVALID_DOCUMENT: ExitCode.INVALID_DOCUMENT,
    ErrorKind.LOCAL_IO: ExitCode.GENERAL_ERROR,
    ErrorKind.UNKNOWN: ExitCode.GENERAL_ERROR,
}


def exit_code_for(kind: ErrorKind) -> ExitCode:
    """Map a classified error kind to the process exit code."""
    return EXIT_CODES_BY_KIND.get(kind, ExitCode.GENERAL_ERROR)


@dataclass
class CLIOptions:
    """Global options shared by every command.

    Attributes:
        verbosity: 0=summary, 1=info, 2=debug
        no_color: Disable colored output
        config_path: Explicit config file path (None for the default)
    """
    verbosity: int = 0
    no_color: bool = False
    config_path: Optional[str] = None


@dataclass
class ResolvedConfig:
    """Settings after merging config file, environment and defaults.

    Values may be None when nothing provides them; sources records where
    each present value came from (file path, variable name or "default").

    Attributes:
        team: Kibela team name
        token: API access token
        directory: Local sync directory
        sources: Field name → origin of its value
    """
    team: Optional[str] = None
    token: Optional[str] = None
    directory: Optional[str] = None
    sources: Dict[str, str] = field(default_factory=dict)
