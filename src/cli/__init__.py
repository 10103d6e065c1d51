"""Command-line interface for Kibela note sync.

This package provides the `kibela-sync` CLI tool that resolves credentials
from the config file and environment, runs pull, push and publish through
the sync engine, and maps classified failures to exit codes.
"""

from .config import ConfigLoader
from .models import CLIOptions, ExitCode, ResolvedConfig, exit_code_for
from .errors import (
    CLIError,
    ConfigError,
    ConfigFilesystemError,
)

__all__ = [
    'ConfigLoader',
    'CLIOptions',
    'ExitCode',
    'ResolvedConfig',
    'exit_code_for',
    'CLIError',
    'ConfigError',
    'ConfigFilesystemError',
]
