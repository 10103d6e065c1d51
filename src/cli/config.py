"""Configuration loading and validation.

This module resolves the team, token and sync directory the CLI hands to
the sync engine. Values are looked up, in priority order, in:

    1. The YAML config file (~/.kibela-sync/config.yaml or --config)
    2. Environment variables, including a .env file (KIBELA_TEAM,
       KIBELA_TOKEN / KIBELA_API_KEY, KIBELA_DIR)
    3. Built-in defaults (directory only)

A --dir option on a command overrides the directory from every source.
"""

import logging
import os
import re
from typing import Any, Dict, Optional

import yaml

from src.graphql_client.auth import Authenticator
from src.sync_engine.models import SyncConfig

from .errors import ConfigError, ConfigFilesystemError
from .models import ResolvedConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles configuration file loading, merging and validation.

    Configuration file structure:
        team: "acme"
        token: "secret"          # optional, prefer KIBELA_TOKEN
        directory: "./notes"

    A missing file is not an error: everything can come from the
    environment.
    """

    DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser("~"), ".kibela-sync", "config.yaml")
    DEFAULT_DIRECTORY = "./notes"

    KNOWN_FIELDS = ('team', 'token', 'directory')

    # Team names are used as a subdomain
    TEAM_PATTERN = re.compile(r'^[a-zA-Z0-9-]+$')

    @classmethod
    def read_file(cls, config_path: str) -> Dict[str, Any]:
        """Read and parse the YAML config file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Parsed mapping, or an empty dict when the file does not exist

        Raises:
            ConfigFilesystemError: If the file exists but cannot be read
            ConfigError: If the YAML is malformed or not a mapping
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            logger.debug(f"No config file at {config_path}")
            return {}
        except PermissionError:
            raise ConfigFilesystemError(
                config_path,
                'read',
                'Permission denied'
            )
        except OSError as e:
            raise ConfigFilesystemError(
                config_path,
                'read',
                str(e)
            )

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax in {config_path}: {str(e)}"
            )

        if config_dict is None:
            return {}

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        for key in config_dict:
            if key not in cls.KNOWN_FIELDS:
                logger.warning(f"Ignoring unknown config field '{key}' in {config_path}")

        for key in cls.KNOWN_FIELDS:
            value = config_dict.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigError(
                    f"must be a string, got {type(value).__name__}",
                    key
                )

        return config_dict

    @classmethod
    def resolve(
        cls,
        config_path: Optional[str] = None,
        directory: Optional[str] = None,
        authenticator: Optional[Authenticator] = None,
    ) -> ResolvedConfig:
        """Merge config file, environment and defaults without validating.

        Args:
            config_path: Config file path (defaults to DEFAULT_CONFIG_PATH)
            directory: Directory override from the command line
            authenticator: Environment reader (created when not provided)

        Returns:
            ResolvedConfig whose fields may be None
        """
        config_path = config_path or cls.DEFAULT_CONFIG_PATH
        file_values = cls.read_file(config_path)
        authenticator = authenticator or Authenticator()

        env_lookups = {
            'team': authenticator.get_team,
            'token': authenticator.get_token,
            'directory': authenticator.get_directory,
        }

        resolved = ResolvedConfig()
        for key in cls.KNOWN_FIELDS:
            value = file_values.get(key)
            if value and value.strip():
                setattr(resolved, key, value.strip())
                resolved.sources[key] = config_path
                continue

            value, variable = env_lookups[key]()
            if value:
                setattr(resolved, key, value)
                resolved.sources[key] = variable

        if directory:
            resolved.directory = directory
            resolved.sources['directory'] = '--dir'
        elif not resolved.directory:
            resolved.directory = cls.DEFAULT_DIRECTORY
            resolved.sources['directory'] = 'default'

        return resolved

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        directory: Optional[str] = None,
        authenticator: Optional[Authenticator] = None,
    ) -> SyncConfig:
        """Resolve and validate settings for the sync engine.

        Args:
            config_path: Config file path (defaults to DEFAULT_CONFIG_PATH)
            directory: Directory override from the command line
            authenticator: Environment reader (created when not provided)

        Returns:
            Validated SyncConfig

        Raises:
            ConfigError: If team or token is missing, or team is malformed
            ConfigFilesystemError: If the config file cannot be read
        """
        resolved = cls.resolve(config_path, directory, authenticator)

        if not resolved.team:
            raise ConfigError(
                "Team name is required (set KIBELA_TEAM or 'team' in the config file)",
                'team'
            )
        if not cls.TEAM_PATTERN.match(resolved.team):
            raise ConfigError(
                f"Invalid team name '{resolved.team}'. "
                f"Use letters, digits and hyphens only.",
                'team'
            )
        if not resolved.token:
            raise ConfigError(
                "API token is required (set KIBELA_TOKEN or 'token' in the config file)",
                'token'
            )

        logger.info(
            f"Using team '{resolved.team}' ({resolved.sources['team']}), "
            f"directory {resolved.directory} ({resolved.sources['directory']})"
        )
        return SyncConfig(
            team=resolved.team,
            token=resolved.token,
            directory=resolved.directory,
        )

    @staticmethod
    def mask_token(token: Optional[str]) -> str:
        """Mask all but the last four characters of a token for display.

        Example:
            >>> ConfigLoader.mask_token("secret-token-1234")
            '*************1234'
        """
        if not token:
            return "(not set)"
        if len(token) <= 4:
            return "*" * len(token)
        return "*" * (len(token) - 4) + token[-4:]
