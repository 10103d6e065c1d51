"""Authentication module for loading Kibela credentials.

This module handles loading the team name and API token from environment
variables using python-dotenv, and builds the team-scoped GraphQL endpoint
the transport posts to.
"""

import os
from typing import NamedTuple, Optional, Tuple

from dotenv import load_dotenv


ENDPOINT_TEMPLATE = "https://{team}.kibe.la/api/v1"


class Credentials(NamedTuple):
    """Kibela API credentials."""
    team: str
    token: str

    @property
    def endpoint(self) -> str:
        """Team-scoped GraphQL endpoint URL."""
        return ENDPOINT_TEMPLATE.format(team=self.team)


class Authenticator:
    """Loads Kibela credentials from environment variables.

    Values are read from the process environment after loading a .env file
    with python-dotenv. Variables already set in the environment win over
    the .env file. Credentials are never cached or logged.

    Recognized environment variables:
        KIBELA_TEAM: Team (subdomain) name, e.g. "acme" for acme.kibe.la
        KIBELA_TOKEN: Personal access token (KIBELA_API_KEY is accepted too)
        KIBELA_DIR: Default sync directory

    Example:
        >>> auth = Authenticator()
        >>> team, source = auth.get_team()
    """

    TEAM_VARIABLES = ("KIBELA_TEAM",)
    TOKEN_VARIABLES = ("KIBELA_TOKEN", "KIBELA_API_KEY")
    DIRECTORY_VARIABLES = ("KIBELA_DIR",)

    def __init__(self, env_file: Optional[str] = None):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            env_file: Optional explicit path to a .env file
        """
        load_dotenv(env_file)

    @staticmethod
    def _lookup(names: Tuple[str, ...]) -> Tuple[Optional[str], Optional[str]]:
        for name in names:
            value = os.getenv(name)
            if value and value.strip():
                return value.strip(), name
        return None, None

    def get_team(self) -> Tuple[Optional[str], Optional[str]]:
        """Return (team, variable name) or (None, None) when unset."""
        return self._lookup(self.TEAM_VARIABLES)

    def get_token(self) -> Tuple[Optional[str], Optional[str]]:
        """Return (token, variable name) or (None, None) when unset."""
        return self._lookup(self.TOKEN_VARIABLES)

    def get_directory(self) -> Tuple[Optional[str], Optional[str]]:
        """Return (directory, variable name) or (None, None) when unset."""
        return self._lookup(self.DIRECTORY_VARIABLES)
