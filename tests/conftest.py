"""Root pytest configuration for all tests."""

import pytest


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep real Kibela credentials and .env files out of every test.

    Tests run from an empty working directory so python-dotenv finds no
    .env file, and the KIBELA_* variables are cleared.
    """
    for name in ("KIBELA_TEAM", "KIBELA_TOKEN", "KIBELA_API_KEY", "KIBELA_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
