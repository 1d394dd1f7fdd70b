"""Shared pytest configuration and fixtures."""

import pytest

pytest_plugins = ["skey.testing"]


@pytest.fixture(autouse=True)
def isolated_config(skey_config_dir):
    """Keep every test away from the user's real ~/.config/skey."""
    yield skey_config_dir
