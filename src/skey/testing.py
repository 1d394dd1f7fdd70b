"""Pytest fixtures for testing code built on skey.

Usage in conftest.py:
    pytest_plugins = ["skey.testing"]

Available fixtures:
    - skey_config_dir: Isolated config directory (XDG_CONFIG_HOME in tmp_path)
    - scripted_secret: Factory for secret readers that replay fixed secrets
    - scripted_words: Factory for word readers that replay fixed input lines
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generator

import pytest

if TYPE_CHECKING:
    from pathlib import Path


class ScriptedReader:
    """Callable that returns queued responses in order.

    Stands in for an interactive prompt. Raises EOFError once exhausted,
    like input() at end of file.
    """

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if not self._responses:
            raise EOFError("no scripted input left")
        return self._responses.pop(0)


def make_secret_reader(*secrets: bytes | str) -> ScriptedReader:
    """Build a reader that returns each secret (as bytes) in turn."""
    return ScriptedReader(s.encode("utf-8") if isinstance(s, str) else s for s in secrets)


def make_words_reader(*lines: str) -> ScriptedReader:
    """Build a reader that returns each line split into words."""
    return ScriptedReader(line.split() for line in lines)


@pytest.fixture
def skey_config_dir(
    tmp_path: "Path", monkeypatch: pytest.MonkeyPatch
) -> Generator["Path", None, None]:
    """Point skey configuration at an empty directory under tmp_path.

    Clears SKEY_* environment overrides for the duration of the test.

    Example:
        def test_defaults(skey_config_dir):
            assert SkeyConfig.load().default_hash == "otp-md5"
    """
    for name in ("SKEY_CONFIG", "SKEY_HASH", "SKEY_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    yield tmp_path / "skey"


@pytest.fixture
def scripted_secret() -> Callable[..., ScriptedReader]:
    """Factory for secret readers.

    Example:
        def test_generate(scripted_secret):
            reader = scripted_secret("This is a test.")
            run_generate(["0", "test"], config=SkeyConfig(), read_secret=reader)
    """
    return make_secret_reader


@pytest.fixture
def scripted_words() -> Callable[..., ScriptedReader]:
    """Factory for word readers, one line per prompt."""
    return make_words_reader
