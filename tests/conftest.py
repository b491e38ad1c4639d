import re

import pytest

from ai_cz.secrets import TokenStore

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

TEST_KEY = bytes(range(32))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the real home directory and API key."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("AI_CZ_MODEL", raising=False)
    monkeypatch.delenv("AI_CZ_CONFIG_ROOT", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "home")


@pytest.fixture
def store(tmp_path):
    return TokenStore(tmp_path / "config" / "ai-cz", key=TEST_KEY)


@pytest.fixture
def answers(monkeypatch):
    """Feed canned answers to input() and getpass()."""
    def _feed(*values):
        it = iter(values)
        reader = lambda prompt='': next(it)
        monkeypatch.setattr("builtins.input", reader)
        monkeypatch.setattr("getpass.getpass", reader)
    return _feed


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip
