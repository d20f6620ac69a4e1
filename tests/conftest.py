import os

import pytest

from core.config import AppSettings


@pytest.fixture
def settings(monkeypatch, tmp_path):
    """Settings isolated from the developer's .env files and environment."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("BRANDSCOUT_"):
            monkeypatch.delenv(key)
    return AppSettings(_env_file=None, ai_api_key="test-key")


