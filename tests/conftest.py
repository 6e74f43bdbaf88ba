"""Common test fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep developer env vars and .env files from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("CROCKID_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
