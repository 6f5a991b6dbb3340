import os

import pytest

from objmeta import Env


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Run every test without OBJMETA_* overrides or a props file"""
    for key in list(os.environ):
        if key.startswith("OBJMETA_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("OBJMETA_HOME", str(tmp_path))
    Env.cur().reload()
    yield
    Env.cur().reload()
