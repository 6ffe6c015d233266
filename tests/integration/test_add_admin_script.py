from __future__ import annotations

import runpy
from pathlib import Path

import pytest

from portal.config import refresh_settings_cache

pytestmark = pytest.mark.integration

SCRIPT_GLOBALS = runpy.run_path(
    str(Path(__file__).resolve().parents[2] / "scripts" / "add_admin.py")
)
MAIN = SCRIPT_GLOBALS["main"]


@pytest.fixture
def database_env(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'admin.sqlite'}")
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))
    refresh_settings_cache()
    yield
    refresh_settings_cache()


def test_creates_admin(database_env, capsys):
    assert MAIN(["root", "rootpass"]) == 0
    assert "Administrator 'root' created" in capsys.readouterr().out


def test_duplicate_admin_exits_1(database_env, capsys):
    assert MAIN(["root", "rootpass"]) == 0
    assert MAIN(["root", "otherpass"]) == 1
    assert "already registered" in capsys.readouterr().err


def test_short_password_exits_1(database_env, capsys):
    assert MAIN(["root", "123"]) == 1
    assert "at least 6" in capsys.readouterr().err
