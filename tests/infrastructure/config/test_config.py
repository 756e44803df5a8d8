"""Tests for Settings"""
from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import BASE_DIR, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PORT", "HOST", "PUBLIC_ROOT", "DEBUG"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.port == 62030
        assert settings.host == "0.0.0.0"
        assert settings.debug is False
        assert settings.public_root == BASE_DIR / "public"

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8081")

        assert Settings(_env_file=None).port == 8081

    @pytest.mark.parametrize("value", ["0", "70000", "not-a-port"])
    def test_invalid_port_rejected(self, monkeypatch, value):
        monkeypatch.setenv("PORT", value)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_derived_paths(self, tmp_path):
        settings = Settings(_env_file=None, public_root=tmp_path)

        assert settings.server_root == tmp_path / "server"
        assert settings.assets_root == tmp_path / "server" / "assets"
        assert settings.images_dir == tmp_path / "server" / "assets" / "imgs"
        assert settings.timeline_path == tmp_path / "server" / "assets" / "json" / "timeline.json"

    def test_public_root_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PUBLIC_ROOT", str(tmp_path))

        assert Settings(_env_file=None).public_root == Path(tmp_path)
