"""
Tests for Settings resolution: overrides > environment > TOML > defaults.
"""

import pytest

from tracker.config import DEFAULTS, Settings, get_config_path, load_toml_config

TOML = """
[database]
path = "/srv/plants/plants.db"

[network]
bind_address = "0.0.0.0"
bind_port = 8080

[logging]
level = "DEBUG"

[api]
cors_origin = "https://plants.example.org"
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in list(DEFAULTS) + ["config"]:
        monkeypatch.delenv("PLANT_TRACKER_" + name.upper(), raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(TOML, encoding="utf-8")
    return path


class TestDefaults:

    def test_without_config_file(self, tmp_path):
        settings = Settings(config_path=tmp_path / "absent.toml")
        assert settings.database_path == "plants.db"
        assert settings.bind_address == "127.0.0.1"
        assert settings.bind_port == 5000
        assert settings.log_level == "info"
        assert settings.cors_origin == "*"

    def test_config_path_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PLANT_TRACKER_CONFIG", str(tmp_path / "x.toml"))
        assert get_config_path() == tmp_path / "x.toml"


class TestToml:

    def test_values_loaded(self, config_file):
        settings = Settings(config_path=config_file)
        assert settings.database_path == "/srv/plants/plants.db"
        assert settings.bind_address == "0.0.0.0"
        assert settings.bind_port == 8080
        assert settings.log_level == "debug"
        assert settings.cors_origin == "https://plants.example.org"

    def test_invalid_toml_is_ignored(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[network\nbind_port = ", encoding="utf-8")
        settings = Settings(config_path=path)
        assert settings.bind_port == 5000

    def test_load_invalid_raises(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("not = = toml", encoding="utf-8")
        with pytest.raises(ValueError):
            load_toml_config(path)

    def test_load_missing_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_toml_config(tmp_path / "nope.toml")


class TestPrecedence:

    def test_env_beats_toml(self, monkeypatch, config_file):
        monkeypatch.setenv("PLANT_TRACKER_BIND_PORT", "9999")
        monkeypatch.setenv("PLANT_TRACKER_DATABASE_PATH", "/tmp/env.db")
        settings = Settings(config_path=config_file)
        assert settings.bind_port == 9999
        assert settings.database_path == "/tmp/env.db"
        assert settings.bind_address == "0.0.0.0"

    def test_override_beats_env(self, monkeypatch, config_file):
        monkeypatch.setenv("PLANT_TRACKER_BIND_PORT", "9999")
        settings = Settings(config_path=config_file, bind_port=7000)
        assert settings.bind_port == 7000

    def test_unknown_override(self, tmp_path):
        with pytest.raises(TypeError):
            Settings(config_path=tmp_path / "absent.toml", colour="green")

    def test_unknown_log_level(self, tmp_path):
        with pytest.raises(ValueError):
            Settings(config_path=tmp_path / "absent.toml", log_level="chatty")

    def test_flask_config_keys(self, tmp_path):
        config = Settings(config_path=tmp_path / "absent.toml").as_flask_config()
        assert config["DATABASE_PATH"] == "plants.db"
        assert config["CORS_ORIGIN"] == "*"
