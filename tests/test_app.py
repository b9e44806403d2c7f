"""
Tests for the application factory, the page route and the CLI.
"""

import logging
import sqlite3

from app import create_app
from tracker import __version__
from tracker.config import Settings


class TestIndexPage:

    def test_renders_form_and_table(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert 'id="plant-form"' in html
        assert 'id="plants-table"' in html
        assert 'data-api-url="/api/plants"' in html
        assert __version__ in html

    def test_static_script(self, client):
        resp = client.get("/static/js/plants.js")
        assert resp.status_code == 200
        resp.close()


class TestFactory:

    def test_creates_schema(self, tmp_path):
        db_file = tmp_path / "nested" / "fresh.db"
        create_app(Settings(config_path=tmp_path / "absent.toml",
                            database_path=str(db_file)))
        conn = sqlite3.connect(str(db_file))
        try:
            tables = {r[0] for r in conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'")}
        finally:
            conn.close()
        assert "plants" in tables

    def test_settings_in_config(self, app, settings):
        assert app.config["DATABASE_PATH"] == settings.database_path
        assert app.extensions["tracker_settings"] is settings


class TestCli:

    def test_init_db(self, app, settings):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["init-db"])
        assert result.exit_code == 0
        assert "Initialized database" in result.output


class TestLogging:

    def test_each_app_sets_root_level(self, tmp_path, db_path):
        root = logging.getLogger()
        previous = root.level
        try:
            for level, expected in (("debug", logging.DEBUG), ("error", logging.ERROR)):
                create_app(Settings(config_path=tmp_path / "absent.toml",
                                    database_path=str(db_path), log_level=level))
                assert root.level == expected
        finally:
            root.setLevel(previous)
