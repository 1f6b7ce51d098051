"""
Tests for sheetdraft/settings.py.
"""

import json

from sheetdraft.settings import default_settings, load_settings, save_settings, settings_path


class TestSettings:
    def test_path_follows_env(self, settings_home):
        assert settings_path() == settings_home / "settings.json"

    def test_missing_file_gives_defaults(self, settings_home):
        data = load_settings()

        assert data == default_settings()
        assert data["company_column"] == "COMPANY NAME"
        assert data["contact_column"] == "AGENT NAME"
        assert data["template_column"] == "TemplateName"

    def test_round_trip(self, settings_home):
        data = default_settings()
        data["contacts_source"] = "https://docs.google.com/spreadsheets/d/abc/edit"

        path = save_settings(data)

        assert path.exists()
        assert load_settings()["contacts_source"] == data["contacts_source"]
        assert not list(settings_home.glob("*.tmp"))

    def test_partial_file_filled_with_defaults(self, settings_home):
        (settings_home / "settings.json").write_text(
            json.dumps({"templates_source": "t.csv", "timeout": "7"}), encoding="utf-8"
        )

        data = load_settings()

        assert data["templates_source"] == "t.csv"
        assert data["timeout"] == 7
        assert data["contacts_source"] == ""

    def test_corrupt_file_gives_defaults(self, settings_home, caplog):
        (settings_home / "settings.json").write_text("{not json", encoding="utf-8")

        assert load_settings() == default_settings()
        assert "using defaults" in caplog.text

    def test_non_object_gives_defaults(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert load_settings(path) == default_settings()

    def test_bad_timeout_reset(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"timeout": "soon"}), encoding="utf-8")

        assert load_settings(path)["timeout"] == default_settings()["timeout"]
