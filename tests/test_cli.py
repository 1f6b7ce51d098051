"""
Tests for the JSON command-line bridge (python -m sheetdraft).
"""

import json

import pytest

from sheetdraft.__main__ import main


def run_cli(capsys, *argv):
    main(list(argv))
    out = capsys.readouterr().out
    return json.loads(out)


class TestLoadCommands:
    def test_load_csv(self, capsys, settings_home, contacts_csv_path):
        resp = run_cli(capsys, "load-csv", str(contacts_csv_path))

        assert resp["success"] is True
        assert resp["error"] is None
        assert resp["data"]["count"] == 4
        assert resp["data"]["headers"] == ["COMPANY NAME", "AGENT NAME", "Email", "City"]
        assert resp["data"]["rows"][1]["_id"] == 1
        assert resp["data"]["rows"][1]["AGENT NAME"] == "Bob Stone"

    def test_load_csv_missing_file(self, capsys, settings_home, tmp_path):
        resp = run_cli(capsys, "load-csv", str(tmp_path / "missing.csv"))

        assert resp["success"] is False
        assert resp["data"] is None
        assert "missing.csv" in resp["error"]

    def test_load_sheet_bad_url(self, capsys, settings_home):
        resp = run_cli(capsys, "load-sheet", "https://example.com/x.csv")

        assert resp == {"success": False, "data": None, "error": "Invalid Google Sheets URL"}


class TestSelectionCommands:
    def test_companies(self, capsys, settings_home, contacts_csv_path):
        resp = run_cli(capsys, "companies", "--contacts", str(contacts_csv_path))

        assert resp["data"]["companies"] == ["Acme Realty", "Blue Door, LLC", "Zen Homes"]

    def test_contacts_for_company(self, capsys, settings_home, contacts_csv_path):
        resp = run_cli(capsys, "contacts", "--company", "Zen Homes", "--contacts", str(contacts_csv_path))

        assert resp["data"]["contacts"] == [{"id": 3, "label": 'Dan "The Man" Ng'}]

    def test_templates(self, capsys, settings_home, templates_csv_path):
        resp = run_cli(capsys, "templates", "--templates", str(templates_csv_path))

        assert [t["label"] for t in resp["data"]["templates"]] == ["Intro", "Follow up"]

    def test_no_source_configured(self, capsys, settings_home):
        resp = run_cli(capsys, "companies")

        assert resp["success"] is False
        assert resp["error"].startswith("Error loading contacts:")


class TestDraftCommand:
    def test_draft(self, capsys, settings_home, contacts_csv_path, templates_csv_path):
        resp = run_cli(
            capsys, "draft",
            "--contact-id", "2", "--template-id", "0",
            "--contacts", str(contacts_csv_path),
            "--templates", str(templates_csv_path),
        )

        assert resp["success"] is True
        assert resp["data"]["subject"] == "Hello from us - Blue Door, LLC"
        assert resp["data"]["body"] == "Hi Cara Diaz,\n\nI saw your listings in {City}.\nBest"
        assert resp["data"]["unresolved"] == ["City"]

    def test_draft_unknown_id(self, capsys, settings_home, contacts_csv_path, templates_csv_path):
        resp = run_cli(
            capsys, "draft",
            "--contact-id", "42", "--template-id", "0",
            "--contacts", str(contacts_csv_path),
            "--templates", str(templates_csv_path),
        )

        assert resp["success"] is False

    def test_draft_uses_configured_sources(self, capsys, settings_home, contacts_csv_path, templates_csv_path):
        run_cli(capsys, "config", "set", "contacts_source", str(contacts_csv_path))
        run_cli(capsys, "config", "set", "templates_source", str(templates_csv_path))

        resp = run_cli(capsys, "draft", "--contact-id", "0", "--template-id", "1")

        assert resp["data"]["subject"] == "Following up"
        assert resp["data"]["unresolved"] == ["Unknown"]


class TestConfigCommands:
    def test_show_defaults(self, capsys, settings_home):
        resp = run_cli(capsys, "config", "show")

        assert resp["data"]["path"] == str(settings_home / "settings.json")
        assert resp["data"]["settings"]["company_column"] == "COMPANY NAME"

    def test_set_timeout(self, capsys, settings_home):
        resp = run_cli(capsys, "config", "set", "timeout", "5")

        assert resp["data"]["settings"]["timeout"] == 5
        assert run_cli(capsys, "config", "show")["data"]["settings"]["timeout"] == 5

    @pytest.mark.parametrize("key,value", [("colour", "red"), ("timeout", "soon")])
    def test_set_rejects_bad_input(self, capsys, settings_home, key, value):
        resp = run_cli(capsys, "config", "set", key, value)

        assert resp["success"] is False
