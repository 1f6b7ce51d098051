"""
SheetDraft Test Configuration and Shared Fixtures

Provides pytest fixtures for the sample sheets in tests/data, parsed
tables built from them, and an isolated settings directory.

Example usage:
    def test_something(contacts_table, templates_table):
        assert len(contacts_table) == 4
"""

import pytest
from pathlib import Path

from sheetdraft.data_sources import load_csv


@pytest.fixture
def test_data_dir():
    """
    Provide path to the test data directory.

    Returns:
        Path: Path to tests/data directory
    """
    return Path(__file__).parent / "data"


@pytest.fixture
def contacts_csv_path(test_data_dir):
    """Contacts sheet export: BOM, CRLF, quoted fields, one short row."""
    return test_data_dir / "contacts.csv"


@pytest.fixture
def templates_csv_path(test_data_dir):
    return test_data_dir / "templates.csv"


@pytest.fixture
def contacts_table(contacts_csv_path):
    return load_csv(str(contacts_csv_path))


@pytest.fixture
def templates_table(templates_csv_path):
    return load_csv(str(templates_csv_path))


@pytest.fixture
def settings_home(tmp_path, monkeypatch):
    """
    Point settings at a temporary directory.

    Returns:
        Path: Directory that will hold settings.json
    """
    monkeypatch.setenv("SHEETDRAFT_HOME", str(tmp_path))
    return tmp_path
