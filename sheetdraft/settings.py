# sheetdraft/settings.py

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from appdirs import user_data_dir

from sheetdraft.data_sources import DEFAULT_TIMEOUT
from sheetdraft.selection import (
    DEFAULT_COMPANY_COLUMN,
    DEFAULT_CONTACT_COLUMN,
    DEFAULT_TEMPLATE_COLUMN,
)


logger = logging.getLogger(__name__)

APP_NAME = "SheetDraft"
APP_AUTHOR = "SheetDraft"
SETTINGS_FILENAME = "settings.json"
HOME_ENV = "SHEETDRAFT_HOME"


def default_settings() -> Dict[str, Any]:
    return {
        "contacts_source": "",
        "templates_source": "",
        "company_column": DEFAULT_COMPANY_COLUMN,
        "contact_column": DEFAULT_CONTACT_COLUMN,
        "template_column": DEFAULT_TEMPLATE_COLUMN,
        "timeout": DEFAULT_TIMEOUT,
    }


def settings_path() -> Path:
    base = os.environ.get(HOME_ENV) or user_data_dir(APP_NAME, APP_AUTHOR)
    return Path(base).expanduser() / SETTINGS_FILENAME


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from disk.

    Handles:
    - Missing settings file (defaults)
    - Corrupt or non-object JSON (defaults, with a warning)
    - Keys added since the file was written (filled from defaults)
    """
    p = Path(path) if path else settings_path()

    if not p.exists():
        return default_settings()

    try:
        with open(p, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not read settings from %s (%s); using defaults", p, e)
        return default_settings()

    if not isinstance(data, dict):
        logger.warning("Settings file %s does not hold an object; using defaults", p)
        return default_settings()

    for k, v in default_settings().items():
        data.setdefault(k, v)

    try:
        data["timeout"] = int(data["timeout"])
    except (TypeError, ValueError):
        data["timeout"] = DEFAULT_TIMEOUT

    return data


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """
    Atomically save settings as JSON.

    Writes to a temporary file in the same directory, then moves it over
    the destination so a crash mid-write never leaves a truncated file.
    """
    p = Path(path) if path else settings_path()
    parent = p.parent
    tmp_path = None

    parent.mkdir(parents=True, exist_ok=True)

    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(parent),
            prefix=p.name + ".",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(p))
    except Exception:
        if tmp_path and tmp_path.exists():
            tmp_path.unlink()
        raise

    logger.debug("Saved settings to %s", p)
    return p
