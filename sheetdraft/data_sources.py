# sheetdraft/data_sources.py

import logging
import re
import ssl
import urllib.parse
import urllib.request

import certifi

from sheetdraft.csv_table import Table, parse


logger = logging.getLogger(__name__)

GS_HOST = "docs.google.com"
DEFAULT_TIMEOUT = 20


# -------------------------------------------------
# Public API
# -------------------------------------------------

def load_csv(path: str) -> Table:
    """
    Load a local CSV file into a Table.

    The file is read as UTF-8; a leading BOM is handled by the parser.
    """
    with open(path, mode="r", encoding="utf-8", newline="") as f:
        text = f.read()

    logger.debug("Read %d character(s) from %s", len(text), path)
    return parse(text)


def load_google_sheet(sheet_url: str, timeout: int = DEFAULT_TIMEOUT) -> Table:
    """
    Load a public Google Sheet into a Table.

    Accepts sharing links (with an optional gid) and
    "Publish to the web" links.
    """
    export_url = gsheet_to_export_csv_url(sheet_url)
    if not export_url:
        raise ValueError("Invalid Google Sheets URL")

    csv_text = _fetch_csv_text(export_url, timeout=timeout)
    return parse(csv_text)


def load_source(source: str, timeout: int = DEFAULT_TIMEOUT) -> Table:
    """Load from a URL or a file path, whichever `source` is."""
    if not source:
        raise ValueError("No data source configured")

    if is_url(source):
        return load_google_sheet(source, timeout=timeout)
    return load_csv(source)


def is_url(source: str) -> bool:
    return urllib.parse.urlparse(source).scheme in ("http", "https")


def gsheet_to_export_csv_url(url: str) -> str:
    """
    Turn a Google Sheets link into a CSV download URL.

    Returns "" when the link is not a Google Sheets link.
    """
    try:
        parsed = urllib.parse.urlparse(url)
    except ValueError:
        return ""

    if GS_HOST not in parsed.netloc:
        return ""

    # Published sheets: /spreadsheets/d/e/<pub id>/pub?...; keep the query, force CSV.
    m = re.search(r"/spreadsheets/d/e/([a-zA-Z0-9\-_]+)", parsed.path)
    if m:
        query = dict(urllib.parse.parse_qsl(parsed.query))
        query["output"] = "csv"
        q = urllib.parse.urlencode(query)
        return f"https://{GS_HOST}/spreadsheets/d/e/{m.group(1)}/pub?{q}"

    m = re.search(r"/spreadsheets/d/([a-zA-Z0-9\-_]+)", parsed.path)
    if not m:
        return ""

    ssid = m.group(1)

    gid = "0"
    for part in (parsed.fragment, parsed.query):
        mg = re.search(r"gid=(\d+)", part or "")
        if mg:
            gid = mg.group(1)
            break

    q = urllib.parse.urlencode({"format": "csv", "gid": gid})
    return f"https://{GS_HOST}/spreadsheets/d/{ssid}/export?{q}"


# -------------------------------------------------
# Internal helpers
# -------------------------------------------------

def _fetch_csv_text(export_csv_url: str, timeout: int = DEFAULT_TIMEOUT) -> str:
    req = urllib.request.Request(
        export_csv_url,
        headers={
            "User-Agent": (
                "Mozilla/5.0 (X11; Linux x86_64) "
                "AppleWebKit/537.36 (KHTML, like Gecko) "
                "Chrome/122.0 Safari/537.36"
            )
        },
        method="GET",
    )

    context = ssl.create_default_context(cafile=certifi.where())

    logger.info("Fetching %s", export_csv_url)
    with urllib.request.urlopen(req, timeout=timeout, context=context) as resp:
        if resp.status != 200:
            raise RuntimeError(f"HTTP {resp.status}")

        data = resp.read()

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("Response from %s is not valid UTF-8; replacing bad bytes", export_csv_url)
        return data.decode("utf-8", errors="replace")
