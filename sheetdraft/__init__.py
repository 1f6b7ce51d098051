# sheetdraft/__init__.py
"""
SheetDraft - merge a contact sheet and a template sheet into email drafts.

This module provides the core functionality for:
- Parsing CSV text (quoted fields, escaped quotes, BOM, CRLF)
- Loading CSV from local files or public Google Sheets
- Picking a company, a contact and a template
- Substituting {placeholders} into a template's Subject and Body

Public API:
-----------
Parsing:
    parse(text: str) -> Table
    tokenize_line(line: str) -> List[str]

Data Loading:
    load_csv(path: str) -> Table
    load_google_sheet(url: str) -> Table
    load_source(source: str) -> Table

Selection:
    companies(contacts) -> List[str]
    contacts_for_company(contacts, company) -> Table
    choices(table, label_column) -> List[Dict]
    build_draft(contacts, templates, contact_id, template_id) -> Optional[MergeResult]

Merging:
    merge(contact, template) -> MergeResult

Parsing and merging never raise on bad data; loaders raise on I/O errors.
"""

from sheetdraft.csv_table import Record, Table, parse, tokenize_line
from sheetdraft.data_sources import load_csv, load_google_sheet, load_source
from sheetdraft.merger import MergeResult, PlaceholderResolver, merge
from sheetdraft.selection import build_draft, choices, companies, contacts_for_company

__version__ = "1.0.0"

__all__ = [
    # Parsing
    "Record",
    "Table",
    "parse",
    "tokenize_line",
    # Data loading
    "load_csv",
    "load_google_sheet",
    "load_source",
    # Selection
    "companies",
    "contacts_for_company",
    "choices",
    "build_draft",
    # Merging
    "MergeResult",
    "PlaceholderResolver",
    "merge",
]
