# sheetdraft/selection.py

from typing import List, Dict, Optional

from sheetdraft.csv_table import Table
from sheetdraft.merger import MergeResult, merge


DEFAULT_COMPANY_COLUMN = "COMPANY NAME"
DEFAULT_CONTACT_COLUMN = "AGENT NAME"
DEFAULT_TEMPLATE_COLUMN = "TemplateName"


# ============================================================
# dropdown data
# ============================================================

def companies(contacts: Table, column: str = DEFAULT_COMPANY_COLUMN) -> List[str]:
    """Unique, non-empty company names, sorted."""
    return sorted({r.get(column, "") for r in contacts} - {""})


def contacts_for_company(
    contacts: Table,
    company: str,
    column: str = DEFAULT_COMPANY_COLUMN,
) -> Table:
    return contacts.filter(column, company)


def choices(table: Table, label_column: str) -> List[Dict]:
    """
    Build dropdown entries for a table.

    Returns list of dicts with keys:
        id       (record id, stable across filtering)
        label    (value of label_column, "" if missing)
    """
    return [{"id": r.rid, "label": r.get(label_column, "")} for r in table]


# ============================================================
# draft construction
# ============================================================

def build_draft(
    contacts: Table,
    templates: Table,
    contact_id,
    template_id,
) -> Optional[MergeResult]:
    """
    Merge the selected contact into the selected template.

    Returns None when either selection is empty or unknown; the caller
    clears its output in that case.
    """
    if contact_id is None or template_id is None or contact_id == "" or template_id == "":
        return None

    contact = contacts.get(contact_id)
    template = templates.get(template_id)
    if contact is None or template is None:
        return None

    return merge(contact, template)
