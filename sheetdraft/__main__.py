#!/usr/bin/env python3
"""
SheetDraft CLI

Command-line interface for the SheetDraft engine.
This serves as the bridge between a browser/desktop frontend and the engine.

Usage:
    python -m sheetdraft load-csv <path>
    python -m sheetdraft load-sheet <url>
    python -m sheetdraft companies [--contacts <src>]
    python -m sheetdraft contacts --company <name> [--contacts <src>]
    python -m sheetdraft templates [--templates <src>]
    python -m sheetdraft draft --contact-id <id> --template-id <id>
    python -m sheetdraft config show
    python -m sheetdraft config set <key> <value>

All commands output JSON to stdout. Diagnostics go to stderr.
"""

import argparse
import json
import logging
import sys
from typing import Any

from sheetdraft.csv_table import Table


logger = logging.getLogger("sheetdraft")


def output_json(data: Any, success: bool = True) -> None:
    """Output JSON response to stdout."""
    response = {
        "success": success,
        "data": data if success else None,
        "error": None if success else data,
    }
    print(json.dumps(response, indent=2, ensure_ascii=False))


def _table_json(table: Table) -> dict:
    return {
        "rows": [dict(r.to_dict(), _id=r.rid) for r in table],
        "headers": table.headers,
        "count": len(table),
    }


def _load(args: argparse.Namespace, which: str) -> Table:
    from sheetdraft.data_sources import load_source

    source = getattr(args, which, None) or args.settings.get(f"{which}_source", "")
    if not source:
        raise ValueError(f"No {which} source: pass --{which} or run 'config set {which}_source <url>'")

    table = load_source(source, timeout=args.settings["timeout"])
    if not table:
        logger.warning("No %s found in %s; check the header row", which, source)
    return table


def cmd_load_csv(args: argparse.Namespace) -> None:
    """Load CSV file and return rows + headers."""
    from sheetdraft.data_sources import load_csv

    try:
        output_json(_table_json(load_csv(args.path)))
    except Exception as e:
        output_json(str(e), success=False)


def cmd_load_sheet(args: argparse.Namespace) -> None:
    """Load Google Sheet and return rows + headers."""
    from sheetdraft.data_sources import load_google_sheet

    try:
        output_json(_table_json(load_google_sheet(args.url, timeout=args.settings["timeout"])))
    except Exception as e:
        output_json(str(e), success=False)


def cmd_companies(args: argparse.Namespace) -> None:
    """List unique company names from the contacts sheet."""
    from sheetdraft.selection import companies

    try:
        contacts = _load(args, "contacts")
        names = companies(contacts, args.settings["company_column"])
        output_json({"companies": names, "count": len(names)})
    except Exception as e:
        output_json(f"Error loading contacts: {e}", success=False)


def cmd_contacts(args: argparse.Namespace) -> None:
    """List contacts working at one company."""
    from sheetdraft.selection import choices, contacts_for_company

    try:
        contacts = _load(args, "contacts")
        matched = contacts_for_company(contacts, args.company, args.settings["company_column"])
        items = choices(matched, args.settings["contact_column"])
        output_json({"contacts": items, "count": len(items)})
    except Exception as e:
        output_json(f"Error loading contacts: {e}", success=False)


def cmd_templates(args: argparse.Namespace) -> None:
    """List available templates."""
    from sheetdraft.selection import choices

    try:
        templates = _load(args, "templates")
        items = choices(templates, args.settings["template_column"])
        output_json({"templates": items, "count": len(items)})
    except Exception as e:
        output_json(f"Error loading templates: {e}", success=False)


def cmd_draft(args: argparse.Namespace) -> None:
    """Merge one contact into one template."""
    from sheetdraft.merger import PlaceholderResolver
    from sheetdraft.selection import build_draft

    try:
        contacts = _load(args, "contacts")
        templates = _load(args, "templates")

        result = build_draft(contacts, templates, args.contact_id, args.template_id)
        if result is None:
            output_json("Unknown contact or template id", success=False)
            return

        contact = contacts.get(args.contact_id)
        template = templates.get(args.template_id)
        resolver = PlaceholderResolver(contact)
        missing = resolver.unresolved(template.get("Subject", "") + "\n" + template.get("Body", ""))

        output_json({
            "subject": result.subject,
            "body": result.body,
            "unresolved": missing,
        })
    except Exception as e:
        output_json(str(e), success=False)


def cmd_config_show(args: argparse.Namespace) -> None:
    from sheetdraft.settings import settings_path

    output_json({"path": str(settings_path()), "settings": args.settings})


def cmd_config_set(args: argparse.Namespace) -> None:
    from sheetdraft.settings import default_settings, save_settings

    try:
        if args.key not in default_settings():
            output_json(f"Unknown setting: {args.key}", success=False)
            return

        value: Any = args.value
        if args.key == "timeout":
            value = int(value)

        args.settings[args.key] = value
        path = save_settings(args.settings)
        output_json({"path": str(path), "settings": args.settings})
    except Exception as e:
        output_json(str(e), success=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheetdraft",
        description="SheetDraft CLI - JSON bridge for the draft composer frontend",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # load-csv
    p_csv = subparsers.add_parser("load-csv", help="Load data from CSV file")
    p_csv.add_argument("path", help="Path to CSV file")
    p_csv.set_defaults(func=cmd_load_csv)

    # load-sheet
    p_sheet = subparsers.add_parser("load-sheet", help="Load data from Google Sheet")
    p_sheet.add_argument("url", help="Google Sheets URL")
    p_sheet.set_defaults(func=cmd_load_sheet)

    # companies
    p_comp = subparsers.add_parser("companies", help="List company names")
    p_comp.add_argument("--contacts", help="Contacts CSV path or Google Sheets URL")
    p_comp.set_defaults(func=cmd_companies)

    # contacts
    p_cont = subparsers.add_parser("contacts", help="List contacts for a company")
    p_cont.add_argument("--company", required=True, help="Company name")
    p_cont.add_argument("--contacts", help="Contacts CSV path or Google Sheets URL")
    p_cont.set_defaults(func=cmd_contacts)

    # templates
    p_tpl = subparsers.add_parser("templates", help="List templates")
    p_tpl.add_argument("--templates", help="Templates CSV path or Google Sheets URL")
    p_tpl.set_defaults(func=cmd_templates)

    # draft
    p_draft = subparsers.add_parser("draft", help="Merge a contact into a template")
    p_draft.add_argument("--contact-id", required=True, help="Contact id from 'contacts'")
    p_draft.add_argument("--template-id", required=True, help="Template id from 'templates'")
    p_draft.add_argument("--contacts", help="Contacts CSV path or Google Sheets URL")
    p_draft.add_argument("--templates", help="Templates CSV path or Google Sheets URL")
    p_draft.set_defaults(func=cmd_draft)

    # config
    p_cfg = subparsers.add_parser("config", help="Show or change settings")
    cfg_sub = p_cfg.add_subparsers(dest="config_command", required=True)
    p_show = cfg_sub.add_parser("show", help="Print current settings")
    p_show.set_defaults(func=cmd_config_show)
    p_set = cfg_sub.add_parser("set", help="Change one setting")
    p_set.add_argument("key", help="Setting name")
    p_set.add_argument("value", help="New value")
    p_set.set_defaults(func=cmd_config_set)

    return parser


def main(argv=None) -> None:
    from sheetdraft.settings import load_settings

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    args.settings = load_settings()
    args.func(args)


if __name__ == "__main__":
    main()
