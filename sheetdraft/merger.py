# sheetdraft/merger.py

import re
from typing import List, Mapping, NamedTuple


BREAK_MARKER = "<br>"

# Shortest run between a "{" and the next "}"; the name is taken as-is.
PLACEHOLDER_RE = re.compile(r"\{(.+?)\}")


class MergeResult(NamedTuple):
    subject: str
    body: str


class PlaceholderResolver:
    """
    Resolves {placeholders} in template text using one contact record.

    Resolution rules:
    1. The name between the braces is looked up verbatim (no trimming,
       no case folding) as a contact column.
    2. A non-empty value replaces the whole placeholder.
    3. Anything else leaves the placeholder text untouched, so gaps stay
       visible in the draft.

    Substituted values are never re-scanned.
    """

    def __init__(self, contact: Mapping[str, str]):
        self.contact = contact or {}

    def _resolve_match(self, match) -> str:
        value = self.contact.get(match.group(1))
        return value if value else match.group(0)

    def resolve_text(self, text: str) -> str:
        if not text or "{" not in text:
            return text or ""
        return PLACEHOLDER_RE.sub(self._resolve_match, text)

    def unresolved(self, text: str) -> List[str]:
        """Placeholder names in `text` that would be left in place, in order."""
        names = []
        for m in PLACEHOLDER_RE.finditer(text or ""):
            name = m.group(1)
            if not self.contact.get(name) and name not in names:
                names.append(name)
        return names


def expand_breaks(text: str) -> str:
    return (text or "").replace(BREAK_MARKER, "\n")


def merge(contact: Mapping[str, str], template: Mapping[str, str]) -> MergeResult:
    """
    Build the final subject and body for one contact/template pair.

    Break markers in the body become newlines before placeholders are
    resolved, so a contact value containing "<br>" is inserted literally.
    """
    resolver = PlaceholderResolver(contact)

    subject = resolver.resolve_text(template.get("Subject", ""))
    body = resolver.resolve_text(expand_breaks(template.get("Body", "")))

    return MergeResult(subject, body)
