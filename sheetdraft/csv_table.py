# sheetdraft/csv_table.py

import logging
import re
from collections.abc import Mapping
from typing import Dict, Iterator, List, Optional


logger = logging.getLogger(__name__)

BOM = "\ufeff"
_LINE_SPLIT = re.compile(r"\r?\n")


# -------------------------------------------------
# Data model
# -------------------------------------------------

class Record(Mapping):
    """
    One CSV row as an ordered, read-only header -> value mapping.

    `rid` is assigned at parse time and stays with the record when the
    table is filtered or re-sorted, so selections can refer to it.
    """

    __slots__ = ("rid", "_data")

    def __init__(self, rid: int, data: Dict[str, str]):
        self.rid = rid
        self._data = dict(data)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Record(rid={self.rid}, {self._data!r})"

    def to_dict(self) -> Dict[str, str]:
        return dict(self._data)


class Table:
    """Ordered records sharing one header row."""

    def __init__(self, headers: Optional[List[str]] = None, records: Optional[List[Record]] = None):
        self.headers = list(headers or [])
        self.records = list(records or [])
        self._by_id = {r.rid: r for r in self.records}

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    def __bool__(self) -> bool:
        return bool(self.records)

    def get(self, rid) -> Optional[Record]:
        try:
            return self._by_id.get(int(rid))
        except (TypeError, ValueError):
            return None

    def filter(self, column: str, value: str) -> "Table":
        kept = [r for r in self.records if r.get(column) == value]
        return Table(self.headers, kept)


# -------------------------------------------------
# Public API
# -------------------------------------------------

def tokenize_line(line: str) -> List[str]:
    """
    Split one CSV line on commas, honouring double-quoted fields.

    A doubled quote inside a quoted field yields one literal quote. Every
    field is stripped of surrounding whitespace, quoted or not. An
    unterminated quote just runs to the end of the line.
    """
    fields = []
    buf = []
    in_quote = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quote and i + 1 < n and line[i + 1] == '"':
                buf.append('"')
                i += 2
                continue
            in_quote = not in_quote
        elif ch == "," and not in_quote:
            fields.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
        i += 1

    fields.append("".join(buf).strip())
    return fields


def parse(text: str) -> Table:
    """
    Parse CSV text into a Table.

    Returns an empty Table when there is no header plus at least one data
    line. Rows whose field count differs from the header are skipped.
    """
    if text.startswith(BOM):
        text = text[1:]

    lines = _LINE_SPLIT.split(text.strip())
    if len(lines) < 2:
        logger.info("CSV text has %d line(s); need a header and at least one row", len(lines))
        return Table()

    headers = tokenize_line(lines[0])
    records = []

    for lineno, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue

        values = tokenize_line(line)
        if len(values) != len(headers):
            logger.warning(
                "Skipping line %d: %d field(s), header has %d",
                lineno, len(values), len(headers),
            )
            continue

        records.append(Record(len(records), dict(zip(headers, values))))

    logger.debug("Parsed %d record(s) with headers %s", len(records), headers)
    return Table(headers, records)
