"""Text-table and argument helpers for the DNS CLI."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from opskit.models import DNSRecord

ELLIPSIS = "…"

# (header, width) per column; the proxy indicator is unpadded.
RECORD_COLUMNS = [
    ("ID", 36),
    ("TYPE", 6),
    ("NAME", 30),
    ("CONTENT", 18),
    ("TTL", 6),
]
PROXIED_MARK = "🟢"
UNPROXIED_MARK = "⚪"


def pad(text: str, width: int) -> str:
    """Left-align text in ``width`` columns, truncating with an ellipsis."""
    if len(text) > width:
        return text[: width - 1] + ELLIPSIS
    return text.ljust(width)


def format_record_table(records: Iterable[DNSRecord]) -> List[str]:
    """Render records as fixed-width lines: header, rule, one row per record."""
    header = " ".join([pad(title, width) for title, width in RECORD_COLUMNS] + ["PROXY"])
    lines = [header, "-" * len(header)]

    for record in records:
        cells = [record.id, record.type, record.name, record.content, str(record.ttl)]
        row = [pad(value, width) for value, (_, width) in zip(cells, RECORD_COLUMNS)]
        row.append(PROXIED_MARK if record.proxied else UNPROXIED_MARK)
        lines.append(" ".join(row))

    return lines


def _coerce(key: str, value: str) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    if key == "ttl" and value.lstrip("-").isdigit():
        return int(value)
    return value


def parse_patch(pairs: Iterable[str]) -> Dict[str, Any]:
    """Parse ``key=value`` arguments into a patch dict.

    "true"/"false" become booleans and a numeric ttl becomes an int.
    Everything after the first '=' belongs to the value.

    Raises:
        ValueError: If an argument has no '=' or an empty key
    """
    patch: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{pair}'")
        patch[key] = _coerce(key, value)
    return patch
