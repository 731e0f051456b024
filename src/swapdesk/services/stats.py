"""Collection analytics helpers."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Union

from ..models.domain import CollectionRecord

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
DATE_FIELDS = ("Date", "date", "created_at")
PROVINCE_FIELDS = ("Province", "province")

# Postgres renders fractions with 1-6 digits and offsets as +HH or +HHMM.
_FRACTION = re.compile(r"\.(\d+)")
_SHORT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})?$")

LedgerRow = Union[Mapping[str, Any], CollectionRecord]


def aggregate_collections(records: Iterable[LedgerRow]) -> list[dict]:
    """Count collections per month and province, oldest month first.

    Rows without a parseable date are skipped. Rows whose province is neither
    Gauteng nor Limpopo, including blank ones, count towards Gauteng.
    """

    buckets: dict[str, dict] = {}
    for record in records:
        row = _as_mapping(record)
        parsed = parse_ledger_date(_first_value(row, DATE_FIELDS))
        if parsed is None:
            continue

        label = f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"
        entry = buckets.get(label)
        if entry is None:
            entry = {"label": label, "Gauteng": 0, "Limpopo": 0, "sort_key": parsed.year * 100 + parsed.month - 1}
            buckets[label] = entry

        entry[classify_province(_first_value(row, PROVINCE_FIELDS))] += 1

    ordered = sorted(buckets.values(), key=lambda item: item["sort_key"])
    return [{"label": item["label"], "Gauteng": item["Gauteng"], "Limpopo": item["Limpopo"]} for item in ordered]


def summarize_totals(stats: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    gauteng = 0
    limpopo = 0
    for entry in stats:
        gauteng += int(entry.get("Gauteng", 0))
        limpopo += int(entry.get("Limpopo", 0))
    return {"Gauteng": gauteng, "Limpopo": limpopo, "total": gauteng + limpopo}


def classify_province(value: Optional[object]) -> str:
    text = str(value or "").strip().lower()
    if "gauteng" in text:
        return "Gauteng"
    if "limpopo" in text:
        return "Limpopo"
    return "Gauteng"


def parse_ledger_date(value: Optional[object]) -> Optional[datetime]:
    """Parse an ISO date or a ``YYYY-MM-DD HH:MM:SS`` database timestamp."""

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    text = text.replace(" ", "T", 1)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if "T" in text:
        day, clock = text.split("T", 1)
        clock = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), clock, count=1)
        clock = _SHORT_OFFSET.sub(lambda m: f"{m.group(1)}:{m.group(2) or '00'}", clock, count=1)
        text = f"{day}T{clock}"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _as_mapping(record: LedgerRow) -> Mapping[str, Any]:
    if isinstance(record, CollectionRecord):
        return record.raw or record.to_row()
    return record


def _first_value(row: Mapping[str, Any], names: Iterable[str]) -> Optional[object]:
    for name in names:
        value = row.get(name)
        if value:
            return value
    return None
