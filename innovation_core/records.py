from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from innovation_core.parsing import tokenize_document


logger = logging.getLogger(__name__)

# Header names are matched literally, including "When?" and "still_active?".
INNOVATION_COLUMNS: Dict[str, str] = {
    "agency": "agency",
    "country": "country",
    "name": "name",
    "project": "project",
    "category": "category",
    "technical_innovation": "technical_innovation",
    "innovation_x5": "innovation_x5",
    "innovation_analysis": "innovation_analysis",
    "When?": "when",
    "still_active?": "still_active",
    "source": "source",
}
REQUIRED_FIELDS = ("country", "category")


class InnovationDataError(Exception):
    """Base error for a failed innovations load."""


class SchemaError(InnovationDataError):
    """Required columns are missing from the source document."""


@dataclass(frozen=True)
class InnovationRecord:
    agency: str = ""
    country: str = ""
    name: str = ""
    project: str = ""
    category: str = ""
    technical_innovation: str = ""
    innovation_x5: str = ""
    innovation_analysis: str = ""
    when: str = ""
    still_active: str = ""
    source: str = ""


RECORD_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(InnovationRecord))


@dataclass(frozen=True)
class ColumnIndex:
    """Header position per record field; ``None`` when the column is absent."""

    positions: Dict[str, Optional[int]]

    @property
    def min_width(self) -> int:
        return max(self.positions[f] for f in REQUIRED_FIELDS) + 1  # type: ignore[type-var]


def resolve_columns(header: Sequence[str]) -> ColumnIndex:
    positions: Dict[str, Optional[int]] = {f: None for f in RECORD_FIELDS}
    for idx, raw_name in enumerate(header):
        field_name = INNOVATION_COLUMNS.get(raw_name)
        if field_name is not None and positions[field_name] is None:
            positions[field_name] = idx
    missing = [name for name in REQUIRED_FIELDS if positions[name] is None]
    if missing:
        raise SchemaError(f"Required columns not found in CSV: {', '.join(missing)}")
    return ColumnIndex(positions=positions)


def _cell(row: Sequence[str], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row):
        return ""
    return (row[idx] or "").strip()


def build_record(row: Sequence[str], columns: ColumnIndex) -> Optional[InnovationRecord]:
    """Convert one tokenized row, or return None when the row is incomplete."""
    if len(row) < columns.min_width:
        return None
    values = {f: _cell(row, idx) for f, idx in columns.positions.items()}
    if not values["country"] or not values["category"]:
        return None
    return InnovationRecord(**values)


def build_records(
    header: Sequence[str], rows: Iterable[Sequence[str]]
) -> Tuple[Tuple[InnovationRecord, ...], List[str]]:
    columns = resolve_columns(header)
    records: List[InnovationRecord] = []
    categories = set()
    skipped = 0
    for line_no, row in enumerate(rows, start=2):
        record = build_record(row, columns)
        if record is None:
            skipped += 1
            logger.debug("Skipping incomplete row %d", line_no)
            continue
        categories.add(record.category)
        records.append(record)
    if skipped:
        logger.info("Dropped %d incomplete rows out of %d", skipped, skipped + len(records))
    return tuple(records), sorted(categories)


def parse_document(text: str) -> Tuple[Tuple[InnovationRecord, ...], List[str]]:
    rows = tokenize_document(text)
    if not rows:
        raise SchemaError("CSV document is empty")
    return build_records(rows[0], rows[1:])


def records_to_dicts(records: Iterable[InnovationRecord]) -> List[Dict[str, str]]:
    return [{f: getattr(r, f) for f in RECORD_FIELDS} for r in records]
