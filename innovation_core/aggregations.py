from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from innovation_core.records import InnovationRecord


YEAR_PATTERN = re.compile(r"[0-9]{4}")


@dataclass(frozen=True)
class CountryCount:
    country: str
    count: int


@dataclass(frozen=True)
class CategoryCount:
    category: str
    count: int


@dataclass(frozen=True)
class TimelineEntry:
    year: str
    count: int
    projects: List[str] = field(default_factory=list)


def display_country(key: str) -> str:
    """Upper-case only the first character: "south korea" -> "South korea"."""
    return key[:1].upper() + key[1:]


def _count_by(keys: Iterable[str]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for key in keys:
        counts[key] = counts.get(key, 0) + 1
    return counts


def _ranked(counts: Dict[str, int]) -> List[tuple]:
    # sorted() is stable, so equal counts keep first-appearance order.
    return sorted(counts.items(), key=lambda item: -item[1])


def aggregate_by_country(
    records: Sequence[InnovationRecord], category_filter: Optional[Iterable[str]] = None
) -> List[CountryCount]:
    selected = set(category_filter or ())
    if selected:
        records = [r for r in records if r.category in selected]
    counts = _count_by(r.country.lower() for r in records)
    return [CountryCount(country=display_country(key), count=n) for key, n in _ranked(counts)]


def aggregate_by_category(records: Sequence[InnovationRecord]) -> List[CategoryCount]:
    counts = _count_by(r.category for r in records if r.category)
    return [CategoryCount(category=key, count=n) for key, n in _ranked(counts)]


def is_year(value: str) -> bool:
    return YEAR_PATTERN.fullmatch(value) is not None


def aggregate_by_year(records: Sequence[InnovationRecord]) -> List[TimelineEntry]:
    counts: Dict[str, int] = {}
    projects: Dict[str, List[str]] = {}
    for r in records:
        year = r.when.strip()
        if not is_year(year):
            continue
        counts[year] = counts.get(year, 0) + 1
        names = projects.setdefault(year, [])
        name = r.name.strip()
        if name:
            names.append(name)
    return [TimelineEntry(year=y, count=counts[y], projects=projects[y]) for y in sorted(counts)]


def select_featured_projects(records: Sequence[InnovationRecord]) -> List[InnovationRecord]:
    return [r for r in records if r.project.strip()]


def step_index(current: int, total: int, step: int = 1) -> int:
    """Move through a carousel of ``total`` items, wrapping at both ends."""
    if total <= 0:
        return 0
    return (current + step) % total
