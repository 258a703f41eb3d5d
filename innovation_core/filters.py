from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from innovation_core.config import DEFAULT_RANKING_SIZE


TOP_N_MIN = 1
TOP_N_MAX = 200


@dataclass(frozen=True)
class DashboardFilters:
    selected_categories: List[str] = field(default_factory=list)
    top_n: int = DEFAULT_RANKING_SIZE


def _as_str_list(values: Optional[Iterable[object]]) -> List[str]:
    if not values:
        return []
    out: List[str] = []
    for v in values:
        if v is None:
            continue
        s = str(v).strip()
        if s and s not in out:
            out.append(s)
    return out


def normalize_filters(raw: dict, *, default_top_n: int = DEFAULT_RANKING_SIZE) -> DashboardFilters:
    selected_categories = _as_str_list(raw.get("selected_categories"))

    top_n = raw.get("top_n", default_top_n)
    try:
        top_n = int(top_n)
    except (TypeError, ValueError):
        top_n = default_top_n
    top_n = max(TOP_N_MIN, min(TOP_N_MAX, top_n))

    return DashboardFilters(selected_categories=selected_categories, top_n=top_n)
