from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

from innovation_core.aggregations import select_featured_projects, step_index
from innovation_core.data import LoadedDataset
from innovation_core.filters import DashboardFilters


def compute_projects_view(filters: DashboardFilters, dataset: LoadedDataset, *, index: int = 0) -> Dict[str, Any]:
    projects = select_featured_projects(dataset.records)
    total = len(projects)
    if total == 0:
        return {"filters": asdict(filters), "total": 0, "position": None, "current": None, "previous_index": 0, "next_index": 0}

    current = step_index(index, total, 0)
    return {
        "filters": asdict(filters),
        "total": total,
        "position": current + 1,
        "current": asdict(projects[current]),
        "previous_index": step_index(current, total, -1),
        "next_index": step_index(current, total, 1),
    }
