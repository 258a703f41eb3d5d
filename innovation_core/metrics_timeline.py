from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import pandas as pd

from innovation_core.aggregations import aggregate_by_year
from innovation_core.charts import timeline_chart, to_vega_spec
from innovation_core.data import LoadedDataset
from innovation_core.filters import DashboardFilters


TOOLTIP_PROJECTS = 5


def _projects_label(projects: List[str]) -> str:
    label = ", ".join(projects[:TOOLTIP_PROJECTS])
    extra = len(projects) - TOOLTIP_PROJECTS
    if extra > 0:
        label += f" (+{extra} more)"
    return label


def compute_timeline_view(filters: DashboardFilters, dataset: LoadedDataset) -> Dict[str, Any]:
    timeline = aggregate_by_year(dataset.records)
    rows = [asdict(t) for t in timeline]

    charts: Dict[str, Any] = {}
    if rows:
        df = pd.DataFrame(rows)
        df["projects_label"] = df["projects"].apply(_projects_label)
        charts["timeline"] = to_vega_spec(timeline_chart(df.drop(columns=["projects"])))

    return {
        "filters": asdict(filters),
        "timeline": rows,
        "stats": {
            "years": len(rows),
            "dated_innovations": sum(t.count for t in timeline),
            "first_year": timeline[0].year if timeline else None,
            "last_year": timeline[-1].year if timeline else None,
        },
        "charts": charts,
    }
