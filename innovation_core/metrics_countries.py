from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Optional

import pandas as pd

from innovation_core.aggregations import aggregate_by_country
from innovation_core.charts import to_vega_spec, world_map_chart
from innovation_core.config import get_settings
from innovation_core.data import LoadedDataset
from innovation_core.filters import DashboardFilters


def compute_country_view(
    filters: DashboardFilters, dataset: LoadedDataset, *, atlas_url: Optional[str] = None
) -> Dict[str, Any]:
    countries = aggregate_by_country(dataset.records, filters.selected_categories)
    rows = [asdict(c) for c in countries]

    ranking = [{"rank": i + 1, **row} for i, row in enumerate(rows[: filters.top_n])]
    total = sum(c.count for c in countries)

    charts: Dict[str, Any] = {}
    df = pd.DataFrame(rows, columns=["country", "count"])
    charts["world_map"] = to_vega_spec(world_map_chart(df, atlas_url or get_settings().world_atlas_url))

    return {
        "filters": asdict(filters),
        "countries": rows,
        "ranking": ranking,
        "shown": len(ranking),
        "truncated": len(rows) > len(ranking),
        "stats": {
            "countries": len(rows),
            "total_innovations": total,
            "max_per_country": max((c.count for c in countries), default=None),
        },
        "charts": charts,
    }
