from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from innovation_core.aggregations import aggregate_by_category
from innovation_core.charts import category_bar_chart, to_vega_spec
from innovation_core.data import LoadedDataset
from innovation_core.filters import DashboardFilters


def compute_category_view(filters: DashboardFilters, dataset: LoadedDataset) -> Dict[str, Any]:
    # The category chart always covers the full dataset; the category filter only narrows the map.
    categories = aggregate_by_category(dataset.records)
    rows = [asdict(c) for c in categories]

    charts: Dict[str, Any] = {}
    if rows:
        charts["category_bar"] = to_vega_spec(category_bar_chart(pd.DataFrame(rows)))

    return {
        "filters": asdict(filters),
        "categories": rows,
        "stats": {
            "categories": len(rows),
            "total_innovations": sum(c.count for c in categories),
            "max_per_category": max((c.count for c in categories), default=None),
        },
        "charts": charts,
    }
