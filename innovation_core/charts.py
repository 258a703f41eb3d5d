from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

# Lower-cased aggregate names that differ from the world-atlas boundary names.
MAP_COUNTRY_ALIASES = {
    "united states": "united states of america",
    "united kingdom": "united kingdom",
}
EMPTY_FILL = "#f0f0f0"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def map_key(country: str) -> str:
    key = country.lower()
    return MAP_COUNTRY_ALIASES.get(key, key)


def world_map_chart(countries: pd.DataFrame, atlas_url: str) -> alt.LayerChart:
    data = countries.assign(map_key=countries["country"].map(map_key)) if not countries.empty else pd.DataFrame(
        columns=["country", "count", "map_key"]
    )
    max_count = int(data["count"].max()) if not data.empty else 1
    geo = alt.topo_feature(atlas_url, "countries")

    base = (
        alt.Chart(geo)
        .mark_geoshape(fill=EMPTY_FILL, stroke="#ffffff", strokeWidth=0.5)
        .project(type="naturalEarth1")
    )
    hover = alt.selection_point(on="mouseover", empty=False, fields=["properties.name"])
    filled = (
        alt.Chart(geo)
        .mark_geoshape(stroke="#ffffff")
        .project(type="naturalEarth1")
        .transform_calculate(map_key="lower(datum.properties.name)")
        .transform_lookup(lookup="map_key", from_=alt.LookupData(data, "map_key", ["count"]))
        .transform_filter("isValid(datum.count)")
        .encode(
            color=alt.Color("count:Q", title="Innovations", scale=alt.Scale(scheme="blues", domain=[0, max_count])),
            strokeWidth=alt.condition(hover, alt.value(2), alt.value(0.5)),
            tooltip=[alt.Tooltip("properties.name:N", title="Country"), alt.Tooltip("count:Q", title="Innovations")],
        )
        .add_params(hover)
    )
    return alt.layer(base, filled).properties(width=960, height=500)


def category_bar_chart(categories: pd.DataFrame) -> alt.Chart:
    order: List[str] = categories["category"].tolist() if not categories.empty else []
    hover = alt.selection_point(fields=["category"], on="mouseover", empty="all")
    return (
        alt.Chart(categories)
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("category:N", title="Category", sort=order, axis=alt.Axis(labelAngle=-45)),
            y=alt.Y("count:Q", title="Innovations", axis=alt.Axis(tickMinStep=1, gridDash=[4, 4], domain=False, ticks=False)),
            color=alt.Color("category:N", legend=None, sort=order, scale=alt.Scale(scheme="tableau10")),
            opacity=alt.condition(hover, alt.value(1), alt.value(0.4)),
            tooltip=[alt.Tooltip("category:N", title="Category"), alt.Tooltip("count:Q", title="Innovations")],
        )
        .add_params(hover)
        .properties(height=320)
    )


def timeline_chart(timeline: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(timeline)
        .mark_line(point={"filled": True, "size": 60})
        .encode(
            x=alt.X("year:O", title="Year", axis=alt.Axis(grid=False)),
            y=alt.Y("count:Q", title="Innovations", axis=alt.Axis(tickMinStep=1, gridDash=[4, 4], domain=False, ticks=False)),
            tooltip=[
                alt.Tooltip("year:O", title="Year"),
                alt.Tooltip("count:Q", title="Innovations"),
                alt.Tooltip("projects_label:N", title="Projects"),
            ],
        )
        .properties(height=260)
    )
