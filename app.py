import logging
from contextlib import contextmanager
from dataclasses import asdict
from typing import List, Optional

import altair as alt
import pandas as pd
import streamlit as st

from innovation_core.aggregations import aggregate_by_category, aggregate_by_country, aggregate_by_year
from innovation_core.charts import category_bar_chart, world_map_chart
from innovation_core.config import get_settings
from innovation_core.data import LoadedDataset, load
from innovation_core.filters import normalize_filters
from innovation_core.fragments import chip_html, chips_html, rank_row_html
from innovation_core.metrics_projects import compute_projects_view
from innovation_core.metrics_timeline import compute_timeline_view
from innovation_core.records import InnovationDataError

alt.data_transformers.disable_max_rows()
logger = logging.getLogger(__name__)


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .banner {padding: 28px 24px;border-radius: 16px;margin-bottom: 12px;
                 background: linear-gradient(135deg, #1e3a8a 0%, #2563eb 100%);color: #ffffff;}
        .banner .title {font-size: 1.8rem;font-weight: 700;}
        .banner .subtitle {font-size: 1.0rem;opacity: 0.85;}
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .rank-row {display: flex;justify-content: space-between;align-items: center;padding: 6px 0;
                   border-bottom: 1px solid #f3f4f6;}
        .rank-badge {display: inline-block;width: 26px;height: 26px;border-radius: 13px;background: #2563eb;
                     color: #ffffff;text-align: center;line-height: 26px;font-size: 0.8rem;margin-right: 8px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_banner():
    st.markdown(
        "<div class='banner'><div class='title'>Regulatory Innovation Explorer</div>"
        "<div class='subtitle'>Where regulators are experimenting, and with what.</div></div>",
        unsafe_allow_html=True,
    )
    expanded = st.session_state.get("map_visible", False)
    label = "Hide innovation map" if expanded else "Explore innovation map"
    if st.button(label, type="primary"):
        st.session_state["map_visible"] = not expanded
        st.rerun()


def load_dataset() -> Optional[LoadedDataset]:
    if st.session_state.get("dataset") is not None:
        return st.session_state["dataset"]
    if st.session_state.get("loading"):
        return None
    st.session_state["loading"] = True
    try:
        with st.spinner("Loading innovation data..."):
            dataset = load()
    except InnovationDataError:
        logger.exception("Failed to load innovation data")
        st.toast("Failed to load innovation data")
        return None
    finally:
        st.session_state["loading"] = False
    st.session_state["dataset"] = dataset
    st.toast(f"Loaded {len(dataset.records)} innovations across {len(dataset.categories)} categories")
    return dataset


# ---------- Panels ----------
def render_world_map(countries: pd.DataFrame):
    with card("Innovations by Country"):
        st.altair_chart(world_map_chart(countries, get_settings().world_atlas_url), use_container_width=True)


def render_category_chart(dataset: LoadedDataset):
    with card("Innovations by Category"):
        data = pd.DataFrame([asdict(c) for c in aggregate_by_category(dataset.records)], columns=["category", "count"])
        if data.empty:
            st.info("No categories to display.")
            return
        st.altair_chart(category_bar_chart(data), use_container_width=True)
        cols = st.columns(3)
        cols[0].metric("Categories", len(data))
        cols[1].metric("Total Innovations", int(data["count"].sum()))
        cols[2].metric("Max per Category", int(data["count"].max()))


def render_country_list(countries: pd.DataFrame, top_n: int):
    if countries.empty:
        return
    with card("Innovation Rankings by Country"):
        rows: List[str] = []
        top = countries.head(top_n)
        for rank, (country, count) in enumerate(zip(top["country"], top["count"]), start=1):
            rows.append(rank_row_html(rank, country, int(count)))
        st.markdown("".join(rows), unsafe_allow_html=True)
        if len(countries) > top_n:
            st.caption(f"Showing top {top_n} of {len(countries)} countries")


def render_timeline(dataset: LoadedDataset):
    with card("Innovation Timeline"):
        view = compute_timeline_view(normalize_filters({}), dataset)
        if not view["timeline"]:
            st.info("No dated innovations to display.")
            return
        st.vega_lite_chart(view["charts"]["timeline"], use_container_width=True)
        with st.expander("Projects by year"):
            for entry in aggregate_by_year(dataset.records):
                st.markdown(f"**{entry.year}** ({entry.count}): {', '.join(entry.projects) or 'no named projects'}")


def render_project_carousel(dataset: LoadedDataset):
    with card("Featured Projects"):
        index = st.session_state.get("project_index", 0)
        view = compute_projects_view(normalize_filters({}), dataset, index=index)
        current = view["current"]
        if current is None:
            st.info("No projects with descriptions available.")
            return
        st.caption(f"{view['position']} of {view['total']}")
        st.markdown(chip_html(f"{current['country']} • {current['agency']}"), unsafe_allow_html=True)
        st.markdown(f"#### {current['project']}")
        tags = [current["category"]] + ([current["when"]] if current["when"] else [])
        st.markdown(chips_html(tags), unsafe_allow_html=True)
        prev_col, _, next_col = st.columns([1, 6, 1])
        if prev_col.button("◀", key="project_prev", help="Previous project"):
            st.session_state["project_index"] = view["previous_index"]
            st.rerun()
        if next_col.button("▶", key="project_next", help="Next project"):
            st.session_state["project_index"] = view["next_index"]
            st.rerun()


def render_stats(countries: pd.DataFrame):
    if countries.empty:
        return
    with card("Innovation Statistics"):
        cols = st.columns(3)
        cols[0].metric("Countries", len(countries))
        cols[1].metric("Total Innovations", int(countries["count"].sum()))
        cols[2].metric("Max per Country", int(countries["count"].max()))


# ---------- UI setup ----------
st.set_page_config(page_title="Regulatory Innovation Explorer", layout="wide")
inject_base_styles()
render_banner()

if st.session_state.get("map_visible"):
    dataset = load_dataset()
    if dataset is None:
        st.error("Failed to load innovation data.")
        st.stop()

    with st.sidebar:
        st.markdown("### Filters")
        selected = st.multiselect("Categories", options=dataset.categories, default=[])
    filters = normalize_filters({"selected_categories": selected}, default_top_n=get_settings().ranking_size)
    countries = pd.DataFrame(
        [asdict(c) for c in aggregate_by_country(dataset.records, filters.selected_categories)], columns=["country", "count"]
    )

    render_project_carousel(dataset)
    render_world_map(countries)
    st.subheader("Innovation Dashboard")
    st.caption("Comprehensive analysis of regulatory innovations across categories and countries")
    render_category_chart(dataset)
    render_timeline(dataset)
    render_country_list(countries, filters.top_n)
    render_stats(countries)
