from __future__ import annotations

import logging
from dataclasses import asdict

import pandas as pd
from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from innovation_api.schemas import DashboardFiltersModel, ErrorResponse, MetaCategoriesResponse
from innovation_core.aggregations import aggregate_by_category, aggregate_by_country, aggregate_by_year
from innovation_core.config import get_settings
from innovation_core.data import load_async, records_to_frame
from innovation_core.filters import DashboardFilters, normalize_filters
from innovation_core.metrics_categories import compute_category_view
from innovation_core.metrics_countries import compute_country_view
from innovation_core.metrics_projects import compute_projects_view
from innovation_core.metrics_timeline import compute_timeline_view
from innovation_core.records import InnovationDataError, records_to_dicts


app = FastAPI(title="Regulatory Innovations API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: DashboardFiltersModel) -> DashboardFilters:
    return normalize_filters(model.model_dump(), default_top_n=get_settings().ranking_size)


def _json(data: object) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(data))


def _error(exc: Exception) -> JSONResponse:
    body = ErrorResponse(error=str(exc), type=type(exc).__name__)
    return JSONResponse(status_code=500, content=body.model_dump())


@app.get("/meta/categories")
async def meta_categories():
    try:
        dataset = await load_async()
        return _json(MetaCategoriesResponse(categories=dataset.categories).model_dump())
    except InnovationDataError as exc:
        logger.exception("meta_categories failed")
        return _error(exc)


@app.get("/records")
async def records():
    try:
        dataset = await load_async()
        return _json({"records": records_to_dicts(dataset.records), "count": len(dataset.records)})
    except InnovationDataError as exc:
        logger.exception("records failed")
        return _error(exc)


@app.post("/countries")
async def countries(filters: DashboardFiltersModel):
    try:
        dataset = await load_async()
        f = _filters_from_model(filters)
        return _json(compute_country_view(f, dataset))
    except InnovationDataError as exc:
        logger.exception("countries failed")
        return _error(exc)


@app.post("/categories")
async def categories(filters: DashboardFiltersModel):
    try:
        dataset = await load_async()
        f = _filters_from_model(filters)
        return _json(compute_category_view(f, dataset))
    except InnovationDataError as exc:
        logger.exception("categories failed")
        return _error(exc)


@app.post("/timeline")
async def timeline(filters: DashboardFiltersModel):
    try:
        dataset = await load_async()
        f = _filters_from_model(filters)
        return _json(compute_timeline_view(f, dataset))
    except InnovationDataError as exc:
        logger.exception("timeline failed")
        return _error(exc)


@app.get("/projects")
async def projects(index: int = Query(default=0)):
    try:
        dataset = await load_async()
        return _json(compute_projects_view(DashboardFilters(), dataset, index=index))
    except InnovationDataError as exc:
        logger.exception("projects failed")
        return _error(exc)


@app.post("/export/{view}")
async def export_view(view: str, filters: DashboardFiltersModel):
    try:
        dataset = await load_async()
    except InnovationDataError as exc:
        logger.exception("export failed")
        return _error(exc)
    f = _filters_from_model(filters)

    filename = f"{view}.csv"
    if view == "countries":
        export_df = pd.DataFrame(
            [asdict(c) for c in aggregate_by_country(dataset.records, f.selected_categories)], columns=["country", "count"]
        )
    elif view == "categories":
        export_df = pd.DataFrame([asdict(c) for c in aggregate_by_category(dataset.records)], columns=["category", "count"])
    elif view == "timeline":
        export_df = pd.DataFrame(
            [{"year": t.year, "count": t.count, "projects": "; ".join(t.projects)} for t in aggregate_by_year(dataset.records)],
            columns=["year", "count", "projects"],
        )
    elif view == "records":
        export_df = records_to_frame(dataset.records)
    else:
        export_df = pd.DataFrame()

    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})
