from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class DashboardFiltersModel(BaseModel):
    selected_categories: List[str] = Field(default_factory=list)
    top_n: Optional[int] = None


class MetaCategoriesResponse(BaseModel):
    categories: List[str]


class ErrorResponse(BaseModel):
    error: str
    type: str
