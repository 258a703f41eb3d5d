from __future__ import annotations

import pytest

from innovation_core.config import get_settings
from innovation_core.filters import DashboardFilters, normalize_filters


class TestNormalizeFilters:
    def test_defaults(self) -> None:
        assert normalize_filters({}) == DashboardFilters(selected_categories=[], top_n=12)

    def test_drops_blank_and_duplicate_categories(self) -> None:
        f = normalize_filters({"selected_categories": ["Tax", None, " ", "Tax", "Finance"]})
        assert f.selected_categories == ["Tax", "Finance"]

    def test_unknown_categories_are_kept(self) -> None:
        f = normalize_filters({"selected_categories": ["Tax", "Health"]})
        assert f.selected_categories == ["Tax", "Health"]

    @pytest.mark.parametrize("raw, expected", [(0, 1), (500, 200), ("7", 7), ("abc", 12), (None, 12)])
    def test_top_n_is_clamped(self, raw: object, expected: int) -> None:
        assert normalize_filters({"top_n": raw}).top_n == expected


class TestSettings:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INNOVATIONS_RANKING_SIZE", "20")
        monkeypatch.setenv("INNOVATIONS_CORS_ORIGINS", "https://a.example, https://b.example")
        settings = get_settings()
        assert settings.ranking_size == 20
        assert settings.cors_origins == ["https://a.example", "https://b.example"]

    def test_invalid_numbers_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INNOVATIONS_RANKING_SIZE", "lots")
        monkeypatch.setenv("INNOVATIONS_HTTP_TIMEOUT", "-1")
        settings = get_settings()
        assert settings.ranking_size == 12
        assert settings.http_timeout == 10.0
