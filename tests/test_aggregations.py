"""
tests/test_aggregations.py

Pytest unit tests for the country, category and timeline aggregations.

All tests are pure Python: records are built in memory and every
assertion is deterministic, including tie ordering.
"""

from __future__ import annotations

from innovation_core.aggregations import (
    CategoryCount,
    CountryCount,
    TimelineEntry,
    aggregate_by_category,
    aggregate_by_country,
    aggregate_by_year,
    display_country,
    is_year,
    select_featured_projects,
    step_index,
)
from innovation_core.records import InnovationRecord, parse_document


def rec(country: str = "USA", category: str = "Tax", **kwargs: str) -> InnovationRecord:
    return InnovationRecord(country=country, category=category, **kwargs)


# ---------------------------------------------------------------------------
# Country
# ---------------------------------------------------------------------------


class TestAggregateByCountry:
    def test_groups_case_insensitively(self) -> None:
        records = [rec("USA"), rec("usa"), rec("UK")]
        assert aggregate_by_country(records) == [CountryCount("Usa", 2), CountryCount("Uk", 1)]

    def test_display_is_first_letter_only(self) -> None:
        assert aggregate_by_country([rec("South Korea")]) == [CountryCount("South korea", 1)]
        assert display_country("") == ""

    def test_ties_keep_first_appearance_order(self) -> None:
        records = [rec("Chile"), rec("Brazil"), rec("Angola"), rec("brazil")]
        result = aggregate_by_country(records)
        assert [c.country for c in result] == ["Brazil", "Chile", "Angola"]

    def test_filter_keeps_only_member_categories(self) -> None:
        records = [rec("USA", "Tax"), rec("UK", "Finance"), rec("usa", "Finance")]
        assert aggregate_by_country(records, {"Finance"}) == [CountryCount("Uk", 1), CountryCount("Usa", 1)]

    def test_filter_is_exact_match(self) -> None:
        assert aggregate_by_country([rec("USA", "Tax")], ["tax"]) == []

    def test_empty_filter_means_all_records(self) -> None:
        records = [rec("USA", "Tax"), rec("UK", "Finance")]
        assert aggregate_by_country(records, []) == aggregate_by_country(records)
        assert aggregate_by_country(records, None) == aggregate_by_country(records)

    def test_filter_without_matches_is_empty(self) -> None:
        assert aggregate_by_country([rec("USA", "Tax")], {"Health"}) == []

    def test_empty_input(self) -> None:
        assert aggregate_by_country([]) == []


# ---------------------------------------------------------------------------
# Category
# ---------------------------------------------------------------------------


class TestAggregateByCategory:
    def test_keeps_original_casing(self) -> None:
        records = [rec(category="Tax"), rec(category="tax"), rec(category="Tax")]
        assert aggregate_by_category(records) == [CategoryCount("Tax", 2), CategoryCount("tax", 1)]

    def test_ties_keep_first_appearance_order(self) -> None:
        records = [rec(category="B"), rec(category="A"), rec(category="C"), rec(category="C")]
        assert [c.category for c in aggregate_by_category(records)] == ["C", "B", "A"]

    def test_counts_sum_to_record_count(self, sample_csv: str) -> None:
        records, _ = parse_document(sample_csv)
        assert sum(c.count for c in aggregate_by_category(records)) == len(records)

    def test_empty_input(self) -> None:
        assert aggregate_by_category([]) == []


# ---------------------------------------------------------------------------
# Timeline
# ---------------------------------------------------------------------------


class TestAggregateByYear:
    def test_only_four_digit_years_are_included(self) -> None:
        records = [rec(when="circa 1990"), rec(when=""), rec(when="1990"), rec(when="199"), rec(when="2018-2020")]
        assert aggregate_by_year(records) == [TimelineEntry("1990", 1, [])]

    def test_sorted_ascending_by_year(self) -> None:
        records = [rec(when="2021"), rec(when="1999"), rec(when="2005")]
        assert [t.year for t in aggregate_by_year(records)] == ["1999", "2005", "2021"]

    def test_projects_in_encounter_order_skipping_blank_names(self) -> None:
        records = [
            rec(when="2020", name="Beta"),
            rec(when="2019", name="Solo"),
            rec(when="2020", name=""),
            rec(when="2020", name="Alpha"),
        ]
        result = aggregate_by_year(records)
        assert result == [TimelineEntry("2019", 1, ["Solo"]), TimelineEntry("2020", 3, ["Beta", "Alpha"])]

    def test_year_is_grouped_verbatim(self) -> None:
        result = aggregate_by_year([rec(when="0200"), rec(when="2000")])
        assert [t.year for t in result] == ["0200", "2000"]

    def test_non_ascii_digits_are_not_years(self) -> None:
        assert not is_year("٢٠٢٠")
        assert is_year("2020")

    def test_empty_input(self) -> None:
        assert aggregate_by_year([]) == []


# ---------------------------------------------------------------------------
# Determinism and end-to-end
# ---------------------------------------------------------------------------


class TestStatelessness:
    def test_repeated_calls_are_identical(self, sample_csv: str) -> None:
        records, _ = parse_document(sample_csv)
        assert aggregate_by_country(records) == aggregate_by_country(records)
        assert aggregate_by_category(records) == aggregate_by_category(records)
        assert aggregate_by_year(records) == aggregate_by_year(records)

    def test_results_are_fresh_objects(self) -> None:
        records = [rec(when="2020", name="A")]
        first = aggregate_by_year(records)
        first[0].projects.append("mutated")
        assert aggregate_by_year(records)[0].projects == ["A"]


def test_end_to_end_scenario() -> None:
    text = "country,category,When?\nUSA,Tax,2020\nusa,Tax,2021\nUK,Finance,"
    records, categories = parse_document(text)

    assert categories == ["Finance", "Tax"]
    assert aggregate_by_country(records) == [CountryCount("Usa", 2), CountryCount("Uk", 1)]
    assert aggregate_by_category(records) == [CategoryCount("Tax", 2), CategoryCount("Finance", 1)]
    timeline = aggregate_by_year(records)
    assert [(t.year, t.count) for t in timeline] == [("2020", 1), ("2021", 1)]


def test_sample_document_views(sample_csv: str) -> None:
    records, _ = parse_document(sample_csv)
    assert [(c.country, c.count) for c in aggregate_by_country(records)] == [
        ("Usa", 2),
        ("United kingdom", 1),
        ("Singapore", 1),
        ("Belgium", 1),
        ("South korea", 1),
    ]
    assert [(c.category, c.count) for c in aggregate_by_category(records)] == [
        ("Sandbox", 4),
        ("Pilot program", 1),
        ("AI governance", 1),
    ]
    assert aggregate_by_year(records) == [
        TimelineEntry("2016", 2, ["Sandbox UK", "Sandbox SG"]),
        TimelineEntry("2019", 1, ["CAS"]),
        TimelineEntry("2020", 1, ["BEYOND"]),
    ]


# ---------------------------------------------------------------------------
# Featured projects carousel
# ---------------------------------------------------------------------------


class TestFeaturedProjects:
    def test_only_records_with_project_text(self) -> None:
        records = [rec(project="Pilot"), rec(project="  "), rec(project="")]
        assert select_featured_projects(records) == [records[0]]

    def test_step_index_wraps_both_ways(self) -> None:
        assert step_index(2, 3, 1) == 0
        assert step_index(0, 3, -1) == 2
        assert step_index(1, 3, 1) == 2

    def test_step_index_with_no_items(self) -> None:
        assert step_index(5, 0, 1) == 0
