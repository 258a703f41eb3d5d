"""HTML snippets for the Streamlit app. Every data value is escaped."""

from __future__ import annotations

import html
from typing import Iterable


def rank_row_html(rank: int, country: object, count: int) -> str:
    suffix = "s" if count != 1 else ""
    return (
        f"<div class='rank-row'><span><span class='rank-badge'>{rank}</span>{html.escape(str(country))}</span>"
        f"<span><b>{count}</b> innovation{suffix}</span></div>"
    )


def chip_html(text: object) -> str:
    return f"<span class='chip'>{html.escape(str(text))}</span>"


def chips_html(values: Iterable[object]) -> str:
    return " ".join(chip_html(v) for v in values)
