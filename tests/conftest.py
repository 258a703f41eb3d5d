from __future__ import annotations

from pathlib import Path

import pytest

from innovation_core import data
from innovation_core.config import get_settings


SAMPLE_CSV = "\n".join(
    [
        "agency,country,name,project,category,When?,still_active?,source",
        'FCA,United Kingdom,Sandbox UK,"Live testing, supervised",Sandbox,2016,Yes,fca.org.uk',
        "MAS,Singapore,Sandbox SG,Relief for fintech,Sandbox,2016,Yes,mas.gov.sg",
        "CFPB,USA,CAS,,Sandbox,2019,No,",
        "FAA,usa,BEYOND,Drone pilots,Pilot program,2020,Yes,faa.gov",
        "EC,Belgium,,AI sandboxes,AI governance,TBD,No,",
        ",,Orphan,No country,,2020,,",
        "KR,South Korea,,,Sandbox,circa 1990,Yes,",
    ]
)


@pytest.fixture()
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def csv_file(tmp_path: Path, sample_csv: str) -> Path:
    path = tmp_path / "innovations.csv"
    path.write_text(sample_csv, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _fresh_caches():
    """Loader and settings caches are process-wide; reset them around each test."""
    data.clear_cache()
    get_settings.cache_clear()
    yield
    data.clear_cache()
    get_settings.cache_clear()

