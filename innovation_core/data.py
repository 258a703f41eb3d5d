from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
import requests

from innovation_core.config import get_settings
from innovation_core.records import (
    RECORD_FIELDS,
    InnovationDataError,
    InnovationRecord,
    parse_document,
    records_to_dicts,
)


logger = logging.getLogger(__name__)

ENCODING = "utf-8-sig"


class LoadError(InnovationDataError):
    """The source document could not be fetched."""


@dataclass(frozen=True)
class LoadedDataset:
    categories: List[str]
    records: Tuple[InnovationRecord, ...]
    source: str = ""

    def to_frame(self) -> pd.DataFrame:
        return records_to_frame(self.records)


def records_to_frame(records) -> pd.DataFrame:
    return pd.DataFrame(records_to_dicts(records), columns=list(RECORD_FIELDS))


def is_remote(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def file_signature(path: Path) -> Tuple[str, float]:
    return str(path.resolve()), path.stat().st_mtime


def fetch_document(source: str, *, timeout: Optional[float] = None) -> str:
    """Read the raw CSV text from a local path or an http(s) URL."""
    if is_remote(source):
        timeout = timeout if timeout is not None else get_settings().http_timeout
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise LoadError(f"Failed to fetch {source}: {exc}") from exc
        try:
            return response.content.decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise LoadError(f"Failed to decode {source}: {exc}") from exc
    try:
        return Path(source).read_text(encoding=ENCODING)
    except (OSError, UnicodeDecodeError) as exc:
        raise LoadError(f"Failed to read {source}: {exc}") from exc


def _build_dataset(text: str, source: str) -> LoadedDataset:
    records, categories = parse_document(text)
    logger.info("Loaded %d innovations across %d categories from %s", len(records), len(categories), source)
    return LoadedDataset(categories=categories, records=records, source=source)


@lru_cache(maxsize=4)
def _load_file_cached(file_sig: Tuple[str, float]) -> LoadedDataset:
    path, _ = file_sig
    return _build_dataset(fetch_document(path), path)


def load(source: Optional[str] = None) -> LoadedDataset:
    source = source or get_settings().source
    if is_remote(source):
        return _build_dataset(fetch_document(source), source)
    path = Path(source)
    try:
        sig = file_signature(path)
    except OSError as exc:
        raise LoadError(f"Failed to read {source}: {exc}") from exc
    return _load_file_cached(sig)


async def load_async(source: Optional[str] = None) -> LoadedDataset:
    return await asyncio.to_thread(load, source)


def clear_cache() -> None:
    _load_file_cached.cache_clear()

