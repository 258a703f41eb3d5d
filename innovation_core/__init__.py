"""Core (UI-agnostic) innovations dashboard logic.

This package contains:
- CSV tokenizing and record building (text -> InnovationRecord)
- data loading (file / URL -> LoadedDataset)
- aggregations (by country, category, year)
- filter normalization
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
