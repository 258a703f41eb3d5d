from __future__ import annotations

from typing import List


SEPARATOR = ","
QUOTE = '"'


def split_lines(text: str) -> List[str]:
    """Split a whole document into lines. Surrounding blank space is stripped first."""
    stripped = text.strip()
    if not stripped:
        return []
    return [line[:-1] if line.endswith("\r") else line for line in stripped.split("\n")]


def parse_csv_line(line: str, separator: str = SEPARATOR) -> List[str]:
    """Split one line into trimmed fields, keeping separators inside double quotes.

    Quotes only toggle the quoted state and are never emitted, so a doubled
    quote (``""``) is not an escaped literal quote.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == separator and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields


def tokenize_document(text: str, separator: str = SEPARATOR) -> List[List[str]]:
    return [parse_csv_line(line, separator) for line in split_lines(text)]
