"""Load the calculator spreadsheets (exported as delimited text) into maps keyed by weapon."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple, TypeVar

from .errors import MalformedFieldError, SourceIntegrityError
from .model import Number

T = TypeVar("T")

RowMapper = Callable[[List[str], str], T]


def parse_number(
    raw: Optional[str], *, strict: bool = False, key: str = "", field: str = ""
) -> Optional[Number]:
    """
    Parse a numeric cell. Blank or unparsable text is absent (None), never zero.
    In strict mode only blank cells are absent; anything else that fails raises.
    """
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        if strict:
            raise MalformedFieldError(key, field, raw) from None
        return None
    if value != value or value in (float("inf"), float("-inf")):
        if strict:
            raise MalformedFieldError(key, field, raw)
        return None
    if value.is_integer():
        return int(value)
    return value


def parse_nonzero(
    raw: Optional[str], *, strict: bool = False, key: str = "", field: str = ""
) -> Optional[Number]:
    value = parse_number(raw, strict=strict, key=key, field=field)
    return value or None


def parse_required_int(raw: Optional[str], *, key: str, field: str) -> int:
    value = parse_number(raw, strict=True, key=key, field=field)
    if value is None or not float(value).is_integer():
        raise MalformedFieldError(key, field, raw)
    return int(value)


def read_rows(path: Path, *, delimiter: str = ",") -> Iterator[Tuple[str, List[str]]]:
    """Yield (raw key, remaining columns) for every data row, skipping the header."""
    if not path.exists():
        raise SourceIntegrityError(path.name, f"missing source sheet {path}")
    with path.open(encoding="utf-8", newline="") as f:
        lines = (line.strip() for line in f)
        reader = csv.reader(lines, delimiter=delimiter)
        next(reader, None)
        for row in reader:
            if not row or not any(cell.strip() for cell in row):
                continue
            yield row[0].strip(), row[1:]


def load_sheet(
    path: Path, mapper: RowMapper[T], *, delimiter: str = ","
) -> Dict[str, T]:
    """Load a map from a sheet where the first column is the key."""
    rows: Dict[str, T] = {}
    for raw_key, columns in read_rows(path, delimiter=delimiter):
        key = raw_key.upper()
        if key in rows:
            print(f"[warn] {path.name}: duplicate key {raw_key!r}, keeping the last row")
        rows[key] = mapper(columns, raw_key)
    return rows


def split_levels(columns: Sequence[str], column_count: int) -> List[List[str]]:
    level_count = len(columns) // column_count
    return [
        list(columns[level * column_count : (level + 1) * column_count])
        for level in range(level_count)
    ]


def load_sheet_by_level(
    path: Path, column_count: int, mapper: RowMapper[T], *, delimiter: str = ","
) -> Dict[str, List[T]]:
    """
    Load a map from a sheet where the first column is the key and the remaining
    columns repeat in groups of column_count, one group per upgrade level.
    """
    if column_count <= 0:
        raise ValueError(f"column_count must be positive, got {column_count}")
    return load_sheet(
        path,
        lambda columns, key: [
            mapper(group, key) for group in split_levels(columns, column_count)
        ],
        delimiter=delimiter,
    )
