from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_DATA_DIR = Path("data")
DEFAULT_SHEETS: Dict[str, str] = {
    "attack": "attack.csv",
    "scaling": "scaling.csv",
    "extra_data": "extraData.csv",
    "calc_correct": "calcCorrectGraph.csv",
    "attack_element_correct": "attackElementCorrect.csv",
    "status": "status.csv",
}
CONFIG_KEYS = {"data_dir", "delimiter", "strict", "sources"}


@dataclass(frozen=True)
class BuildConfig:
    data_dir: Path = DEFAULT_DATA_DIR
    delimiter: str = ","
    strict: bool = False
    sheets: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SHEETS))

    def sheet_path(self, sheet: str) -> Path:
        if sheet not in self.sheets:
            raise ValueError(f"Unknown sheet {sheet!r}")
        return self.data_dir / self.sheets[sheet]

    def with_overrides(
        self, *, data_dir: Optional[Path] = None, strict: Optional[bool] = None
    ) -> "BuildConfig":
        changes: Dict[str, Any] = {}
        if data_dir is not None:
            changes["data_dir"] = Path(data_dir)
        if strict is not None:
            changes["strict"] = strict
        return replace(self, **changes) if changes else self


def load_config(path: Optional[Path]) -> BuildConfig:
    """
    Load build settings from a YAML file. Missing keys keep their defaults; a
    relative data_dir is resolved against the config file's directory.
    """
    if path is None:
        return BuildConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"config must be a mapping, got {type(data).__name__}")

    unknown = set(data) - CONFIG_KEYS
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")

    data_dir = Path(data.get("data_dir") or DEFAULT_DATA_DIR)
    if not data_dir.is_absolute():
        data_dir = path.parent / data_dir

    sheets = dict(DEFAULT_SHEETS)
    overrides = data.get("sources") or {}
    if not isinstance(overrides, dict):
        raise ValueError(f"sources must be a mapping, got {type(overrides).__name__}")
    for sheet, filename in overrides.items():
        if sheet not in DEFAULT_SHEETS:
            raise ValueError(f"Unknown sheet {sheet!r} in {path}")
        sheets[sheet] = str(filename)

    delimiter = str(data.get("delimiter") or ",")
    if len(delimiter) != 1:
        raise ValueError(f"delimiter must be a single character, got {delimiter!r}")

    return BuildConfig(
        data_dir=data_dir,
        delimiter=delimiter,
        strict=bool(data.get("strict", False)),
        sheets=sheets,
    )
