#!/usr/bin/env python3
"""Build the compact weapon data JSON from the weapon calculator spreadsheets."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from .assemble import assemble_weapons, group_variants
from .codec import FORMAT_VERSION, decode_weapon_data, encode_weapon_data
from .config import BuildConfig, load_config
from .corrections import normalize
from .helpers.diff import report_variant_deltas
from .helpers.output import format_build_summary, format_path_for_console, print_error
from .model import WeaponRecord, WeaponVariant
from .sources import load_sources


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compile the weapon calculator sheets into a single compact JSON file."
    )
    parser.add_argument("output", type=Path, help="Where to write the weapon data JSON.")
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional YAML config (data_dir, delimiter, strict, sources).",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the sheets; overrides the config (default: data).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on non-numeric values in numeric columns instead of treating them as blank.",
    )
    parser.add_argument(
        "--previous",
        type=Path,
        help="Previously built weapon data JSON to report changes against.",
    )
    return parser.parse_args(argv)


def compile_weapons(config: BuildConfig) -> Tuple[List[WeaponRecord], List[WeaponVariant]]:
    sources = normalize(load_sources(config))
    records = assemble_weapons(sources)
    return records, group_variants(records)


def compile_weapon_data(config: BuildConfig) -> List[Any]:
    """Load, correct, assemble and encode. Every call starts from the sheets on disk."""
    _, variants = compile_weapons(config)
    return encode_weapon_data(variants)


def dump_weapon_data(payload: List[Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def load_weapon_data(path: Path) -> List[WeaponVariant]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse weapon data at {path}: {exc}") from exc
    return decode_weapon_data(payload)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args.config).with_overrides(
            data_dir=args.data_dir, strict=args.strict
        )
        records, variants = compile_weapons(config)
        payload = encode_weapon_data(variants)
        previous = load_weapon_data(args.previous) if args.previous else None
    except (ValueError, OSError) as exc:
        # WeaponDataError is a ValueError
        print_error(str(exc))
        return 1

    if previous is not None:
        report_variant_deltas(previous, variants)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(dump_weapon_data(payload), encoding="utf-8")
    print(
        f"Wrote {format_build_summary(len(records), len(variants), payload[0], FORMAT_VERSION)} "
        f"to {format_path_for_console(args.output, Path.cwd())}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
