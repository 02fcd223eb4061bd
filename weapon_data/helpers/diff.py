from typing import Dict, List, Sequence

from ..model import WeaponVariant


def variants_by_key(variants: Sequence[WeaponVariant]) -> Dict[str, WeaponVariant]:
    return {variant.group_key: variant for variant in variants}


def _changed_levels(before: WeaponVariant, after: WeaponVariant) -> List[int]:
    count = max(len(before.levels), len(after.levels))
    changed: List[int] = []
    for level in range(count):
        old = before.levels[level] if level < len(before.levels) else None
        new = after.levels[level] if level < len(after.levels) else None
        if old != new:
            changed.append(level)
    return changed


def _format_levels(levels: List[int]) -> str:
    if len(levels) == 1:
        return f"+{levels[0]}"
    return f"+{levels[0]}..+{levels[-1]} ({len(levels)} levels)"


def report_variant_deltas(
    before: Sequence[WeaponVariant],
    after: Sequence[WeaponVariant],
    *,
    max_list: int = 50,
    printer=print,
) -> Dict[str, List[str]]:
    """
    Compare a previous build to a new one, keyed by weapon name/affinity, and
    print an added/removed/changed summary. Returns the keys in each bucket.
    """
    before_map = variants_by_key(before)
    after_map = variants_by_key(after)

    added = [key for key in after_map if key not in before_map]
    removed = [key for key in before_map if key not in after_map]
    changed: Dict[str, List[int]] = {}
    for key, variant in after_map.items():
        previous = before_map.get(key)
        if previous is None or previous == variant:
            continue
        changed[key] = _changed_levels(previous, variant)

    summary = {"added": added, "removed": removed, "changed": list(changed)}
    total_diff = len(added) + len(removed) + len(changed)
    if not total_diff:
        printer("No weapon changes detected.")
        return summary

    printer(
        f"Weapon deltas: added={len(added)}, removed={len(removed)}, changed={len(changed)}"
    )
    if total_diff <= max_list:
        if added:
            printer("  Added:")
            for key in sorted(added):
                printer(f"    - {key}")
        if removed:
            printer("  Removed:")
            for key in sorted(removed):
                printer(f"    - {key}")
        if changed:
            printer("  Changed:")
            for key in sorted(changed):
                levels = changed[key]
                suffix = f" at {_format_levels(levels)}" if levels else ""
                printer(f"    - {key}{suffix}")
    return summary
