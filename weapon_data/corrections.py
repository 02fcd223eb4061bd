"""
Fixes applied to the raw sheets before assembly. Each rule is a hand-curated
exception for a specific weapon; none of them generalise to other rows.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, List, Set

from .model import (
    RAW_NO_AFFINITY,
    SPECIAL_AFFINITY,
    STANDARD_AFFINITY,
    Number,
    WeaponSources,
)

# "Sacred" was searched & replaced out of every weapon name in the spreadsheet
TRUE_WEAPON_NAMES: Dict[str, str] = {
    "Relic Sword": "Sacred Relic Sword",
    "Mohgwyn's Spear": "Mohgwyn's Sacred Spear",
}

# Ashes of War can't be applied to these, so infused rows don't exist in the game
UNINFUSABLE_WEAPON_NAMES = frozenset({"Great Club"})

StatusOverride = Callable[[int, Dict[str, Number]], Dict[str, Number]]


def _cold_antspur_rapier(upgrade_level: int, buildup: Dict[str, Number]) -> Dict[str, Number]:
    # Gains scarlet rot up to +5, then loses it entirely at +6 and above
    fixed = dict(buildup)
    if upgrade_level < 6:
        fixed["Scarlet Rot"] = 50 + 5 * upgrade_level
    else:
        fixed.pop("Scarlet Rot", None)
    return fixed


def _occult_fingerprint_stone_shield(
    upgrade_level: int, buildup: Dict[str, Number]
) -> Dict[str, Number]:
    # Loses madness with the Occult affinity
    fixed = dict(buildup)
    fixed.pop("Madness", None)
    return fixed


# Keyed by weapon key (the uppercased first column of the status sheet)
STATUS_OVERRIDES: Dict[str, StatusOverride] = {
    "COLD ANTSPUR RAPIER": _cold_antspur_rapier,
    "OCCULT FINGERPRINT STONE SHIELD": _occult_fingerprint_stone_shield,
}


def true_weapon_name(weapon_name: str) -> str:
    return TRUE_WEAPON_NAMES.get(weapon_name, weapon_name)


def correct_weapon_names(sources: WeaponSources) -> None:
    for key, extra in list(sources.extra_data.items()):
        name = true_weapon_name(extra.weapon_name)
        if name != extra.weapon_name:
            sources.extra_data[key] = replace(extra, weapon_name=name)


def drop_impossible_affinities(sources: WeaponSources) -> List[str]:
    """Remove infused rows of weapons that can't take an Ash of War. Returns the dropped keys."""
    dropped = [
        key
        for key, extra in sources.extra_data.items()
        if extra.weapon_name in UNINFUSABLE_WEAPON_NAMES
        and extra.affinity != RAW_NO_AFFINITY
    ]
    for key in dropped:
        sources.drop_key(key)
    return dropped


def infusable_weapon_names(sources: WeaponSources) -> Set[str]:
    return {
        extra.weapon_name
        for extra in sources.extra_data.values()
        if extra.affinity != RAW_NO_AFFINITY
    }


def resolve_affinities(sources: WeaponSources) -> None:
    """
    The sheets list every un-infused weapon as "None". Weapons that show up with
    another affinity anywhere are Standard; the rest can't be infused and are Special.
    All names have to be collected before any row is resolved.
    """
    infusable = infusable_weapon_names(sources)
    for key, extra in list(sources.extra_data.items()):
        if extra.affinity != RAW_NO_AFFINITY:
            continue
        affinity = STANDARD_AFFINITY if extra.weapon_name in infusable else SPECIAL_AFFINITY
        sources.extra_data[key] = replace(extra, affinity=affinity)


def apply_status_overrides(sources: WeaponSources) -> None:
    for key, override in STATUS_OVERRIDES.items():
        levels = sources.statuses.get(key)
        if levels is None:
            continue
        sources.statuses[key] = [
            override(upgrade_level, buildup) for upgrade_level, buildup in enumerate(levels)
        ]


def normalize(sources: WeaponSources) -> WeaponSources:
    correct_weapon_names(sources)
    drop_impossible_affinities(sources)
    resolve_affinities(sources)
    apply_status_overrides(sources)
    return sources
