"""Weapon record types and the closed value sets they draw from."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

Number = Union[int, float]

ATTRIBUTES: Tuple[str, ...] = ("str", "dex", "int", "fai", "arc")
DAMAGE_TYPES: Tuple[str, ...] = ("physical", "magic", "fire", "lightning", "holy")
STATUS_TYPES: Tuple[str, ...] = (
    "Frost",
    "Poison",
    "Bleed",
    "Scarlet Rot",
    "Madness",
    "Sleep",
)

# Every weapon without an Ash of War applied is listed with this affinity in the sheets
RAW_NO_AFFINITY = "None"
STANDARD_AFFINITY = "Standard"
SPECIAL_AFFINITY = "Special"

INFUSIONS = frozenset(
    {
        "Heavy",
        "Keen",
        "Quality",
        "Fire",
        "Flame Art",
        "Lightning",
        "Sacred",
        "Magic",
        "Cold",
        "Poison",
        "Blood",
        "Occult",
    }
)
AFFINITIES = INFUSIONS | {STANDARD_AFFINITY, SPECIAL_AFFINITY}

WEAPON_TYPES = frozenset(
    {
        "Dagger",
        "Straight Sword",
        "Greatsword",
        "Colossal Sword",
        "Thrusting Sword",
        "Heavy Thrusting Sword",
        "Curved Sword",
        "Curved Greatsword",
        "Katana",
        "Twinblade",
        "Axe",
        "Greataxe",
        "Hammer",
        "Flail",
        "Great Hammer",
        "Colossal Weapon",
        "Spear",
        "Great Spear",
        "Halberd",
        "Reaper",
        "Whip",
        "Fist",
        "Claw",
        "Light Bow",
        "Bow",
        "Greatbow",
        "Crossbow",
        "Ballista",
        "Glintstone Staff",
        "Sacred Seal",
        "Small Shield",
        "Medium Shield",
        "Greatshield",
        "Torch",
        # Shadow of the Erdtree
        "Throwing Blade",
        "Backhand Blade",
        "Perfume Bottle",
        "Beast Claw",
        "Light Greatsword",
        "Great Katana",
        "Hand-to-Hand Art",
        "Thrusting Shield",
    }
)

MAX_UPGRADE_LEVELS = frozenset({10, 25})


@dataclass(frozen=True)
class WeaponMetadata:
    weapon_name: str
    affinity: str
    weapon_type: str
    max_upgrade_level: int
    upgrade_level: int = 0


@dataclass(frozen=True)
class ExtraData:
    """One extraData row: everything about a weapon that does not change with upgrades."""

    weapon_name: str
    affinity: str
    weapon_type: str
    max_upgrade_level: int
    requirements: Dict[str, int] = field(default_factory=dict)
    paired: bool = False


@dataclass(frozen=True)
class CalcCorrect:
    attack_element_correct_id: str
    damage_scaling_curves: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class WeaponRecord:
    metadata: WeaponMetadata
    requirements: Dict[str, int] = field(default_factory=dict)
    attack: Dict[str, Number] = field(default_factory=dict)
    attribute_scaling: Dict[str, Number] = field(default_factory=dict)
    damage_scaling_attributes: Dict[str, List[str]] = field(default_factory=dict)
    damage_scaling_curves: Dict[str, int] = field(default_factory=dict)
    statuses: Dict[str, Number] = field(default_factory=dict)
    paired: bool = False


@dataclass(frozen=True)
class WeaponVariant:
    """Every upgrade level of one weapon name + affinity pair, level 0 first."""

    weapon_name: str
    affinity: str
    levels: Tuple[WeaponRecord, ...]

    @property
    def group_key(self) -> str:
        return variant_key(self.weapon_name, self.affinity)


def variant_key(weapon_name: str, affinity: str) -> str:
    return f"{weapon_name}/{affinity}"


@dataclass
class WeaponSources:
    """The loaded sheets, keyed by weapon key (attack element correct by its own id)."""

    attack: Dict[str, List[Dict[str, Number]]]
    attribute_scaling: Dict[str, List[Dict[str, Number]]]
    extra_data: Dict[str, ExtraData]
    calc_correct: Dict[str, CalcCorrect]
    attack_element_correct: Dict[str, Dict[str, List[str]]]
    statuses: Dict[str, List[Dict[str, Number]]]

    def drop_key(self, key: str) -> None:
        for table in (
            self.attack,
            self.attribute_scaling,
            self.extra_data,
            self.calc_correct,
            self.statuses,
        ):
            table.pop(key, None)
