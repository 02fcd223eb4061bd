"""Column layouts of the six calculator sheets and the mappers that read them."""

from __future__ import annotations

from typing import Dict, List, Optional

from .config import BuildConfig
from .errors import UnknownValueError
from .model import (
    ATTRIBUTES,
    DAMAGE_TYPES,
    INFUSIONS,
    MAX_UPGRADE_LEVELS,
    RAW_NO_AFFINITY,
    CalcCorrect,
    ExtraData,
    Number,
    WEAPON_TYPES,
    WeaponSources,
)
from .sheets import (
    load_sheet,
    load_sheet_by_level,
    parse_nonzero,
    parse_required_int,
)

# 5 damage types, plus stamina damage (ignored)
ATTACK_COLUMNS_PER_LEVEL = 6
SCALING_COLUMNS_PER_LEVEL = len(ATTRIBUTES)
# frost, poison and bleed change with upgrades; the other statuses come first and don't
STATUS_COLUMNS_PER_LEVEL = 3
STATUS_FIXED_COLUMNS = 5

EXTRA_WEAPON_NAME = 0
EXTRA_AFFINITY = 1
EXTRA_MAX_UPGRADE_LEVEL = 3
EXTRA_REQUIREMENTS = slice(4, 9)
EXTRA_WEAPON_TYPE = 11
EXTRA_PAIRED = 12


def _cell(columns: List[str], index: int) -> str:
    return columns[index].strip() if index < len(columns) else ""


def _sparse(
    names, values: List[str], *, strict: bool, key: str, prefix: str = ""
) -> Dict[str, Number]:
    parsed: Dict[str, Number] = {}
    for idx, name in enumerate(names):
        raw = values[idx] if idx < len(values) else ""
        value = parse_nonzero(raw, strict=strict, key=key, field=f"{prefix}{name}")
        if value is not None:
            parsed[name] = value
    return parsed


class SheetMappers:
    """Row mappers for each sheet. strict turns unparsable numeric cells into errors."""

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    def attack(self, columns: List[str], key: str) -> Dict[str, Number]:
        return _sparse(DAMAGE_TYPES, columns, strict=self.strict, key=key, prefix="attack.")

    def attribute_scaling(self, columns: List[str], key: str) -> Dict[str, Number]:
        return _sparse(ATTRIBUTES, columns, strict=self.strict, key=key, prefix="scaling.")

    def extra_data(self, columns: List[str], key: str) -> ExtraData:
        affinity = _cell(columns, EXTRA_AFFINITY)
        if affinity != RAW_NO_AFFINITY and affinity not in INFUSIONS:
            raise UnknownValueError(key, "affinity", affinity)

        weapon_type = _cell(columns, EXTRA_WEAPON_TYPE)
        if weapon_type not in WEAPON_TYPES:
            raise UnknownValueError(key, "weapon type", weapon_type)

        max_upgrade_level = parse_required_int(
            _cell(columns, EXTRA_MAX_UPGRADE_LEVEL), key=key, field="max upgrade level"
        )
        if max_upgrade_level not in MAX_UPGRADE_LEVELS:
            raise UnknownValueError(key, "max upgrade level", max_upgrade_level)

        requirements = _sparse(
            ATTRIBUTES,
            columns[EXTRA_REQUIREMENTS],
            strict=self.strict,
            key=key,
            prefix="requirement.",
        )
        return ExtraData(
            weapon_name=_cell(columns, EXTRA_WEAPON_NAME),
            affinity=affinity,
            weapon_type=weapon_type,
            max_upgrade_level=max_upgrade_level,
            requirements={name: int(value) for name, value in requirements.items()},
            paired=_cell(columns, EXTRA_PAIRED) == "Yes",
        )

    def calc_correct(self, columns: List[str], key: str) -> CalcCorrect:
        curves = {
            damage_type: parse_required_int(
                _cell(columns, idx), key=key, field=f"{damage_type} scaling curve"
            )
            for idx, damage_type in enumerate(DAMAGE_TYPES)
        }
        return CalcCorrect(
            attack_element_correct_id=_cell(columns, len(DAMAGE_TYPES)).upper(),
            damage_scaling_curves=curves,
        )

    def attack_element_correct(self, columns: List[str], key: str) -> Dict[str, List[str]]:
        scaling_attributes: Dict[str, List[str]] = {}
        for type_idx, damage_type in enumerate(DAMAGE_TYPES):
            for attr_idx, attribute in enumerate(ATTRIBUTES):
                if _cell(columns, type_idx * len(ATTRIBUTES) + attr_idx) == "1":
                    scaling_attributes.setdefault(damage_type, []).append(attribute)
        return scaling_attributes

    def statuses(self, columns: List[str], key: str) -> List[Dict[str, Number]]:
        fixed = {
            "Scarlet Rot": _cell(columns, 2),
            "Madness": _cell(columns, 3),
            "Sleep": _cell(columns, 4),
        }
        levels: List[Dict[str, Number]] = []
        per_level = columns[STATUS_FIXED_COLUMNS:]
        for level_idx in range(len(per_level) // STATUS_COLUMNS_PER_LEVEL):
            offset = level_idx * STATUS_COLUMNS_PER_LEVEL
            frost, poison, bleed = per_level[offset : offset + STATUS_COLUMNS_PER_LEVEL]
            raw = {"Frost": frost, "Poison": poison, "Bleed": bleed, **fixed}
            buildup: Dict[str, Number] = {}
            for status, cell in raw.items():
                value = parse_nonzero(
                    cell, strict=self.strict, key=key, field=f"status.{status}"
                )
                if value is not None:
                    buildup[status] = value
            levels.append(buildup)
        return levels


def load_sources(config: BuildConfig, *, strict: Optional[bool] = None) -> WeaponSources:
    """Read every sheet named by the config. Nothing is cached between calls."""
    mappers = SheetMappers(strict=config.strict if strict is None else strict)
    delimiter = config.delimiter
    return WeaponSources(
        attack=load_sheet_by_level(
            config.sheet_path("attack"),
            ATTACK_COLUMNS_PER_LEVEL,
            mappers.attack,
            delimiter=delimiter,
        ),
        attribute_scaling=load_sheet_by_level(
            config.sheet_path("scaling"),
            SCALING_COLUMNS_PER_LEVEL,
            mappers.attribute_scaling,
            delimiter=delimiter,
        ),
        extra_data=load_sheet(
            config.sheet_path("extra_data"), mappers.extra_data, delimiter=delimiter
        ),
        calc_correct=load_sheet(
            config.sheet_path("calc_correct"), mappers.calc_correct, delimiter=delimiter
        ),
        attack_element_correct=load_sheet(
            config.sheet_path("attack_element_correct"),
            mappers.attack_element_correct,
            delimiter=delimiter,
        ),
        statuses=load_sheet(
            config.sheet_path("status"), mappers.statuses, delimiter=delimiter
        ),
    )
