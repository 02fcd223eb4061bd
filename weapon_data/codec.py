"""
Compact positional encoding of weapon variants.

An encoded variant is a list of fields in the order below. Trailing fields equal
to their default are left off, as are trailing nulls inside each positional array
and trailing empty levels inside each per-level list, so the format is not
self-describing: the decoder pads everything back out from this table.

    0  index into the name table
    1  affinity
    2  weapon type
    3  max upgrade level
    4  requirements            [str, dex, int, fai, arc]                 default []
    5  attack per level        [[physical, magic, fire, lightning, holy]] default []
    6  attribute scaling       [[str, dex, int, fai, arc]]               default []
    7  scaling attributes      [[[attributes] per damage type]]          default []
    8  scaling curves          [[curve id per damage type]]              default []
    9  statuses per level      [[Frost, Poison, Bleed, Scarlet Rot, Madness, Sleep]] default []
    10 paired                  1                                         default 0

Any change to this table must bump FORMAT_VERSION and ship with a matching decoder.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Sequence, Tuple

from .errors import ArtifactFormatError
from .model import (
    ATTRIBUTES,
    DAMAGE_TYPES,
    STATUS_TYPES,
    WeaponMetadata,
    WeaponRecord,
    WeaponVariant,
)

FORMAT_VERSION = 1

REQUIRED_FIELDS: Tuple[str, ...] = ("name", "affinity", "weapon_type", "max_upgrade_level")
OPTIONAL_FIELDS: Tuple[Tuple[str, Any], ...] = (
    ("requirements", []),
    ("attack", []),
    ("attribute_scaling", []),
    ("damage_scaling_attributes", []),
    ("damage_scaling_curves", []),
    ("statuses", []),
    ("paired", 0),
)
FIELD_COUNT = len(REQUIRED_FIELDS) + len(OPTIONAL_FIELDS)

# Per-level fields: record attribute and the member order of each level's array
LEVEL_FIELDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("attack", DAMAGE_TYPES),
    ("attribute_scaling", ATTRIBUTES),
    ("damage_scaling_attributes", DAMAGE_TYPES),
    ("damage_scaling_curves", DAMAGE_TYPES),
    ("statuses", STATUS_TYPES),
)


def trim_trailing(values: List[Any], default: Any) -> List[Any]:
    end = len(values)
    while end and values[end - 1] == default:
        end -= 1
    return values[:end]


def _positional(mapping: Dict[str, Any], members: Sequence[str]) -> List[Any]:
    values = []
    for member in members:
        value = mapping.get(member)
        values.append(list(value) if isinstance(value, list) else value)
    return trim_trailing(values, None)


def _sparse(values: Sequence[Any], members: Sequence[str], field: str) -> Dict[str, Any]:
    if not isinstance(values, list):
        raise ArtifactFormatError(field, f"expected a list, got {type(values).__name__}")
    if len(values) > len(members):
        raise ArtifactFormatError(field, f"{field} has {len(values)} members, expected at most {len(members)}")
    return {
        member: (list(value) if isinstance(value, list) else value)
        for member, value in zip(members, values)
        if value is not None
    }


def build_name_table(variants: Sequence[WeaponVariant]) -> Dict[str, int]:
    """Index every distinct weapon name in the order it is first seen."""
    indexes: Dict[str, int] = {}
    for variant in variants:
        for record in variant.levels:
            indexes.setdefault(record.metadata.weapon_name, len(indexes))
    return indexes


def encode_variant(variant: WeaponVariant, name_indexes: Dict[str, int]) -> List[Any]:
    first = variant.levels[0]
    fields: List[Any] = [
        name_indexes[variant.weapon_name],
        variant.affinity,
        first.metadata.weapon_type,
        first.metadata.max_upgrade_level,
        _positional(first.requirements, ATTRIBUTES),
    ]
    for attr, members in LEVEL_FIELDS:
        fields.append(
            trim_trailing(
                [_positional(getattr(record, attr), members) for record in variant.levels],
                [],
            )
        )
    fields.append(1 if first.paired else 0)

    end = len(fields)
    while end > len(REQUIRED_FIELDS):
        _, default = OPTIONAL_FIELDS[end - 1 - len(REQUIRED_FIELDS)]
        if fields[end - 1] != default:
            break
        end -= 1
    return fields[:end]


def _pad_fields(encoded: Sequence[Any]) -> List[Any]:
    if not isinstance(encoded, list):
        raise ArtifactFormatError("variant", f"expected a list, got {type(encoded).__name__}")
    if not len(REQUIRED_FIELDS) <= len(encoded) <= FIELD_COUNT:
        raise ArtifactFormatError(
            "variant",
            f"expected {len(REQUIRED_FIELDS)} to {FIELD_COUNT} fields, got {len(encoded)}",
        )
    padded = list(encoded)
    for _, default in OPTIONAL_FIELDS[len(padded) - len(REQUIRED_FIELDS) :]:
        padded.append(copy.deepcopy(default))
    return padded


def _pad_levels(levels: Sequence[Any], level_count: int, field: str) -> List[Any]:
    if not isinstance(levels, list):
        raise ArtifactFormatError(field, f"expected a list of levels, got {type(levels).__name__}")
    if len(levels) > level_count:
        raise ArtifactFormatError(field, f"{field} has {len(levels)} levels, expected at most {level_count}")
    return list(levels) + [[] for _ in range(level_count - len(levels))]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def decode_variant(encoded: Sequence[Any], names: Sequence[str]) -> WeaponVariant:
    (
        name_index,
        affinity,
        weapon_type,
        max_upgrade_level,
        raw_requirements,
        *level_fields,
        paired,
    ) = _pad_fields(encoded)
    if not _is_int(name_index) or not 0 <= name_index < len(names):
        raise ArtifactFormatError("name", f"bad name table index {name_index!r}")
    if not _is_int(max_upgrade_level) or max_upgrade_level < 0:
        raise ArtifactFormatError(
            "max_upgrade_level", f"expected a non-negative int, got {max_upgrade_level!r}"
        )
    weapon_name = names[name_index]

    level_count = max_upgrade_level + 1
    requirements = _sparse(raw_requirements, ATTRIBUTES, "requirements")
    per_level = {
        attr: [
            _sparse(level, members, attr)
            for level in _pad_levels(raw_levels, level_count, attr)
        ]
        for (attr, members), raw_levels in zip(LEVEL_FIELDS, level_fields)
    }

    levels = tuple(
        WeaponRecord(
            metadata=WeaponMetadata(
                weapon_name=weapon_name,
                affinity=affinity,
                weapon_type=weapon_type,
                max_upgrade_level=max_upgrade_level,
                upgrade_level=upgrade_level,
            ),
            requirements=dict(requirements),
            paired=bool(paired),
            **{attr: values[upgrade_level] for attr, values in per_level.items()},
        )
        for upgrade_level in range(level_count)
    )
    return WeaponVariant(weapon_name=weapon_name, affinity=affinity, levels=levels)


def encode_weapon_data(variants: Sequence[WeaponVariant]) -> List[Any]:
    """Build the [name table, encoded variants] pair written to the artifact."""
    name_indexes = build_name_table(variants)
    return [list(name_indexes), [encode_variant(variant, name_indexes) for variant in variants]]


def decode_weapon_data(payload: Any) -> List[WeaponVariant]:
    if not isinstance(payload, list) or len(payload) != 2:
        raise ArtifactFormatError("artifact", "expected a [name table, weapons] pair")
    names, groups = payload
    if not isinstance(names, list) or not isinstance(groups, list):
        raise ArtifactFormatError("artifact", "expected a [name table, weapons] pair")
    return [decode_variant(group, names) for group in groups]
