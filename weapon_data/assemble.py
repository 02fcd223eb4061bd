"""Join the normalized sheets into one record per weapon per upgrade level."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .errors import SourceIntegrityError
from .model import (
    DAMAGE_TYPES,
    Number,
    WeaponMetadata,
    WeaponRecord,
    WeaponSources,
    WeaponVariant,
    variant_key,
)


def _level(levels: Sequence[Dict[str, Number]], upgrade_level: int, key: str, sheet: str):
    if upgrade_level >= len(levels):
        raise SourceIntegrityError(
            key, f"{sheet} sheet has no data for upgrade level {upgrade_level}"
        )
    return levels[upgrade_level]


def prune_damage_scaling(
    attack: Dict[str, Number],
    attribute_scaling: Dict[str, Number],
    requirements: Dict[str, int],
    scaling_attributes: Dict[str, List[str]],
    scaling_curves: Dict[str, int],
) -> Tuple[Dict[str, List[str]], Dict[str, int]]:
    """
    Keep only attributes that actually affect the weapon's attack power, and drop
    damage types the weapon doesn't deal or that don't scale with anything.
    """
    kept_attributes: Dict[str, List[str]] = {}
    kept_curves: Dict[str, int] = {}
    for damage_type in DAMAGE_TYPES:
        attributes = [
            attribute
            for attribute in scaling_attributes.get(damage_type, [])
            if attribute_scaling.get(attribute) or requirements.get(attribute)
        ]
        if not attack.get(damage_type) or not attributes:
            continue
        kept_attributes[damage_type] = attributes
        if damage_type in scaling_curves:
            kept_curves[damage_type] = scaling_curves[damage_type]
    return kept_attributes, kept_curves


def assemble_weapon(sources: WeaponSources, key: str) -> List[WeaponRecord]:
    attack_by_level = sources.attack[key]
    scaling_by_level = sources.attribute_scaling.get(key)
    if scaling_by_level is None:
        raise SourceIntegrityError(key, "missing from the scaling sheet")
    extra = sources.extra_data.get(key)
    if extra is None:
        raise SourceIntegrityError(key, "missing from the extra data sheet")
    calc_correct = sources.calc_correct.get(key)
    if calc_correct is None:
        raise SourceIntegrityError(key, "missing from the calc correct graph sheet")
    scaling_attributes = sources.attack_element_correct.get(
        calc_correct.attack_element_correct_id
    )
    if scaling_attributes is None:
        raise SourceIntegrityError(
            key,
            f"attack element correct id {calc_correct.attack_element_correct_id!r} "
            "is missing from the attack element correct sheet",
        )
    statuses_by_level = sources.statuses.get(key, [])

    records: List[WeaponRecord] = []
    for upgrade_level in range(extra.max_upgrade_level + 1):
        attack = dict(_level(attack_by_level, upgrade_level, key, "attack"))
        attribute_scaling = dict(_level(scaling_by_level, upgrade_level, key, "scaling"))
        statuses = (
            dict(statuses_by_level[upgrade_level])
            if upgrade_level < len(statuses_by_level)
            else {}
        )
        damage_scaling_attributes, damage_scaling_curves = prune_damage_scaling(
            attack,
            attribute_scaling,
            extra.requirements,
            scaling_attributes,
            calc_correct.damage_scaling_curves,
        )
        records.append(
            WeaponRecord(
                metadata=WeaponMetadata(
                    weapon_name=extra.weapon_name,
                    affinity=extra.affinity,
                    weapon_type=extra.weapon_type,
                    max_upgrade_level=extra.max_upgrade_level,
                    upgrade_level=upgrade_level,
                ),
                requirements=dict(extra.requirements),
                attack=attack,
                attribute_scaling=attribute_scaling,
                damage_scaling_attributes=damage_scaling_attributes,
                damage_scaling_curves=damage_scaling_curves,
                statuses=statuses,
                paired=extra.paired,
            )
        )
    return records


def assemble_weapons(sources: WeaponSources) -> List[WeaponRecord]:
    """Every upgrade level of every weapon, in attack sheet order."""
    records: List[WeaponRecord] = []
    for key in sources.attack:
        records.extend(assemble_weapon(sources, key))
    return records


def group_variants(records: Sequence[WeaponRecord]) -> List[WeaponVariant]:
    grouped: Dict[str, List[WeaponRecord]] = {}
    for record in records:
        key = variant_key(record.metadata.weapon_name, record.metadata.affinity)
        levels = grouped.setdefault(key, [])
        if record.metadata.upgrade_level != len(levels):
            raise SourceIntegrityError(
                key, "more than one weapon key assembles into this weapon and affinity"
            )
        levels.append(record)
    return [
        WeaponVariant(
            weapon_name=levels[0].metadata.weapon_name,
            affinity=levels[0].metadata.affinity,
            levels=tuple(levels),
        )
        for levels in grouped.values()
    ]
