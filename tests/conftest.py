from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from weapon_data.config import BuildConfig
from weapon_data.model import ATTRIBUTES, DAMAGE_TYPES

LevelValues = Callable[[int], Dict[str, object]]

FLAT_CURVES = {damage_type: 0 for damage_type in DAMAGE_TYPES}


def _fmt(value: object) -> str:
    return "" if value is None else str(value)


@dataclass
class SheetWeapon:
    key: str
    name: str
    affinity: str = "None"
    weapon_type: str = "Straight Sword"
    max_upgrade_level: int = 10
    attack: LevelValues = lambda level: {"physical": 100 + 5 * level}
    scaling: LevelValues = lambda level: {"str": 0.5}
    requirements: Dict[str, object] = field(default_factory=lambda: {"str": 10})
    curves: Dict[str, object] = field(default_factory=lambda: dict(FLAT_CURVES))
    element_correct_id: str = "10000"
    statuses: Optional[LevelValues] = None
    fixed_statuses: Dict[str, object] = field(default_factory=dict)
    paired: bool = False
    level_count: Optional[int] = None

    @property
    def levels(self) -> int:
        return self.level_count if self.level_count is not None else self.max_upgrade_level + 1


class SheetBuilder:
    """Writes a minimal set of calculator sheets for a handful of weapons."""

    def __init__(self) -> None:
        self.weapons: List[SheetWeapon] = []
        self.element_corrects: Dict[str, Dict[str, List[str]]] = {
            "10000": {"physical": ["str", "dex"]},
        }
        self.skip: Dict[str, set] = {}

    def add(self, key: str, name: str, **kwargs) -> SheetWeapon:
        weapon = SheetWeapon(key=key, name=name, **kwargs)
        self.weapons.append(weapon)
        return weapon

    def omit(self, sheet: str, key: str) -> None:
        self.skip.setdefault(sheet, set()).add(key)

    def _rows(self, sheet: str) -> List[SheetWeapon]:
        return [w for w in self.weapons if w.key not in self.skip.get(sheet, set())]

    def write(self, data_dir: Path) -> BuildConfig:
        data_dir.mkdir(parents=True, exist_ok=True)

        attack = ["Name,Phys +0,Mag +0,Fire +0,Ltng +0,Holy +0,Stam +0"]
        for w in self._rows("attack"):
            cells = [w.key]
            for level in range(w.levels):
                values = w.attack(level)
                cells.extend(_fmt(values.get(t, 0)) for t in DAMAGE_TYPES)
                cells.append("20")
            attack.append(",".join(cells))

        scaling = ["Name,Str +0,Dex +0,Int +0,Fai +0,Arc +0"]
        for w in self._rows("scaling"):
            cells = [w.key]
            for level in range(w.levels):
                values = w.scaling(level)
                cells.extend(_fmt(values.get(a, 0)) for a in ATTRIBUTES)
            scaling.append(",".join(cells))

        extra = ["Name,Weapon,Affinity,Id,Max,Str,Dex,Int,Fai,Arc,Wgt,Skill,Type,Paired"]
        for w in self._rows("extra_data"):
            cells = [w.key, w.name, w.affinity, "1000", str(w.max_upgrade_level)]
            cells.extend(_fmt(w.requirements.get(a, 0)) for a in ATTRIBUTES)
            cells.extend(["3.5", "Skill", w.weapon_type, "Yes" if w.paired else "No"])
            extra.append(",".join(cells))

        calc = ["Name,Phys,Mag,Fire,Ltng,Holy,AttackElementCorrectId"]
        for w in self._rows("calc_correct"):
            cells = [w.key] + [_fmt(w.curves.get(t)) for t in DAMAGE_TYPES]
            cells.append(w.element_correct_id)
            calc.append(",".join(cells))

        element = ["Id," + ",".join(f"{t}_{a}" for t in DAMAGE_TYPES for a in ATTRIBUTES)]
        for correct_id, mapping in self.element_corrects.items():
            flags = [
                "1" if a in mapping.get(t, []) else "0"
                for t in DAMAGE_TYPES
                for a in ATTRIBUTES
            ]
            element.append(",".join([correct_id] + flags))

        status = ["Name,Id,Ref,Rot,Madness,Sleep,Frost +0,Poison +0,Bleed +0"]
        for w in self._rows("status"):
            if w.statuses is None and not w.fixed_statuses:
                continue
            cells = [w.key, "0", "0"]
            cells.extend(
                _fmt(w.fixed_statuses.get(s, 0)) for s in ("Scarlet Rot", "Madness", "Sleep")
            )
            for level in range(w.levels):
                values = w.statuses(level) if w.statuses else {}
                cells.extend(_fmt(values.get(s, 0)) for s in ("Frost", "Poison", "Bleed"))
            status.append(",".join(cells))

        files = {
            "attack.csv": attack,
            "scaling.csv": scaling,
            "extraData.csv": extra,
            "calcCorrectGraph.csv": calc,
            "attackElementCorrect.csv": element,
            "status.csv": status,
        }
        for filename, lines in files.items():
            (data_dir / filename).write_text("\n".join(lines) + "\n", encoding="utf-8")
        return BuildConfig(data_dir=data_dir)


@pytest.fixture
def builder() -> SheetBuilder:
    return SheetBuilder()


@pytest.fixture
def armory(builder: SheetBuilder) -> SheetBuilder:
    """A small armory touching every correction rule."""
    builder.element_corrects["10001"] = {
        "physical": ["str", "dex", "int"],
        "magic": ["int"],
        "fire": ["fai"],
    }
    builder.add(
        "Longsword",
        "Longsword",
        max_upgrade_level=25,
        scaling=lambda level: {"str": 0.5, "dex": 0.33},
        requirements={"str": 10, "dex": 10},
    )
    builder.add(
        "Heavy Longsword",
        "Longsword",
        affinity="Heavy",
        max_upgrade_level=25,
        scaling=lambda level: {"str": 0.8},
        requirements={"str": 10, "dex": 10},
    )
    builder.add(
        "Moonveil",
        "Moonveil",
        weapon_type="Katana",
        attack=lambda level: {"physical": 73 + level, "magic": 48 + level},
        scaling=lambda level: {"str": 0.2, "dex": 0.4, "int": 0.6},
        requirements={"str": 12, "dex": 18, "int": 23},
        curves={"physical": 0, "magic": 4, "fire": 0, "lightning": 0, "holy": 0},
        element_correct_id="10001",
    )
    builder.add("Great Club", "Great Club", weapon_type="Colossal Weapon", max_upgrade_level=25)
    builder.add(
        "Heavy Great Club",
        "Great Club",
        affinity="Heavy",
        weapon_type="Colossal Weapon",
        max_upgrade_level=25,
    )
    builder.add(
        "Cold Antspur Rapier",
        "Antspur Rapier",
        affinity="Cold",
        weapon_type="Thrusting Sword",
        max_upgrade_level=25,
        statuses=lambda level: {"Frost": 60 + level},
        fixed_statuses={"Scarlet Rot": 50},
    )
    builder.add(
        "Fingerprint Stone Shield",
        "Fingerprint Stone Shield",
        weapon_type="Greatshield",
        max_upgrade_level=25,
    )
    builder.add(
        "Occult Fingerprint Stone Shield",
        "Fingerprint Stone Shield",
        affinity="Occult",
        weapon_type="Greatshield",
        max_upgrade_level=25,
        fixed_statuses={"Madness": 100},
    )
    builder.add("Relic Sword", "Relic Sword", weapon_type="Greatsword")
    builder.add(
        "Eleonora's Poleblade",
        "Eleonora's Poleblade",
        weapon_type="Twinblade",
        statuses=lambda level: {"Bleed": 50 + level},
        paired=True,
    )
    return builder


@pytest.fixture
def armory_config(armory: SheetBuilder, tmp_path: Path) -> BuildConfig:
    return armory.write(tmp_path / "data")
