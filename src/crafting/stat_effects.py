"""Effects of recognised local stats on item properties.

Each stat id maps to a :class:`StatEffect` naming the base properties the
roll adds into and the percentage multipliers it adds into. The catalog
builds its lookup table from :data:`STAT_EFFECTS` once, at load time.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Tuple


class Multiplier(Enum):
    """Percentage multipliers, each starting at 100."""

    ARMOUR = "armour"
    EVASION = "evasion"
    ENERGY_SHIELD = "energy_shield"
    PHYSICAL_DAMAGE = "physical_damage"
    CRITICAL_STRIKE_CHANCE = "critical_strike_chance"
    ATTACK_SPEED = "attack_speed"


@dataclass(frozen=True)
class StatEffect:
    """Additive property fields and multipliers a single stat feeds."""

    additive: Tuple[str, ...] = ()  # field names on Properties
    multipliers: Tuple[Multiplier, ...] = ()
    coefficient: int = 1


def _flat(*fields: str) -> StatEffect:
    return StatEffect(additive=fields)


def _percent(*multipliers: Multiplier) -> StatEffect:
    return StatEffect(multipliers=multipliers)


STAT_EFFECTS: Dict[str, StatEffect] = {
    "local_base_physical_damage_reduction_rating": _flat("armour"),
    "local_base_evasion_rating": _flat("evasion"),
    "local_energy_shield": _flat("energy_shield"),
    "local_minimum_added_physical_damage": _flat("physical_damage_min"),
    "local_maximum_added_physical_damage": _flat("physical_damage_max"),
    "local_item_quality_+": _flat("quality"),
    "local_additional_block_chance_%": _flat("block"),
    "local_physical_damage_reduction_rating_+%": _percent(Multiplier.ARMOUR),
    "local_evasion_rating_+%": _percent(Multiplier.EVASION),
    "local_energy_shield_+%": _percent(Multiplier.ENERGY_SHIELD),
    "local_armour_and_evasion_+%": _percent(Multiplier.ARMOUR, Multiplier.EVASION),
    "local_armour_and_energy_shield_+%": _percent(Multiplier.ARMOUR, Multiplier.ENERGY_SHIELD),
    "local_evasion_and_energy_shield_+%": _percent(Multiplier.EVASION, Multiplier.ENERGY_SHIELD),
    "local_armour_and_evasion_and_energy_shield_+%": _percent(
        Multiplier.ARMOUR, Multiplier.EVASION, Multiplier.ENERGY_SHIELD
    ),
    "local_physical_damage_+%": _percent(Multiplier.PHYSICAL_DAMAGE),
    "local_critical_strike_chance_+%": _percent(Multiplier.CRITICAL_STRIKE_CHANCE),
    "local_attack_speed_+%": _percent(Multiplier.ATTACK_SPEED),
}

# Multipliers that Normal (non-imbued) item quality also feeds
QUALITY_MULTIPLIERS: Tuple[Multiplier, ...] = (
    Multiplier.ARMOUR,
    Multiplier.EVASION,
    Multiplier.ENERGY_SHIELD,
    Multiplier.PHYSICAL_DAMAGE,
)


def build_stat_effect_map(stat_ids: Iterable[str]) -> Dict[str, StatEffect]:
    """Build the lookup table for the stat ids a catalog can roll."""
    return {
        sys.intern(stat_id): STAT_EFFECTS[stat_id]
        for stat_id in stat_ids
        if stat_id in STAT_EFFECTS
    }
