"""Resolution of base properties, rolled stats and quality into display values."""

from dataclasses import fields
from typing import Dict

from .catalog import Catalog
from .models import Item, Properties, QualityKind
from .stat_effects import QUALITY_MULTIPLIERS, Multiplier

# Additive property each multiplier scales
_SCALED_FIELDS = {
    "armour": Multiplier.ARMOUR,
    "evasion": Multiplier.EVASION,
    "energy_shield": Multiplier.ENERGY_SHIELD,
    "physical_damage_min": Multiplier.PHYSICAL_DAMAGE,
    "physical_damage_max": Multiplier.PHYSICAL_DAMAGE,
    "critical_strike_chance": Multiplier.CRITICAL_STRIKE_CHANCE,
}


def _truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


class PropertyAggregator:
    """Combine an item's base template, explicits and quality."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def multipliers(self, item: Item) -> Dict[Multiplier, int]:
        """Percentage multipliers after explicits and quality."""
        _, percents = self._accumulate(item)
        return percents

    def resolve(self, item: Item) -> Properties:
        """Compute a fresh, fully resolved property snapshot for ``item``."""
        values, percents = self._accumulate(item)

        for name, multiplier in _SCALED_FIELDS.items():
            values[name] = _truncating_div(values[name] * percents[multiplier], 100)

        # Faster attacks shorten the attack time
        attack_speed = percents[Multiplier.ATTACK_SPEED]
        if attack_speed > 0:
            values["attack_time"] = _truncating_div(values["attack_time"] * 100, attack_speed)
        else:
            values["attack_time"] = 0

        return Properties(**values)

    def _accumulate(self, item: Item):
        base = self.catalog.base(item.base_id)
        values: Dict[str, int] = {f.name: getattr(base.properties, f.name) for f in fields(Properties)}
        percents: Dict[Multiplier, int] = {m: 100 for m in Multiplier}

        for explicit in item.explicits:
            for stat in self.catalog.stat_rolls(explicit):
                effect = self.catalog.stat_effect(stat.id)
                if effect is None:
                    continue
                amount = stat.roll * effect.coefficient
                for name in effect.additive:
                    values[name] += amount
                for multiplier in effect.multipliers:
                    percents[multiplier] += amount

        values["quality"] += item.quality.amount
        if item.quality.kind == QualityKind.NORMAL:
            for multiplier in QUALITY_MULTIPLIERS:
                percents[multiplier] += item.quality.amount

        return values, percents
