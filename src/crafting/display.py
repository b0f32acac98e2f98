"""Plain-text item sheet."""

from typing import List, Optional

from .catalog import Catalog
from .describer import DescriptionEngine
from .models import Item
from .properties import PropertyAggregator

SEPARATOR = "--------"


def render_item(
    item: Item,
    catalog: Catalog,
    engine: DescriptionEngine,
    aggregator: Optional[PropertyAggregator] = None,
) -> str:
    """Render the item sheet: header, resolved properties, item level, explicits."""
    base = catalog.base(item.base_id)
    props = (aggregator or PropertyAggregator(catalog)).resolve(item)

    lines: List[str] = [
        f"Rarity: {item.rarity.value}",
        item.name,
        SEPARATOR,
        base.item_class,
    ]

    if props.block != 0:
        lines.append(f"Chance to Block: {props.block}%")
    if props.armour != 0:
        lines.append(f"Armour: {props.armour}")
    if props.evasion != 0:
        lines.append(f"Evasion: {props.evasion}")
    if props.energy_shield != 0:
        lines.append(f"Energy Shield: {props.energy_shield}")
    if props.physical_damage_max != 0:
        lines.append(f"Physical Damage: {props.physical_damage_min}-{props.physical_damage_max}")
    if props.critical_strike_chance != 0:
        lines.append(f"Critical Strike Chance: {props.critical_strike_chance / 100:.2f}")
    if props.attack_time != 0:
        lines.append(f"Attacks per Second: {1000 / props.attack_time:.2f}")

    lines.append(SEPARATOR)
    lines.append(f"Item Level: {item.item_level}")

    if item.explicits:
        lines.append(SEPARATOR)
        description = engine.describe_item(item)
        if description:
            lines.append(description)

    return "\n".join(lines)
