"""Validation utilities for generated items."""

import logging
from typing import List

from .affix_scale import affix_limit
from .catalog import Catalog
from .models import GenerationType, Item

logger = logging.getLogger(__name__)


class ItemValidator:
    """Checks generated items against the crafting invariants."""

    MIN_ITEM_LEVEL = 1
    MAX_ITEM_LEVEL = 100

    @classmethod
    def validate_rolls(cls, item: Item, catalog: Catalog) -> List[str]:
        """
        Validate that every roll lies within its stat definition's range.

        Args:
            item: Item to validate
            catalog: Catalog the item's modifiers belong to

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        for explicit in item.explicits:
            modifier = catalog.modifier(explicit.modifier_id)
            if len(explicit.rolls) != len(modifier.stats):
                errors.append(
                    f"{modifier.key} has {len(explicit.rolls)} rolls for "
                    f"{len(modifier.stats)} stats"
                )
                continue
            for stat, roll in zip(modifier.stats, explicit.rolls):
                if not stat.min <= roll <= stat.max:
                    errors.append(
                        f"{modifier.key}: {stat.id} roll {roll} outside "
                        f"[{stat.min}, {stat.max}]"
                    )

        return errors

    @classmethod
    def validate_item(cls, item: Item, catalog: Catalog) -> List[str]:
        """
        Validate a complete generated item.

        Args:
            item: Item to validate
            catalog: Catalog the item's modifiers belong to

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not cls.MIN_ITEM_LEVEL <= item.item_level <= cls.MAX_ITEM_LEVEL:
            errors.append(
                f"Item level must be between {cls.MIN_ITEM_LEVEL} and "
                f"{cls.MAX_ITEM_LEVEL}, got {item.item_level}"
            )

        modifiers = [catalog.modifier(e.modifier_id) for e in item.explicits]

        # Groups are exclusive
        seen_groups = set()
        for modifier in modifiers:
            if modifier.group in seen_groups:
                errors.append(f"Duplicate modifier group: {modifier.group}")
            seen_groups.add(modifier.group)

        # Affix limits
        limit = affix_limit(item.rarity, catalog.base(item.base_id).item_class)
        for generation_type in (GenerationType.PREFIX, GenerationType.SUFFIX):
            count = sum(1 for m in modifiers if m.generation_type == generation_type)
            if count > limit:
                errors.append(
                    f"Too many {generation_type.value}es: {count} (limit {limit} "
                    f"for {item.rarity.value})"
                )

        for modifier in modifiers:
            if not modifier.is_affix:
                logger.warning(f"Explicit {modifier.key} is a {modifier.generation_type.value} modifier")

        errors.extend(cls.validate_rolls(item, catalog))
        return errors
