"""Affix count rolls and weighted modifier draws."""

from typing import List, Optional, Sequence

from config.logging_config import get_logger
from src.core.error_handling import NoEligibleModifierError

from .affix_scale import JEWEL_CLASSES, AffixScale
from .catalog import Catalog
from .models import Item, ModifierInstance, Rarity
from .sampler import Sampler

logger = get_logger(__name__)


class AffixSelector:
    """Attach randomly drawn explicit modifiers to items."""

    # Relative weights of total explicit counts for Rare items
    RARE_COUNT_WEIGHTS = {4: 8, 5: 3, 6: 1}
    RARE_JEWEL_COUNT_WEIGHTS = {3: 13, 4: 7}

    def __init__(
        self,
        catalog: Catalog,
        sampler: Sampler,
        candidates: Optional[Sequence[int]] = None,
    ):
        """
        Initialize the selector.

        Args:
            catalog: Catalog owning every modifier
            sampler: Random source for counts, draws and stat rolls
            candidates: Modifier ids usable for explicit rolls; defaults to
                the whole catalog
        """
        self.catalog = catalog
        self.sampler = sampler
        if candidates is None:
            candidates = range(len(catalog.modifiers))
        self.candidates: List[int] = list(candidates)

    def roll_count(self, rarity: Rarity, item_class: str) -> int:
        """Roll how many explicits an item of this rarity and class gets."""
        if rarity == Rarity.MAGIC:
            return 1 if self.sampler.flip() else 2
        if rarity == Rarity.RARE:
            table = self.RARE_JEWEL_COUNT_WEIGHTS if item_class in JEWEL_CLASSES else self.RARE_COUNT_WEIGHTS
            counts = list(table)
            return counts[self.sampler.weighted_index([table[c] for c in counts])]
        return 0

    def instantiate(self, modifier_id: int) -> ModifierInstance:
        """Roll every stat of a modifier uniformly over its inclusive range."""
        modifier = self.catalog.modifier(modifier_id)
        rolls = tuple(self.sampler.uniform_int(stat.min, stat.max) for stat in modifier.stats)
        return ModifierInstance(modifier_id=modifier_id, rolls=rolls)

    def add_modifier(self, item: Item, target_rarity: Rarity) -> ModifierInstance:
        """
        Draw one modifier for ``item`` and append it to its explicits.

        Raises:
            NoEligibleModifierError: If every candidate weighs 0
        """
        scale = AffixScale.for_item(item, self.catalog, target_rarity)

        eligible: List[int] = []
        weights: List[int] = []
        for modifier_id in self.candidates:
            weight = scale.weight(self.catalog.modifier(modifier_id))
            if weight > 0:
                eligible.append(modifier_id)
                weights.append(weight)

        if not eligible:
            base = self.catalog.base(item.base_id)
            raise NoEligibleModifierError(
                f"No eligible modifier for {base.name} after {len(item.explicits)} explicit(s)",
                base_name=base.name,
                context={
                    "item_level": item.item_level,
                    "target_rarity": target_rarity.value,
                    "open_prefix": scale.open_prefix,
                    "open_suffix": scale.open_suffix,
                },
            )

        chosen = eligible[self.sampler.weighted_index(weights)]
        instance = self.instantiate(chosen)
        item.explicits.append(instance)
        logger.debug(
            f"Rolled {self.catalog.modifier(chosen).key} {list(instance.rolls)} "
            f"from {len(eligible)} candidates"
        )
        return instance

    def generate(self, item: Item, count: int, target_rarity: Rarity) -> Item:
        """
        Perform ``count`` draws, rebuilding the scale before each.

        The draws are all-or-nothing: if one fails, explicits added by this
        call are removed before the error propagates.
        """
        existing = len(item.explicits)
        try:
            for _ in range(count):
                self.add_modifier(item, target_rarity)
        except NoEligibleModifierError:
            del item.explicits[existing:]
            raise
        return item

    def _upgrade(self, item: Item, target_rarity: Rarity) -> Item:
        if item.rarity != Rarity.NORMAL:
            return item

        base = self.catalog.base(item.base_id)
        count = self.roll_count(target_rarity, base.item_class)
        self.generate(item, count, target_rarity)
        item.rarity = target_rarity
        return item

    def apply_alchemy(self, item: Item) -> Item:
        """Turn a Normal item Rare with freshly rolled explicits."""
        return self._upgrade(item, Rarity.RARE)

    def apply_transmutation(self, item: Item) -> Item:
        """Turn a Normal item Magic with one or two explicits."""
        return self._upgrade(item, Rarity.MAGIC)
