"""Per-draw eligibility and weighting of candidate modifiers."""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence

from .catalog import Catalog
from .models import Domain, GenerationType, Item, Modifier, Rarity, SpawnWeight

JEWEL_CLASSES = frozenset({"Jewel", "AbyssJewel"})

# Generation weight applied when no generation-weight tag matches
NEUTRAL_GENERATION_WEIGHT = 100


def affix_limit(rarity: Rarity, item_class: str) -> int:
    """Maximum number of prefixes (and, separately, suffixes) for a rarity."""
    if rarity == Rarity.MAGIC:
        return 1
    if rarity == Rarity.RARE:
        return 2 if item_class in JEWEL_CLASSES else 3
    return 0


def _first_match(weights: Sequence[SpawnWeight], tags: FrozenSet[str]) -> Optional[int]:
    for entry in weights:
        if entry.tag in tags:
            return entry.weight
    return None


@dataclass(frozen=True)
class AffixScale:
    """
    Snapshot of an item's state used to weigh candidate modifiers.

    A scale is rebuilt before every draw: the tag set includes tags added by
    modifiers rolled earlier in the same run, so later weights depend on
    earlier outcomes.
    """

    open_prefix: bool
    open_suffix: bool
    domain: Domain
    item_level: int
    groups: FrozenSet[str]
    tags: FrozenSet[str]

    @classmethod
    def for_item(cls, item: Item, catalog: Catalog, target_rarity: Rarity) -> "AffixScale":
        """Build the scale for the next draw on ``item``."""
        base = catalog.base(item.base_id)
        limit = affix_limit(target_rarity, base.item_class)
        existing = [catalog.modifier(e.modifier_id) for e in item.explicits]

        prefixes = sum(1 for m in existing if m.generation_type == GenerationType.PREFIX)
        suffixes = sum(1 for m in existing if m.generation_type == GenerationType.SUFFIX)

        tags = set(base.tags)
        for m in existing:
            tags.update(m.adds_tags)

        return cls(
            open_prefix=prefixes < limit,
            open_suffix=suffixes < limit,
            domain=base.domain,
            item_level=item.item_level,
            groups=frozenset(m.group for m in existing),
            tags=frozenset(tags),
        )

    def is_eligible(self, candidate: Modifier) -> bool:
        if candidate.domain != self.domain:
            return False
        if not (
            (candidate.generation_type == GenerationType.PREFIX and self.open_prefix)
            or (candidate.generation_type == GenerationType.SUFFIX and self.open_suffix)
        ):
            return False
        if candidate.required_level > self.item_level:
            return False
        return candidate.group not in self.groups

    def weight(self, candidate: Modifier) -> int:
        """
        Weight of ``candidate`` for the next draw; 0 means ineligible.

        The first spawn-weight entry whose tag is present decides the base
        weight (none present means the modifier cannot appear). The first
        matching generation-weight entry scales it as a percentage.
        """
        if not self.is_eligible(candidate):
            return 0

        spawn = _first_match(candidate.spawn_weights, self.tags)
        if spawn is None:
            return 0
        generation = _first_match(candidate.generation_weights, self.tags)
        if generation is None:
            generation = NEUTRAL_GENERATION_WEIGHT
        return spawn * generation // 100
