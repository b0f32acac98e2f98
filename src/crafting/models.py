"""Data models for catalog records, generated items and their modifiers."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Domain(Enum):
    """Coarse item category a modifier may apply to."""

    ITEM = "item"
    ABYSS_JEWEL = "abyss_jewel"
    AREA = "area"
    MISC = "misc"
    FLASK = "flask"
    CRAFTED = "crafted"
    DELVE = "delve"
    ATLAS = "atlas"
    UNDEFINED = "undefined"  # Appears at least on all currency bases


class GenerationType(Enum):
    """Structural role of a modifier."""

    PREFIX = "prefix"
    SUFFIX = "suffix"
    UNIQUE = "unique"
    CORRUPTED = "corrupted"
    ENCHANTMENT = "enchantment"
    BLIGHT_TOWER = "blight_tower"
    TEMPEST = "tempest"


class Rarity(Enum):
    """Item rarity."""

    NORMAL = "Normal"
    MAGIC = "Magic"
    RARE = "Rare"
    UNIQUE = "Unique"


class QualityKind(Enum):
    """Whether item quality feeds the percentage multipliers."""

    NORMAL = "normal"
    IMBUED = "imbued"


@dataclass(frozen=True)
class SpawnWeight:
    """Tag-keyed weight entry."""

    tag: str
    weight: int


@dataclass(frozen=True)
class StatDefinition:
    """A stat a modifier rolls, with an inclusive roll range."""

    id: str
    min: int
    max: int


@dataclass(frozen=True)
class Buff:
    id: str
    range: int = 0


@dataclass(frozen=True)
class GrantedEffect:
    granted_effect_id: str
    level: int


@dataclass(frozen=True)
class Modifier:
    """Immutable modifier catalog entry."""

    key: str
    name: str
    domain: Domain
    generation_type: GenerationType
    group: str  # each group is present at most once on an item
    required_level: int
    spawn_weights: Tuple[SpawnWeight, ...] = ()
    generation_weights: Tuple[SpawnWeight, ...] = ()
    stats: Tuple[StatDefinition, ...] = ()
    adds_tags: Tuple[str, ...] = ()
    mod_type: str = ""
    grants_buff: Optional[Buff] = None
    grants_effects: Tuple[GrantedEffect, ...] = ()

    @property
    def is_affix(self) -> bool:
        return self.generation_type in (GenerationType.PREFIX, GenerationType.SUFFIX)


@dataclass(frozen=True)
class Requirements:
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    level: int = 0


@dataclass(frozen=True)
class Properties:
    """Base or resolved item properties.

    Critical strike chance is stored in hundredths of a percent and attack
    time in milliseconds, as the catalogs persist them.
    """

    quality: int = 0
    armour: int = 0
    evasion: int = 0
    energy_shield: int = 0
    block: int = 0
    attack_time: int = 0
    critical_strike_chance: int = 0
    physical_damage_min: int = 0
    physical_damage_max: int = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary representation."""
        return asdict(self)


@dataclass(frozen=True)
class BaseTemplate:
    """Base item template."""

    key: str
    domain: Domain
    item_class: str
    name: str
    tags: Tuple[str, ...] = ()
    properties: Properties = field(default_factory=Properties)
    implicits: Tuple[int, ...] = ()  # modifier ids in the owning catalog
    requirements: Optional[Requirements] = None
    inventory_width: int = 1
    inventory_height: int = 1


@dataclass(frozen=True)
class ConditionRange:
    """Optional inclusive bounds; an absent bound is unbounded."""

    min: Optional[int] = None
    max: Optional[int] = None

    def contains(self, value: int) -> bool:
        return (self.min is None or self.min <= value) and (self.max is None or value <= self.max)


@dataclass(frozen=True)
class Alternative:
    """One phrasing of a description template."""

    conditions: Tuple[ConditionRange, ...]
    formats: Tuple[str, ...]
    string: str
    index_handlers: Tuple[Tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class DescriptionTemplate:
    """Text rendering rules for one or more jointly described stats."""

    ids: Tuple[str, ...]
    alternatives: Tuple[Alternative, ...]


@dataclass(frozen=True)
class StatRoll:
    id: str
    roll: int


@dataclass(frozen=True)
class ModifierInstance:
    """A rolled modifier: the catalog id plus one roll per stat definition."""

    modifier_id: int
    rolls: Tuple[int, ...]


@dataclass
class Quality:
    amount: int = 0
    kind: QualityKind = QualityKind.NORMAL


@dataclass
class Item:
    """An item being crafted."""

    base_id: int
    name: str
    item_level: int = 1
    rarity: Rarity = Rarity.NORMAL
    quality: Quality = field(default_factory=Quality)
    explicits: List[ModifierInstance] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "base_id": self.base_id,
            "name": self.name,
            "item_level": self.item_level,
            "rarity": self.rarity.value,
            "quality": {"amount": self.quality.amount, "kind": self.quality.kind.value},
            "explicits": [
                {"modifier_id": e.modifier_id, "rolls": list(e.rolls)} for e in self.explicits
            ],
        }
