"""Pydantic schemas for the persisted catalog files.

These mirror the JSON layout on disk and are converted into the immutable
models in :mod:`src.crafting.models` by the catalog loader.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel

from .models import Domain, GenerationType


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class SpawnWeightRecord(_Record):
    tag: str
    weight: int = Field(ge=0)


class StatRecord(_Record):
    id: str
    min: int
    max: int


class BuffRecord(_Record):
    id: str = ""
    range: int = 0


class GrantedEffectRecord(_Record):
    granted_effect_id: str
    level: int


class ModifierRecord(_Record):
    """One entry of ``mods.min.json``."""

    name: str = ""
    domain: Domain
    generation_type: GenerationType
    group: str
    required_level: int = Field(default=0, ge=0)
    spawn_weights: List[SpawnWeightRecord] = Field(default_factory=list)
    generation_weights: List[SpawnWeightRecord] = Field(default_factory=list)
    stats: List[StatRecord] = Field(default_factory=list)
    adds_tags: List[str] = Field(default_factory=list)
    grants_buff: BuffRecord = Field(default_factory=BuffRecord)
    grants_effects: List[GrantedEffectRecord] = Field(default_factory=list)
    type: str = ""


class PropertiesRecord(_Record):
    quality: int = 0
    armour: int = 0
    evasion: int = 0
    energy_shield: int = 0
    block: int = 0
    attack_time: int = 0
    critical_strike_chance: int = 0
    physical_damage_min: int = 0
    physical_damage_max: int = 0


class RequirementsRecord(_Record):
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    level: int = 0


class BaseItemRecord(_Record):
    """One entry of ``base_items.min.json``."""

    domain: Domain
    item_class: str
    tags: List[str] = Field(default_factory=list)
    name: str
    properties: PropertiesRecord = Field(default_factory=PropertiesRecord)
    implicits: List[str] = Field(default_factory=list)
    requirements: Optional[RequirementsRecord] = None
    inventory_width: int = 1
    inventory_height: int = 1


class ConditionRecord(_Record):
    min: Optional[int] = None
    max: Optional[int] = None


class WordingRecord(_Record):
    condition: List[ConditionRecord]
    format: List[str]
    index_handlers: List[List[str]] = Field(default_factory=list)
    string: str


class StatTranslationRecord(_Record):
    """One entry of ``stat_translations.min.json``."""

    ids: List[str]
    english: List[WordingRecord] = Field(alias="English")


class ModifierFile(RootModel[Dict[str, ModifierRecord]]):
    pass


class BaseItemFile(RootModel[Dict[str, BaseItemRecord]]):
    pass


class StatTranslationFile(RootModel[List[StatTranslationRecord]]):
    pass
