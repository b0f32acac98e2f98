"""Catalog arena owning every modifier, base template and description template.

Items and modifier instances refer to catalog records by integer ids; stat
ids and tags are interned strings. The catalog is built once per process and
never mutated afterwards.
"""

import json
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from config.logging_config import get_logger
from src.core.error_handling import CatalogLoadError

from .models import (
    Alternative,
    BaseTemplate,
    Buff,
    ConditionRange,
    DescriptionTemplate,
    GrantedEffect,
    ModifierInstance,
    Modifier,
    Properties,
    Requirements,
    SpawnWeight,
    StatDefinition,
    StatRoll,
)
from .records import (
    BaseItemFile,
    BaseItemRecord,
    ModifierFile,
    ModifierRecord,
    StatTranslationFile,
    StatTranslationRecord,
)
from .stat_effects import StatEffect, build_stat_effect_map

logger = get_logger(__name__)

DEFAULT_MODS_FILE = "mods.min.json"
DEFAULT_BASES_FILE = "base_items.min.json"
DEFAULT_DESCRIPTIONS_FILE = "stat_translations.min.json"


class Catalog:
    """Read-only arena of catalog records."""

    def __init__(
        self,
        modifiers: Sequence[Modifier],
        bases: Sequence[BaseTemplate] = (),
        descriptions: Sequence[DescriptionTemplate] = (),
    ):
        self.modifiers = tuple(modifiers)
        self.bases = tuple(bases)
        self.descriptions = tuple(descriptions)
        self._modifier_ids: Dict[str, int] = {m.key: i for i, m in enumerate(self.modifiers)}
        self.stat_effects: Dict[str, StatEffect] = build_stat_effect_map(
            stat.id for m in self.modifiers for stat in m.stats
        )

    def modifier(self, modifier_id: int) -> Modifier:
        return self.modifiers[modifier_id]

    def modifier_id(self, key: str) -> int:
        """Look up a modifier id by its catalog key."""
        return self._modifier_ids[key]

    def base(self, base_id: int) -> BaseTemplate:
        return self.bases[base_id]

    def find_base(self, item_class: str) -> Optional[int]:
        """Id of the first base template of the given item class."""
        for base_id, base in enumerate(self.bases):
            if base.item_class == item_class:
                return base_id
        return None

    def stat_effect(self, stat_id: str) -> Optional[StatEffect]:
        return self.stat_effects.get(stat_id)

    def stat_rolls(self, instance: ModifierInstance) -> List[StatRoll]:
        """Pair each rolled value with the stat id it was rolled for."""
        definitions = self.modifier(instance.modifier_id).stats
        return [StatRoll(id=stat.id, roll=roll) for stat, roll in zip(definitions, instance.rolls)]

    @classmethod
    def from_records(
        cls,
        modifiers: Mapping[str, ModifierRecord],
        bases: Mapping[str, BaseItemRecord],
        descriptions: Iterable[StatTranslationRecord],
    ) -> "Catalog":
        """
        Build the arena from validated records.

        Raises:
            CatalogLoadError: If a base template references an unknown implicit
        """
        modifier_list = [_modifier_from_record(key, record) for key, record in modifiers.items()]
        modifier_ids = {m.key: i for i, m in enumerate(modifier_list)}

        base_list = []
        for key, record in bases.items():
            implicit_ids = []
            for implicit in record.implicits:
                if implicit not in modifier_ids:
                    raise CatalogLoadError(
                        f"Base item {key} references unknown implicit modifier {implicit}",
                        source=key,
                    )
                implicit_ids.append(modifier_ids[implicit])
            base_list.append(_base_from_record(key, record, tuple(implicit_ids)))

        description_list = [_description_from_record(record) for record in descriptions]
        return cls(modifier_list, base_list, description_list)


def _intern_all(values: Iterable[str]) -> tuple:
    return tuple(sys.intern(v) for v in values)


def _modifier_from_record(key: str, record: ModifierRecord) -> Modifier:
    return Modifier(
        key=key,
        name=record.name,
        domain=record.domain,
        generation_type=record.generation_type,
        group=sys.intern(record.group),
        required_level=record.required_level,
        spawn_weights=tuple(SpawnWeight(sys.intern(w.tag), w.weight) for w in record.spawn_weights),
        generation_weights=tuple(
            SpawnWeight(sys.intern(w.tag), w.weight) for w in record.generation_weights
        ),
        stats=tuple(StatDefinition(sys.intern(s.id), s.min, s.max) for s in record.stats),
        adds_tags=_intern_all(record.adds_tags),
        mod_type=record.type,
        # An empty buff id means the modifier grants no buff
        grants_buff=Buff(record.grants_buff.id, record.grants_buff.range) if record.grants_buff.id else None,
        grants_effects=tuple(
            GrantedEffect(e.granted_effect_id, e.level) for e in record.grants_effects
        ),
    )


def _base_from_record(key: str, record: BaseItemRecord, implicits: tuple) -> BaseTemplate:
    requirements = None
    if record.requirements is not None:
        requirements = Requirements(**record.requirements.model_dump())
    return BaseTemplate(
        key=key,
        domain=record.domain,
        item_class=record.item_class,
        name=record.name,
        tags=_intern_all(record.tags),
        properties=Properties(**record.properties.model_dump()),
        implicits=implicits,
        requirements=requirements,
        inventory_width=record.inventory_width,
        inventory_height=record.inventory_height,
    )


def _description_from_record(record: StatTranslationRecord) -> DescriptionTemplate:
    return DescriptionTemplate(
        ids=_intern_all(record.ids),
        alternatives=tuple(
            Alternative(
                conditions=tuple(ConditionRange(c.min, c.max) for c in wording.condition),
                formats=tuple(wording.format),
                string=wording.string,
                index_handlers=tuple(tuple(h) for h in wording.index_handlers),
            )
            for wording in record.english
        ),
    )


def _read_json(path: Path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Catalog file not found: {path}", source=str(path)) from e
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogLoadError(f"Failed to read catalog file {path}: {e}", source=str(path)) from e


def _validate(model, data, path: Path):
    try:
        return model.model_validate(data).root
    except PydanticValidationError as e:
        raise CatalogLoadError(
            f"Malformed records in {path}: {e.error_count()} validation error(s)",
            source=str(path),
            context={"errors": e.errors(include_url=False)[:5]},
        ) from e


def load_catalog(
    data_dir: Union[str, Path],
    mods_file: str = DEFAULT_MODS_FILE,
    bases_file: str = DEFAULT_BASES_FILE,
    descriptions_file: str = DEFAULT_DESCRIPTIONS_FILE,
) -> Catalog:
    """
    Load modifiers, base items and stat descriptions from ``data_dir``.

    Args:
        data_dir: Directory holding the catalog JSON files
        mods_file: Modifier file name
        bases_file: Base item file name
        descriptions_file: Stat description file name

    Returns:
        The loaded catalog

    Raises:
        CatalogLoadError: If any file is missing, unreadable or malformed
    """
    data_dir = Path(data_dir)
    mods_path = data_dir / mods_file
    bases_path = data_dir / bases_file
    descriptions_path = data_dir / descriptions_file

    modifiers = _validate(ModifierFile, _read_json(mods_path), mods_path)
    bases = _validate(BaseItemFile, _read_json(bases_path), bases_path)
    descriptions = _validate(StatTranslationFile, _read_json(descriptions_path), descriptions_path)

    catalog = Catalog.from_records(modifiers, bases, descriptions)
    logger.info(
        "Catalog loaded",
        data_dir=str(data_dir),
        modifiers=len(catalog.modifiers),
        bases=len(catalog.bases),
        descriptions=len(catalog.descriptions),
    )
    return catalog
