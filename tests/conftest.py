"""Shared fixtures for the crafting test suite."""

import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

import pytest

# Make the repository root importable (``src`` and ``config`` packages)
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.crafting.catalog import Catalog, load_catalog
from src.crafting.models import (
    Alternative,
    BaseTemplate,
    ConditionRange,
    DescriptionTemplate,
    Domain,
    GenerationType,
    Item,
    ModifierInstance,
    Modifier,
    Properties,
    SpawnWeight,
    StatDefinition,
)
from src.crafting.sampler import Sampler

DATA_DIR = Path(__file__).parent.parent / "data"


def build_modifier(
    key: str,
    group: Optional[str] = None,
    generation_type: GenerationType = GenerationType.PREFIX,
    domain: Domain = Domain.ITEM,
    required_level: int = 1,
    spawn: Sequence[Tuple[str, int]] = (("default", 100),),
    generation: Sequence[Tuple[str, int]] = (),
    stats: Sequence[Tuple[str, int, int]] = (),
    adds_tags: Sequence[str] = (),
) -> Modifier:
    return Modifier(
        key=key,
        name=key,
        domain=domain,
        generation_type=generation_type,
        group=group or key,
        required_level=required_level,
        spawn_weights=tuple(SpawnWeight(tag, weight) for tag, weight in spawn),
        generation_weights=tuple(SpawnWeight(tag, weight) for tag, weight in generation),
        stats=tuple(StatDefinition(stat_id, lo, hi) for stat_id, lo, hi in stats),
        adds_tags=tuple(adds_tags),
    )


def build_base(
    item_class: str = "Two Hand Sword",
    domain: Domain = Domain.ITEM,
    tags: Sequence[str] = ("weapon", "default"),
    **properties: int,
) -> BaseTemplate:
    return BaseTemplate(
        key=f"Metadata/Test/{item_class}",
        domain=domain,
        item_class=item_class,
        name=f"Test {item_class}",
        tags=tuple(tags),
        properties=Properties(**properties),
    )


def build_template(ids: Sequence[str], *alternatives: Tuple[Sequence[Tuple[Optional[int], Optional[int]]], Sequence[str], str]) -> DescriptionTemplate:
    return DescriptionTemplate(
        ids=tuple(ids),
        alternatives=tuple(
            Alternative(
                conditions=tuple(ConditionRange(lo, hi) for lo, hi in conditions),
                formats=tuple(formats),
                string=string,
            )
            for conditions, formats, string in alternatives
        ),
    )


def affix_pool(prefixes: int, suffixes: int, tag: str = "default") -> list:
    """Independent prefixes and suffixes with one ranged stat each."""
    mods = []
    for i in range(prefixes):
        mods.append(build_modifier(
            f"Prefix{i}", spawn=((tag, 100),), stats=((f"prefix_stat_{i}", 1, 10),),
        ))
    for i in range(suffixes):
        mods.append(build_modifier(
            f"Suffix{i}", generation_type=GenerationType.SUFFIX, spawn=((tag, 100),),
            stats=((f"suffix_stat_{i}", -5, 5),),
        ))
    return mods


@pytest.fixture
def make_modifier():
    return build_modifier


@pytest.fixture
def make_base():
    return build_base


@pytest.fixture
def make_template():
    return build_template


@pytest.fixture
def sampler():
    """Seeded sampler so statistical tests are reproducible."""
    return Sampler(seed=1234)


@pytest.fixture
def affix_catalog():
    """Weapon, jewel and abyss jewel bases sharing a pool of 4 prefixes and 4 suffixes."""
    bases = [
        build_base("Two Hand Sword"),
        build_base("Jewel", tags=("jewel", "default")),
        build_base("AbyssJewel", tags=("abyss_jewel", "default")),
    ]
    return Catalog(affix_pool(4, 4), bases)


@pytest.fixture
def sample_catalog():
    """Catalog loaded from the bundled sample data files."""
    return load_catalog(DATA_DIR)


@pytest.fixture
def make_instance():
    def _make(catalog: Catalog, key: str, *rolls: int) -> ModifierInstance:
        return ModifierInstance(modifier_id=catalog.modifier_id(key), rolls=tuple(rolls))

    return _make


@pytest.fixture
def new_item():
    def _make(base_id: int = 0, **kwargs) -> Item:
        kwargs.setdefault("name", "Test Item")
        return Item(base_id=base_id, **kwargs)

    return _make
