"""Item crafting: affix generation, property resolution and stat descriptions."""

from .affix_scale import AffixScale, affix_limit
from .affix_selector import AffixSelector
from .catalog import Catalog, load_catalog
from .describer import DescriptionEngine, RenderedDescription
from .display import render_item
from .models import (
    BaseTemplate,
    DescriptionTemplate,
    Domain,
    GenerationType,
    Item,
    Modifier,
    ModifierInstance,
    Properties,
    Quality,
    QualityKind,
    Rarity,
)
from .properties import PropertyAggregator
from .sampler import Sampler
from .validators import ItemValidator

__all__ = [
    "AffixScale",
    "AffixSelector",
    "BaseTemplate",
    "Catalog",
    "DescriptionEngine",
    "DescriptionTemplate",
    "Domain",
    "GenerationType",
    "Item",
    "ItemValidator",
    "Modifier",
    "ModifierInstance",
    "Properties",
    "PropertyAggregator",
    "Quality",
    "QualityKind",
    "Rarity",
    "RenderedDescription",
    "Sampler",
    "affix_limit",
    "load_catalog",
    "render_item",
]
