"""Rendering of rolled modifier stats into human-readable text."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from config.logging_config import get_logger
from src.core.error_handling import BaseError, NoMatchingAlternativeError, UnmappedStatError

from .catalog import Catalog
from .models import Alternative, DescriptionTemplate, Item, ModifierInstance, StatRoll

logger = get_logger(__name__)

IGNORE_FORMAT = "ignore"
VALUE_MARKER = "#"
NO_MATCH_LINE = "ERROR: None of the description alternatives match."


def _placeholder(index: int) -> str:
    return "{" + str(index) + "}"


def select_alternative(alternatives: Sequence[Alternative], rolls: Sequence[int]) -> Optional[Alternative]:
    """First alternative whose every slot condition accepts its roll."""
    for alternative in alternatives:
        if all(condition.contains(roll) for roll, condition in zip(rolls, alternative.conditions)):
            return alternative
    return None


def render_alternative(alternative: Alternative, rolls: Sequence[int]) -> str:
    """Substitute each numbered placeholder with its formatted roll."""
    text = alternative.string
    for index, (roll, directive) in enumerate(zip(rolls, alternative.formats)):
        if directive == IGNORE_FORMAT:
            continue
        text = text.replace(_placeholder(index), directive.replace(VALUE_MARKER, str(roll)))
    return text


@dataclass
class RenderedDescription:
    """Text lines for one modifier plus any locally recovered problems."""

    lines: List[str] = field(default_factory=list)
    issues: List[BaseError] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def unmapped_stats(self) -> List[str]:
        return [i.context["stat_id"] for i in self.issues if isinstance(i, UnmappedStatError)]


class DescriptionEngine:
    """
    Stat description lookup built once from the catalog's templates.

    A template covering several stat ids renders them together; rolls for
    covered ids the modifier does not have are rendered as 0.
    """

    def __init__(self, catalog: Catalog):
        self.catalog = catalog
        self._templates: Dict[str, DescriptionTemplate] = {}
        for template in catalog.descriptions:
            for stat_id in template.ids:
                self._templates[stat_id] = template

    def template_for(self, stat_id: str) -> Optional[DescriptionTemplate]:
        return self._templates.get(stat_id)

    def render_rolls(self, stats: Sequence[StatRoll]) -> RenderedDescription:
        """Render a pool of (stat id, roll) pairs."""
        result = RenderedDescription()
        pool = list(stats)

        while pool:
            anchor = pool[-1]
            template = self.template_for(anchor.id)
            if template is None:
                logger.warning(f"Didn't find description for {anchor.id}")
                result.issues.append(UnmappedStatError(anchor.id))
                pool.pop()
                continue

            rolls = []
            for stat_id in template.ids:
                roll = 0
                for index, entry in enumerate(pool):
                    if entry.id == stat_id:
                        roll = entry.roll
                        del pool[index]
                        break
                rolls.append(roll)

            alternative = select_alternative(template.alternatives, rolls)
            if alternative is None:
                logger.warning(f"No description alternative matches {list(template.ids)} = {rolls}")
                result.issues.append(NoMatchingAlternativeError(list(template.ids), rolls))
                result.lines.append(NO_MATCH_LINE)
            else:
                result.lines.append(render_alternative(alternative, rolls))

        return result

    def render(self, instance: ModifierInstance) -> RenderedDescription:
        return self.render_rolls(self.catalog.stat_rolls(instance))

    def describe(self, instance: ModifierInstance) -> str:
        """Rendered text for one modifier, one line per description group."""
        return self.render(instance).text

    def describe_item(self, item: Item) -> str:
        """Description block for all of an item's explicits, in order."""
        blocks = [self.describe(explicit) for explicit in item.explicits]
        return "\n".join(block for block in blocks if block)
