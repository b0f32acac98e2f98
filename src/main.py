"""Main entry point for the item crafting simulator."""

import sys
from typing import List, Optional

from config.logging_config import get_logger, setup_logging
from config.settings import Settings, settings
from src.core.error_handling import CatalogLoadError, ErrorAggregator, NoEligibleModifierError
from src.crafting import (
    AffixSelector,
    Catalog,
    DescriptionEngine,
    Item,
    PropertyAggregator,
    Quality,
    QualityKind,
    Sampler,
    load_catalog,
    render_item,
)

logger = get_logger(__name__)


def generate_batch(
    catalog: Catalog,
    base_id: int,
    config: Settings,
    sampler: Sampler,
    errors: ErrorAggregator,
) -> List[Optional[Item]]:
    """
    Generate ``config.batch_size`` Rare items from one base.

    An item whose generation fails is recorded in ``errors`` and left as
    ``None``; the rest of the batch continues.
    """
    selector = AffixSelector(catalog, sampler)
    items: List[Optional[Item]] = []

    for index in range(config.batch_size):
        item = Item(
            base_id=base_id,
            name=config.item_name,
            item_level=config.item_level,
            quality=Quality(config.quality_amount, QualityKind(config.quality_kind)),
        )
        try:
            selector.apply_alchemy(item)
        except NoEligibleModifierError as e:
            logger.error(f"Item {index + 1} generation failed: {e.message}", context=e.context)
            errors.add_error(e)
            items.append(None)
            continue
        items.append(item)

    return items


def main(config: Optional[Settings] = None) -> int:
    """Load the catalogs and print a batch of generated items."""
    config = config or settings
    setup_logging(level=config.log_level, log_file=config.log_file)

    logger.info("Loading item database...")
    try:
        catalog = load_catalog(
            config.data_dir,
            mods_file=config.mods_file,
            bases_file=config.bases_file,
            descriptions_file=config.descriptions_file,
        )
    except CatalogLoadError as e:
        logger.critical(f"Catalog load failed: {e.message}", context=e.context)
        return 1

    base_id = catalog.find_base(config.item_class)
    if base_id is None:
        logger.critical(f"No base item of class {config.item_class!r} in catalog")
        return 1

    engine = DescriptionEngine(catalog)
    aggregator = PropertyAggregator(catalog)
    logger.info("Done!")

    errors = ErrorAggregator()
    items = generate_batch(catalog, base_id, config, Sampler(config.seed), errors)

    for index, item in enumerate(items, start=1):
        if item is None:
            print(f"GENERATION FAILED: item {index}", file=sys.stderr)
            continue
        logger.debug(
            f"Item {index} generated",
            item=item.to_dict(),
            properties=aggregator.resolve(item).to_dict(),
        )
        print(render_item(item, catalog, engine, aggregator))
        print()

    stats = errors.get_error_stats()
    if stats["total_errors"]:
        logger.warning(
            f"{stats['total_errors']} of {config.batch_size} items failed to generate",
            **stats,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
