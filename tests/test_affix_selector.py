"""Tests for affix count rolls and weighted draws."""

from collections import Counter
from unittest.mock import patch

import pytest

from src.core.error_handling import NoEligibleModifierError
from src.crafting.affix_scale import affix_limit
from src.crafting.affix_selector import AffixSelector
from src.crafting.catalog import Catalog
from src.crafting.models import GenerationType, Rarity
from src.crafting.sampler import Sampler
from src.crafting.validators import ItemValidator


class TestRollCount:
    """Test explicit count distributions."""

    def test_normal_gets_no_explicits(self, affix_catalog, sampler):
        selector = AffixSelector(affix_catalog, sampler)
        assert selector.roll_count(Rarity.NORMAL, "Two Hand Sword") == 0

    def test_magic_count_is_one_or_two(self, affix_catalog, sampler):
        selector = AffixSelector(affix_catalog, sampler)
        counts = Counter(selector.roll_count(Rarity.MAGIC, "Two Hand Sword") for _ in range(200))
        assert set(counts) == {1, 2}

    def test_rare_count_distribution(self, affix_catalog, sampler):
        selector = AffixSelector(affix_catalog, sampler)
        counts = Counter(selector.roll_count(Rarity.RARE, "Body Armour") for _ in range(2400))
        assert set(counts) == {4, 5, 6}
        assert counts[4] > counts[5] > counts[6]

    @pytest.mark.parametrize("item_class", ["Jewel", "AbyssJewel"])
    def test_rare_jewel_count_distribution(self, affix_catalog, sampler, item_class):
        selector = AffixSelector(affix_catalog, sampler)
        counts = Counter(selector.roll_count(Rarity.RARE, item_class) for _ in range(2000))
        assert set(counts) == {3, 4}
        assert counts[3] > counts[4]

    def test_rare_count_uses_8_3_1_weights(self, affix_catalog):
        sampler = Sampler(seed=1)
        selector = AffixSelector(affix_catalog, sampler)
        with patch.object(sampler, "weighted_index", return_value=2) as draw:
            assert selector.roll_count(Rarity.RARE, "Two Hand Sword") == 6
        draw.assert_called_once_with([8, 3, 1])

    def test_rare_jewel_count_uses_13_7_weights(self, affix_catalog):
        sampler = Sampler(seed=1)
        selector = AffixSelector(affix_catalog, sampler)
        with patch.object(sampler, "weighted_index", return_value=0) as draw:
            assert selector.roll_count(Rarity.RARE, "Jewel") == 3
        draw.assert_called_once_with([13, 7])


class TestGenerate:
    """Test repeated weighted draws."""

    def test_rolls_within_stat_ranges(self, affix_catalog, sampler, new_item):
        selector = AffixSelector(affix_catalog, sampler)
        for _ in range(50):
            item = selector.generate(new_item(), 6, Rarity.RARE)
            assert ItemValidator.validate_rolls(item, affix_catalog) == []

    def test_draw_probability_follows_weight(self, make_modifier, make_base, new_item):
        catalog = Catalog(
            [
                make_modifier("Common", spawn=(("default", 900),)),
                make_modifier("Rare", spawn=(("default", 100),)),
            ],
            [make_base()],
        )
        selector = AffixSelector(catalog, Sampler(seed=7))
        picks = Counter()
        for _ in range(1000):
            item = selector.generate(new_item(), 1, Rarity.RARE)
            picks[catalog.modifier(item.explicits[0].modifier_id).key] += 1
        assert picks["Common"] > picks["Rare"] > 0

    def test_zero_weight_candidates_never_drawn(self, make_modifier, make_base, new_item):
        catalog = Catalog(
            [
                make_modifier("Never", spawn=(("default", 0),)),
                make_modifier("Always", spawn=(("default", 10),)),
            ],
            [make_base()],
        )
        selector = AffixSelector(catalog, Sampler(seed=3))
        for _ in range(100):
            item = selector.generate(new_item(), 1, Rarity.RARE)
            assert catalog.modifier(item.explicits[0].modifier_id).key == "Always"

    def test_no_eligible_modifier_raises(self, make_modifier, make_base, new_item):
        catalog = Catalog([make_modifier("Armour", spawn=(("armour", 100),))], [make_base()])
        selector = AffixSelector(catalog, Sampler(seed=1))
        with pytest.raises(NoEligibleModifierError) as exc_info:
            selector.generate(new_item(), 1, Rarity.RARE)
        assert exc_info.value.recoverable is False
        assert exc_info.value.context["base_name"] == "Test Two Hand Sword"

    def test_exhausted_groups_raise_instead_of_skipping(self, affix_catalog, new_item):
        # Only 4 prefixes and 4 suffixes exist but limits allow 3 + 3
        selector = AffixSelector(affix_catalog, Sampler(seed=5))
        item = new_item()
        with pytest.raises(NoEligibleModifierError):
            selector.generate(item, 7, Rarity.RARE)
        assert item.explicits == []

    def test_failed_draw_keeps_existing_explicits(self, affix_catalog, make_instance, new_item):
        explicit = make_instance(affix_catalog, "Prefix0", 5)
        item = new_item(explicits=[explicit])
        selector = AffixSelector(affix_catalog, Sampler(seed=5))
        with pytest.raises(NoEligibleModifierError):
            selector.generate(item, 7, Rarity.RARE)
        assert item.explicits == [explicit]

    def test_later_draws_see_tags_added_by_earlier_draws(self, make_modifier, make_base, new_item):
        catalog = Catalog(
            [
                make_modifier("Opener", adds_tags=("opened",), spawn=(("default", 100),)),
                make_modifier(
                    "Follower", generation_type=GenerationType.SUFFIX, spawn=(("opened", 100),),
                ),
            ],
            [make_base()],
        )
        selector = AffixSelector(catalog, Sampler(seed=11))
        item = selector.generate(new_item(), 2, Rarity.RARE)
        keys = [catalog.modifier(e.modifier_id).key for e in item.explicits]
        assert keys == ["Opener", "Follower"]

    def test_same_seed_same_item(self, sample_catalog, new_item):
        base_id = sample_catalog.find_base("Two Hand Sword")
        first = AffixSelector(sample_catalog, Sampler(seed=99)).apply_alchemy(new_item(base_id))
        second = AffixSelector(sample_catalog, Sampler(seed=99)).apply_alchemy(new_item(base_id))
        assert first.explicits == second.explicits

    def test_candidate_subset(self, affix_catalog, sampler, new_item):
        suffix_ids = [
            i for i, m in enumerate(affix_catalog.modifiers)
            if m.generation_type == GenerationType.SUFFIX
        ]
        selector = AffixSelector(affix_catalog, sampler, candidates=suffix_ids)
        item = selector.generate(new_item(), 3, Rarity.RARE)
        assert all(e.modifier_id in suffix_ids for e in item.explicits)


class TestTransforms:
    """Test the Normal -> Rare and Normal -> Magic transforms."""

    @pytest.mark.parametrize("item_class", ["Two Hand Sword", "Body Armour", "Shield"])
    def test_alchemy_invariants(self, sample_catalog, sampler, new_item, item_class):
        selector = AffixSelector(sample_catalog, sampler)
        base_id = sample_catalog.find_base(item_class)
        counts = Counter()

        for _ in range(300):
            item = selector.apply_alchemy(new_item(base_id, item_level=80))
            assert item.rarity == Rarity.RARE
            assert 4 <= len(item.explicits) <= 6
            assert ItemValidator.validate_item(item, sample_catalog) == []
            counts[len(item.explicits)] += 1

        assert counts[4] > counts[5] > counts[6]

    @pytest.mark.parametrize("base_id,item_class", [(1, "Jewel"), (2, "AbyssJewel")])
    def test_alchemy_on_jewels(self, affix_catalog, sampler, new_item, base_id, item_class):
        selector = AffixSelector(affix_catalog, sampler)
        for _ in range(200):
            item = selector.apply_alchemy(new_item(base_id))
            assert len(item.explicits) in (3, 4)
            prefixes = sum(
                1 for e in item.explicits
                if affix_catalog.modifier(e.modifier_id).generation_type == GenerationType.PREFIX
            )
            assert prefixes <= affix_limit(Rarity.RARE, item_class) == 2
            assert len(item.explicits) - prefixes <= 2

    def test_transmutation_invariants(self, affix_catalog, sampler, new_item):
        selector = AffixSelector(affix_catalog, sampler)
        counts = Counter()
        for _ in range(200):
            item = selector.apply_transmutation(new_item())
            assert item.rarity == Rarity.MAGIC
            assert ItemValidator.validate_item(item, affix_catalog) == []
            counts[len(item.explicits)] += 1
        assert set(counts) == {1, 2}

    @pytest.mark.parametrize("rarity", [Rarity.MAGIC, Rarity.RARE, Rarity.UNIQUE])
    def test_alchemy_is_noop_unless_normal(self, affix_catalog, sampler, new_item, make_instance, rarity):
        explicit = make_instance(affix_catalog, "Prefix0", 5)
        item = new_item(rarity=rarity, explicits=[explicit])

        result = AffixSelector(affix_catalog, sampler).apply_alchemy(item)

        assert result is item
        assert item.rarity == rarity
        assert item.explicits == [explicit]

    def test_failed_alchemy_leaves_rarity(self, make_modifier, make_base, new_item):
        catalog = Catalog([make_modifier("Armour", spawn=(("armour", 100),))], [make_base()])
        item = new_item()
        with pytest.raises(NoEligibleModifierError):
            AffixSelector(catalog, Sampler(seed=1)).apply_alchemy(item)
        assert item.rarity == Rarity.NORMAL

    def test_alchemy_failing_midway_leaves_item_untouched(self, make_modifier, make_base, new_item):
        # One prefix and one suffix cannot fill a Rare's four or more explicits
        catalog = Catalog(
            [
                make_modifier("OnlyPrefix", stats=(("a", 1, 5),)),
                make_modifier("OnlySuffix", generation_type=GenerationType.SUFFIX, stats=(("b", 1, 5),)),
            ],
            [make_base()],
        )
        item = new_item()
        with pytest.raises(NoEligibleModifierError):
            AffixSelector(catalog, Sampler(seed=1)).apply_alchemy(item)

        assert item.rarity == Rarity.NORMAL
        assert item.explicits == []
        assert ItemValidator.validate_item(item, catalog) == []
