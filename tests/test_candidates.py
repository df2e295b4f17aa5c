"""
Candidate self-join, anti-monotonic pruning and the support threshold.
"""
import pytest

from apriori_miner.rule_mining.candidates import (
    filter_frequent,
    generate_candidates,
    generate_level1_candidates,
    has_frequent_subsets,
    min_support_count,
    self_join
)
from apriori_miner.rule_mining.itemset import Itemset


def _itemsets(*keys):
    return [Itemset(items=key, count=1, support=0.1) for key in keys]


class TestLevel1:

    def test_every_distinct_item_is_a_candidate(self, basket_counter):
        assert generate_level1_candidates(basket_counter) == {
            ('bread',): 4, ('eggs',): 4, ('milk',): 4
        }


class TestSelfJoin:

    def test_pairs_from_singletons(self):
        frequent = _itemsets(('a',), ('b',), ('c',))
        assert self_join(frequent, 2) == [('a', 'b'), ('a', 'c'), ('b', 'c')]

    def test_duplicate_unions_kept_once(self):
        frequent = _itemsets(('a', 'b'), ('a', 'c'), ('b', 'c'))
        assert self_join(frequent, 3) == [('a', 'b', 'c')]

    def test_union_of_wrong_size_dropped(self):
        frequent = _itemsets(('a', 'b'), ('c', 'd'))
        assert self_join(frequent, 3) == []

    def test_single_itemset_joins_nothing(self):
        assert self_join(_itemsets(('a', 'b')), 3) == []


class TestPruner:

    def test_all_subsets_frequent(self):
        frequent = {('a', 'b'), ('a', 'c'), ('b', 'c')}
        assert has_frequent_subsets(('a', 'b', 'c'), frequent) is True

    def test_missing_subset_rejects(self):
        frequent = {('a', 'b'), ('a', 'c')}
        assert has_frequent_subsets(('a', 'b', 'c'), frequent) is False

    def test_singletons_exempt(self):
        assert has_frequent_subsets(('a',), set()) is True

    def test_generate_candidates_prunes(self):
        # (b, c) is not frequent, so (a, b, c) must be pruned even though it joins
        frequent = _itemsets(('a', 'b'), ('a', 'c'), ('b', 'd'))
        assert generate_candidates(frequent, 3) == []

    def test_generate_candidates_keeps_supported(self):
        frequent = _itemsets(('a', 'b'), ('a', 'c'), ('b', 'c'), ('c', 'd'))
        assert generate_candidates(frequent, 3) == [('a', 'b', 'c')]


class TestThreshold:

    @pytest.mark.parametrize("min_support, total, expected", [
        (0.4, 5, 2),
        (0.6, 5, 3),
        (0.5, 5, 3),
        (1.0, 5, 5),
        (0.01, 5, 1),
        (0.7, 10, 7),
        (0.3, 10, 3),
        (0.5000000001, 2, 2),
        (0.30000000000000004, 10, 4),
    ])
    def test_min_support_count(self, min_support, total, expected):
        assert min_support_count(min_support, total) == expected

    def test_filter_frequent_is_inclusive(self):
        candidates = {('a',): 3, ('b',): 2, ('c',): 4}
        frequent = filter_frequent(candidates, min_count=3, total_transactions=5)
        assert [i.items for i in frequent] == [('a',), ('c',)]
        assert frequent[0].support == pytest.approx(0.6)
        assert frequent[0].count == 3
