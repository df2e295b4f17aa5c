"""
Level-wise Apriori mining end to end.

- Milk/bread/eggs scenario with exact supports and rules
- Threshold exactness, empty results, early termination
- Properties: anti-monotonicity, rule validity, determinism
- Cross-check of frequent itemsets against mlxtend's apriori
"""
from itertools import combinations
from unittest.mock import patch

import pandas as pd
import pytest
from mlxtend.frequent_patterns import apriori
from mlxtend.preprocessing import TransactionEncoder

from apriori_miner.exceptions import InsufficientDataError, InvalidConfigurationError
from apriori_miner.rule_mining.apriori import AprioriMiner, MiningResult
from apriori_miner.rule_mining.support import SupportCounter


def _supports(result):
    return {itemset.items: itemset.support for itemset in result.frequent_itemsets}


class TestBasketScenario:

    def test_frequent_itemsets(self, basket_result):
        supports = _supports(basket_result)
        assert supports == {
            ('bread',): pytest.approx(0.8),
            ('eggs',): pytest.approx(0.8),
            ('milk',): pytest.approx(0.8),
            ('bread', 'milk'): pytest.approx(0.6),
            ('eggs', 'milk'): pytest.approx(0.6),
            ('bread', 'eggs'): pytest.approx(0.6),
            ('bread', 'eggs', 'milk'): pytest.approx(0.4),
        }

    def test_counts_and_level_order(self, basket_result):
        sizes = [len(itemset) for itemset in basket_result.frequent_itemsets]
        assert sizes == sorted(sizes)
        counts = {itemset.items: itemset.count for itemset in basket_result.frequent_itemsets}
        assert counts[('bread', 'eggs', 'milk')] == 2
        assert counts[('milk',)] == 4

    def test_total_transactions(self, basket_result):
        assert basket_result.total_transactions == 5
        assert basket_result.processing_time >= 0

    def test_triple_rule_retained(self, basket_result):
        rule = next(r for r in basket_result.rules
                    if r.antecedent == ('bread', 'milk') and r.consequent == ('eggs',))
        assert rule.confidence == pytest.approx(0.4 / 0.6)
        assert rule.support == pytest.approx(0.4)
        assert rule.lift == pytest.approx((0.4 / 0.6) / 0.8)

    def test_low_confidence_rules_absent(self, basket_result):
        # {milk} -> {bread, eggs} has confidence 0.5
        assert all(r.confidence >= 0.6 for r in basket_result.rules)
        assert not any(r.antecedent == ('milk',) and r.consequent == ('bread', 'eggs')
                       for r in basket_result.rules)

    def test_rule_ranking(self, basket_result):
        assert [(r.antecedent, r.consequent) for r in basket_result.rules] == [
            (('bread',), ('eggs',)),
            (('bread',), ('milk',)),
            (('eggs',), ('bread',)),
            (('eggs',), ('milk',)),
            (('milk',), ('bread',)),
            (('milk',), ('eggs',)),
            (('bread', 'eggs'), ('milk',)),
            (('bread', 'milk'), ('eggs',)),
            (('eggs', 'milk'), ('bread',)),
        ]

    def test_to_dict(self, basket_result):
        data = basket_result.to_dict()
        assert set(data) == {'frequent_itemsets', 'rules', 'total_transactions', 'processing_time'}
        assert data['frequent_itemsets'][0] == {'items': ['bread'], 'support': 0.8, 'count': 4}
        assert data['rules'][0]['antecedent'] == ['bread']


class TestThresholds:

    def test_support_equal_to_minimum_is_included(self, basket_transactions):
        result = AprioriMiner(min_support=0.6, min_confidence=0.6).run(basket_transactions)
        supports = _supports(result)
        assert ('bread', 'milk') in supports
        assert ('bread', 'eggs', 'milk') not in supports

    def test_one_below_min_count_is_excluded(self):
        # min_count = ceil(0.5 * 4) = 2; 'b' appears once
        result = AprioriMiner(min_support=0.5, min_confidence=0.5).run(
            [['a', 'b'], ['a'], ['a', 'c'], ['c']]
        )
        assert set(_supports(result)) == {('a',), ('c',)}

    def test_threshold_just_above_half_needs_every_transaction(self):
        result = AprioriMiner(min_support=0.5000000001, min_confidence=0.5).run([['a'], ['b']])
        assert result.frequent_itemsets == []
        assert result.rules == []

    def test_no_frequent_items(self):
        result = AprioriMiner(min_support=0.9, min_confidence=0.5).run(
            [['a'], ['b'], ['c'], ['d']]
        )
        assert result.frequent_itemsets == []
        assert result.rules == []
        assert result.total_transactions == 4

    def test_max_length_caps_levels(self, basket_transactions):
        result = AprioriMiner(min_support=0.4, min_confidence=0.6, max_length=2).run(basket_transactions)
        assert max(len(itemset) for itemset in result.frequent_itemsets) == 2
        assert all(len(r.antecedent) + len(r.consequent) == 2 for r in result.rules)


class TestEarlyTermination:

    def test_single_frequent_item_stops_before_level_two(self):
        with patch.object(SupportCounter, 'count_many') as count_many:
            result = AprioriMiner(min_support=0.6, min_confidence=0.5).run(
                [['a', 'b'], ['a'], ['a', 'c']]
            )
        count_many.assert_not_called()
        assert _supports(result) == {('a',): pytest.approx(1.0)}

    def test_single_frequent_pair_stops_before_level_three(self):
        transactions = [['a', 'b', 'c'], ['a', 'b'], ['a', 'b'], ['c']]
        miner = AprioriMiner(min_support=0.75, min_confidence=0.5)
        with patch.object(SupportCounter, 'count_many', autospec=True,
                          side_effect=lambda self, candidates, **kw: {c: self.count(c) for c in candidates}) as count_many:
            result = miner.run(transactions)
        assert count_many.call_count == 1
        assert set(_supports(result)) == {('a',), ('b',), ('a', 'b')}


class TestProperties:

    def test_anti_monotonicity(self, grocery_transactions):
        result = AprioriMiner(min_support=0.15, min_confidence=0.3).run(grocery_transactions)
        supports = _supports(result)
        for items, support in supports.items():
            for size in range(1, len(items)):
                for subset in combinations(items, size):
                    assert subset in supports
                    assert supports[subset] >= support

    def test_rule_validity(self, grocery_transactions):
        result = AprioriMiner(min_support=0.15, min_confidence=0.6).run(grocery_transactions)
        frequent = set(_supports(result))
        assert result.rules
        for rule in result.rules:
            assert rule.antecedent and rule.consequent
            assert not set(rule.antecedent) & set(rule.consequent)
            assert rule.items in frequent
            assert rule.confidence >= 0.6
            assert rule.lift >= 0
            assert list(rule.antecedent) == sorted(rule.antecedent)
            assert list(rule.consequent) == sorted(rule.consequent)
        confidences = [r.confidence for r in result.rules]
        assert confidences == sorted(confidences, reverse=True)

    def test_deterministic(self, grocery_transactions):
        miner = AprioriMiner(min_support=0.15, min_confidence=0.5)
        first = miner.run(grocery_transactions)
        second = miner.run(list(reversed(grocery_transactions)))
        assert sorted(first.frequent_itemsets, key=lambda i: i.items) == \
            sorted(second.frequent_itemsets, key=lambda i: i.items)
        assert first.rules == second.rules

    @pytest.mark.parametrize("min_support", [0.15, 0.25, 0.4])
    def test_matches_mlxtend(self, grocery_transactions, min_support):
        te = TransactionEncoder()
        encoded = pd.DataFrame(te.fit(grocery_transactions).transform(grocery_transactions),
                               columns=te.columns_)
        expected = apriori(encoded, min_support=min_support, use_colnames=True)
        expected = {
            tuple(sorted(row['itemsets'])): row['support'] for _, row in expected.iterrows()
        }

        result = AprioriMiner(min_support=min_support, min_confidence=0.5).run(grocery_transactions)
        actual = _supports(result)
        assert set(actual) == set(expected)
        for items, support in expected.items():
            assert actual[items] == pytest.approx(support)


class TestMinerInterface:

    def test_mine_itemsets(self, basket_transactions):
        itemsets, stats = AprioriMiner(min_support=0.4).mine_itemsets(basket_transactions)
        assert len(itemsets) == 7
        assert stats['num_itemsets'] == 7
        assert stats['max_length'] == 3
        assert stats['algorithm'] == 'Apriori'
        assert stats['mode'] == 'itemsets'

    def test_mine_rules(self, basket_transactions):
        rules, stats = AprioriMiner(min_support=0.4, min_confidence=0.6).mine_rules(basket_transactions)
        assert len(rules) == 9
        assert stats['num_rules'] == 9
        assert stats['average_confidence'] == pytest.approx((6 * 0.75 + 3 * (2 / 3)) / 9)
        assert rules[0] == {
            'antecedent': ['bread'], 'consequent': ['eggs'],
            'support': pytest.approx(0.6), 'confidence': pytest.approx(0.75),
            'lift': pytest.approx(0.9375)
        }

    def test_empty_corpus(self):
        with pytest.raises(InsufficientDataError):
            AprioriMiner(min_support=0.5).run([])

    @pytest.mark.parametrize("kwargs", [
        {'min_support': 0},
        {'min_support': 1.5},
        {'min_support': -0.2},
        {'min_confidence': 0},
        {'min_confidence': 1.01},
        {'min_support': '0.5'},
        {'max_length': 0},
    ])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(InvalidConfigurationError):
            AprioriMiner(**kwargs)

    def test_unknown_keyword_is_rejected(self):
        with pytest.raises(TypeError):
            AprioriMiner(min_suport=0.9)

    def test_repr(self):
        assert repr(AprioriMiner(min_support=0.2, min_confidence=0.7)).startswith("AprioriMiner(min_support=0.2")

    def test_result_is_value_object(self, basket_result):
        assert isinstance(basket_result, MiningResult)
        with pytest.raises(Exception):
            basket_result.total_transactions = 10
