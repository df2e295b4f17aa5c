from .rule import (
    filter_rules,
    filter_rules_by_pattern,
    filter_rules_by_consequent,
    filter_rules_by_antecedent,
    filter_itemsets,
    sort_rules
)

__all__ = [
    'filter_rules',
    'filter_rules_by_pattern',
    'filter_rules_by_consequent',
    'filter_rules_by_antecedent',
    'filter_itemsets',
    'sort_rules'
]
