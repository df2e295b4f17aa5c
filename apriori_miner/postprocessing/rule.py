from typing import Any, Dict, List, Tuple

RULE_METRICS = ('support', 'confidence', 'lift')


def filter_rules(rules, criterion: str, threshold: float):
    """
    Filters rules based on a criterion >= threshold.

    Args:
        rules: List of rule dictionaries
        criterion: The rule metric to filter on ('support', 'confidence', 'lift')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        List of rules meeting the criterion
    """
    if criterion not in RULE_METRICS:
        raise ValueError(f"Criterion must be one of {list(RULE_METRICS)}, got '{criterion}'")

    return [rule for rule in rules if rule.get(criterion, float("-inf")) >= threshold]


def filter_rules_by_pattern(
    rules,
    antecedent_contains: list = None,
    consequent_contains: list = None,
    antecedent_excludes: list = None,
    consequent_excludes: list = None,
    match_any: bool = False
):
    """
    Filter rules by antecedent/consequent patterns.

    Patterns are matched case-insensitively as substrings of the items.

    Args:
        rules: List of rule dictionaries
        antecedent_contains: Patterns that must appear in the antecedent
        consequent_contains: Patterns that must appear in the consequent
        antecedent_excludes: Patterns that must NOT appear in the antecedent
        consequent_excludes: Patterns that must NOT appear in the consequent
        match_any: If True, match if ANY pattern matches. If False, ALL must match.

    Returns:
        List of filtered rules
    """
    def normalize_items(val):
        if val is None:
            return set()
        if isinstance(val, str):
            return {val.lower()}
        return {str(item).lower() for item in val}

    def matches_patterns(items, patterns, match_any_pattern):
        if not patterns:
            return True
        items_normalized = normalize_items(items)
        check = any if match_any_pattern else all
        return check(
            any(p.lower() in item for item in items_normalized)
            for p in patterns
        )

    def excludes_patterns(items, patterns):
        if not patterns:
            return True
        items_normalized = normalize_items(items)
        return not any(
            any(p.lower() in item for item in items_normalized)
            for p in patterns
        )

    filtered = []
    for rule in rules:
        ant = rule.get('antecedent')
        cons = rule.get('consequent')

        if (matches_patterns(ant, antecedent_contains, match_any)
                and matches_patterns(cons, consequent_contains, match_any)
                and excludes_patterns(ant, antecedent_excludes)
                and excludes_patterns(cons, consequent_excludes)):
            filtered.append(rule)

    return filtered


def filter_rules_by_consequent(rules, targets: list, match_any: bool = True):
    """Keep only rules whose consequent matches the target patterns."""
    return filter_rules_by_pattern(rules, consequent_contains=targets, match_any=match_any)


def filter_rules_by_antecedent(rules, patterns: list, match_any: bool = True):
    """Keep only rules whose antecedent matches the patterns."""
    return filter_rules_by_pattern(rules, antecedent_contains=patterns, match_any=match_any)


def sort_rules(rules: List[Dict[str, Any]], by: str = 'confidence', descending: bool = True):
    """Sort rules by a metric; ties keep their current relative order."""
    if by not in RULE_METRICS:
        raise ValueError(f"Sort key must be one of {list(RULE_METRICS)}, got '{by}'")
    return sorted(rules, key=lambda rule: rule[by], reverse=descending)


def filter_itemsets(
    itemsets,
    criterion: str = 'support',
    threshold: float = 0.0,
    min_size: int = 1
) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Filters frequent itemsets based on a criterion >= threshold.

    Args:
        itemsets: List of itemset dictionaries (each with 'items', 'support' and 'count' keys)
        criterion: The metric to filter on ('support' or 'count')
        threshold: Minimum value for the criterion (inclusive)
        min_size: Minimum number of items

    Returns:
        Tuple of (filtered_itemsets, stats)
    """
    filtered_itemset_list = [
        itemset for itemset in itemsets
        if itemset.get(criterion, float("-inf")) >= threshold and len(itemset['items']) >= min_size
    ]

    count = len(filtered_itemset_list)
    if count == 0:
        return filtered_itemset_list, {"num_itemsets": 0, "average_support": 0.0}

    avg_support = sum(item.get("support", 0) for item in filtered_itemset_list) / count

    stats = {
        "num_itemsets": count,
        "average_support": round(avg_support, 3),
    }

    return filtered_itemset_list, stats
