"""
Candidate generation and anti-monotonic pruning for the Apriori levels.
"""
import math
from fractions import Fraction
from typing import Collection, Dict, List, Set

from apriori_miner.rule_mining.itemset import Itemset, ItemsetKey, canonical_key
from apriori_miner.rule_mining.support import SupportCounter


def generate_level1_candidates(counter: SupportCounter) -> Dict[ItemsetKey, int]:
    """Singleton candidates for every distinct item, with their raw occurrence counts."""
    return counter.item_counts()


def self_join(frequent: List[Itemset], k: int) -> List[ItemsetKey]:
    """
    Fk-1 x Fk-1 self-join.

    Every unordered pair of distinct (k-1)-itemsets whose union has exactly
    k items yields that union. Unions reached from several pairs are kept
    once, in first-seen order.
    """
    joined = {}
    for i in range(len(frequent)):
        for j in range(i + 1, len(frequent)):
            union = canonical_key(frequent[i].items + frequent[j].items)
            if len(union) == k:
                joined.setdefault(union, None)
    return list(joined)


def has_frequent_subsets(candidate: ItemsetKey, frequent_keys: Collection[ItemsetKey]) -> bool:
    """
    Check that every (k-1)-subset of a k-candidate is frequent.

    Support can only shrink as items are added, so a candidate with an
    infrequent subset can never be frequent itself.
    """
    if len(candidate) <= 1:
        return True

    for i in range(len(candidate)):
        subset = candidate[:i] + candidate[i + 1:]
        if subset not in frequent_keys:
            return False
    return True


def generate_candidates(frequent: List[Itemset], k: int) -> List[ItemsetKey]:
    """Join the (k-1)-level frequent itemsets and prune candidates with an infrequent subset."""
    frequent_keys: Set[ItemsetKey] = {itemset.items for itemset in frequent}
    return [
        candidate for candidate in self_join(frequent, k)
        if has_frequent_subsets(candidate, frequent_keys)
    ]


def min_support_count(min_support: float, total_transactions: int) -> int:
    """
    Smallest count that satisfies ``min_support``.

    The threshold is taken as the exact decimal it was written as, so that
    a ratio equal to ``min_support`` (e.g. 3 of 5 at 0.6) is kept and one
    just below it is not.
    """
    return math.ceil(Fraction(str(min_support)) * total_transactions)


def filter_frequent(
    candidates: Dict[ItemsetKey, int],
    min_count: int,
    total_transactions: int
) -> List[Itemset]:
    """Keep candidates whose count reaches ``min_count``."""
    return [
        Itemset(items=key, count=count, support=count / total_transactions)
        for key, count in candidates.items()
        if count >= min_count
    ]
