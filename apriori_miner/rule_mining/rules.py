"""
Association rule generation from frequent itemsets.
"""
import logging
from itertools import combinations
from typing import Iterator, List

from joblib import Parallel, delayed
from tqdm.auto import tqdm

from apriori_miner.exceptions import MiningInvariantError
from apriori_miner.rule_mining.itemset import AssociationRule, Itemset, ItemsetKey
from apriori_miner.rule_mining.support import SupportCounter

logger = logging.getLogger(__name__)


def proper_subsets(items: ItemsetKey) -> Iterator[ItemsetKey]:
    """All 2^n - 2 non-empty proper subsets of ``items``, smallest first."""
    for size in range(1, len(items)):
        yield from combinations(items, size)


def rules_for_itemset(
    itemset: Itemset,
    counter: SupportCounter,
    min_confidence: float
) -> List[AssociationRule]:
    """
    Derive every rule antecedent -> consequent from a single frequent itemset.

    Antecedent and consequent supports are recounted from the corpus: they
    need not appear in the frequent-itemset table.
    """
    rules = []
    for antecedent in proper_subsets(itemset.items):
        consequent = tuple(item for item in itemset.items if item not in antecedent)

        antecedent_support = counter.ratio(antecedent)
        if antecedent_support == 0:
            raise MiningInvariantError(
                f"Antecedent {antecedent} of frequent itemset {itemset.items} has zero support"
            )
        confidence = itemset.support / antecedent_support
        if confidence < min_confidence:
            continue

        consequent_support = counter.ratio(consequent)
        if consequent_support == 0:
            raise MiningInvariantError(
                f"Consequent {consequent} of frequent itemset {itemset.items} has zero support"
            )

        rules.append(AssociationRule(
            antecedent=antecedent,
            consequent=consequent,
            support=itemset.support,
            confidence=confidence,
            lift=confidence / consequent_support
        ))
    return rules


def rank_rules(rules: List[AssociationRule]) -> List[AssociationRule]:
    """
    Order rules by confidence (desc), breaking ties by lift (desc), then
    antecedent and consequent (lexicographic asc).
    """
    return sorted(
        rules,
        key=lambda r: (-r.confidence, -r.lift, r.antecedent, r.consequent)
    )


def generate_rules(
    itemsets: List[Itemset],
    counter: SupportCounter,
    min_confidence: float,
    n_jobs: int = 1,
    verbose: bool = False
) -> List[AssociationRule]:
    """
    Generate and rank association rules.

    Args:
        itemsets: Frequent itemsets from all levels
        counter: Support counter over the same corpus
        min_confidence: Minimum confidence (inclusive)
        n_jobs: Number of joblib workers (threads) scoring itemsets
        verbose: Show a progress bar

    Returns:
        Rules sorted by confidence descending
    """
    multi_itemsets = [itemset for itemset in itemsets if len(itemset) >= 2]

    if verbose:
        itemsets_iter = tqdm(multi_itemsets, desc="Generating rules", unit="itemset")
    else:
        itemsets_iter = multi_itemsets

    per_itemset = Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(rules_for_itemset)(itemset, counter, min_confidence) for itemset in itemsets_iter
    )
    rules = [rule for itemset_rules in per_itemset for rule in itemset_rules]

    logger.debug("Generated %d rules from %d itemsets of size >= 2", len(rules), len(multi_itemsets))
    return rank_rules(rules)
