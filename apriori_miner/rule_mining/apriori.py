"""
Level-wise Apriori mining of frequent itemsets and association rules.
"""
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from apriori_miner.rule_mining.base import HybridMiner, Transactions
from apriori_miner.rule_mining.candidates import (
    filter_frequent,
    generate_candidates,
    generate_level1_candidates,
    min_support_count
)
from apriori_miner.rule_mining.itemset import AssociationRule, Itemset
from apriori_miner.rule_mining.rules import generate_rules
from apriori_miner.rule_mining.support import SupportCounter

logger = logging.getLogger(__name__)


class MiningState(Enum):
    LEVEL_1 = 'level_1'
    LEVEL_K = 'level_k'
    DONE = 'done'


@dataclass(frozen=True)
class MiningResult:
    frequent_itemsets: List[Itemset] = field(default_factory=list)
    rules: List[AssociationRule] = field(default_factory=list)
    total_transactions: int = 0
    processing_time: float = 0.0  # seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            'frequent_itemsets': [itemset.to_dict() for itemset in self.frequent_itemsets],
            'rules': [rule.to_dict() for rule in self.rules],
            'total_transactions': self.total_transactions,
            'processing_time': self.processing_time
        }


class AprioriMiner(HybridMiner):
    """
    Classic Apriori miner.

    Level 1 counts singletons in one pass; every further level self-joins
    the previous level's frequent itemsets, prunes candidates that have an
    infrequent subset, counts the rest and keeps those reaching the minimum
    count. Rules are derived from every frequent itemset of two or more items.
    """

    def __init__(
        self,
        min_support: float = 0.1,
        min_confidence: float = 0.5,
        max_length: int = None,
        n_jobs: int = 1,
        verbose: bool = False
    ):
        """
        Initialize Apriori miner.

        Args:
            min_support: Minimum support ratio in (0, 1]
            min_confidence: Minimum rule confidence in (0, 1]
            max_length: Maximum number of items in an itemset (None for unbounded)
            n_jobs: joblib workers used for support counting and rule scoring
            verbose: Show progress bars
        """
        super().__init__(min_support, min_confidence, max_length)
        self.n_jobs = n_jobs
        self.verbose = verbose

    def find_frequent_itemsets(self, counter: SupportCounter) -> List[Itemset]:
        """Run the level loop and return the frequent itemsets of every level, in level order."""
        total = counter.total_transactions
        min_count = min_support_count(self.min_support, total)

        all_frequent: List[Itemset] = []
        previous: List[Itemset] = []
        state = MiningState.LEVEL_1
        k = 1

        while state is not MiningState.DONE:
            if state is MiningState.LEVEL_1:
                frequent = filter_frequent(generate_level1_candidates(counter), min_count, total)
                logger.debug("Level 1: %d frequent of %d items (min_count=%d)",
                             len(frequent), len(counter.items), min_count)
                if not frequent:
                    state = MiningState.DONE
                    continue
                all_frequent.extend(frequent)
                previous = frequent
                k = 2
                state = MiningState.LEVEL_K
                continue

            # A single (k-1)-itemset has nothing to join with.
            if len(previous) == 1 or (self.max_length is not None and k > self.max_length):
                state = MiningState.DONE
                continue

            candidates = generate_candidates(previous, k)
            counts = counter.count_many(candidates, n_jobs=self.n_jobs, verbose=self.verbose)
            frequent = filter_frequent(counts, min_count, total)
            logger.debug("Level %d: %d candidates, %d frequent", k, len(candidates), len(frequent))

            if not frequent:
                state = MiningState.DONE
                continue
            all_frequent.extend(frequent)
            previous = frequent
            k += 1

        return all_frequent

    def run(self, data: Transactions) -> MiningResult:
        """Mine frequent itemsets and rules in one pass."""
        start_time = time.time()

        counter = SupportCounter(data)
        itemsets = self.find_frequent_itemsets(counter)
        rules = generate_rules(
            itemsets,
            counter,
            self.min_confidence,
            n_jobs=self.n_jobs,
            verbose=self.verbose
        )

        result = MiningResult(
            frequent_itemsets=itemsets,
            rules=rules,
            total_transactions=counter.total_transactions,
            processing_time=time.time() - start_time
        )
        logger.info("Apriori found %d frequent itemsets and %d rules in %d transactions (%.3fs)",
                    len(itemsets), len(rules), counter.total_transactions, result.processing_time)
        return result

    def mine_itemsets(self, data: Transactions) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine frequent itemsets.

        Args:
            data: Transactions, each a collection of item identifiers

        Returns:
            Tuple of (itemsets, stats)
        """
        start_time = time.time()

        counter = SupportCounter(data)
        itemsets = [itemset.to_dict() for itemset in self.find_frequent_itemsets(counter)]

        stats = {
            'num_itemsets': len(itemsets),
            'execution_time': time.time() - start_time,
            'average_support': sum(i['support'] for i in itemsets) / len(itemsets) if itemsets else 0.0,
            'max_length': max((len(i['items']) for i in itemsets), default=0),
            'total_transactions': counter.total_transactions,
            'algorithm': 'Apriori',
            'mode': 'itemsets'
        }

        return itemsets, stats

    def mine_rules(self, data: Transactions) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine association rules.

        Args:
            data: Transactions, each a collection of item identifiers

        Returns:
            Tuple of (rules, stats)
        """
        result = self.run(data)
        rules = [rule.to_dict() for rule in result.rules]

        stats = {
            'num_rules': len(rules),
            'num_itemsets': len(result.frequent_itemsets),
            'execution_time': result.processing_time,
            'average_support': sum(r['support'] for r in rules) / len(rules) if rules else 0.0,
            'average_confidence': sum(r['confidence'] for r in rules) / len(rules) if rules else 0.0,
            'average_lift': sum(r['lift'] for r in rules) / len(rules) if rules else 0.0,
            'total_transactions': result.total_transactions,
            'algorithm': 'Apriori',
            'mode': 'rules'
        }

        return rules, stats

    def __repr__(self):
        return (f"AprioriMiner(min_support={self.min_support}, min_confidence={self.min_confidence}, "
                f"max_length={self.max_length}, n_jobs={self.n_jobs})")
