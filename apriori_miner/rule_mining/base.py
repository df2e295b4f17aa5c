"""
Base interfaces for rule mining algorithms.
"""
import numbers
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from apriori_miner.exceptions import InvalidConfigurationError

Transactions = Sequence[Iterable[str]]


def check_threshold(name: str, value: Any) -> float:
    """Validate that a support/confidence threshold lies in (0, 1]."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    if not 0 < value <= 1:
        raise InvalidConfigurationError(f"{name} must be in (0, 1], got {value}")
    return float(value)


class FrequentItemsetMiner(ABC):
    """
    Base class for frequent itemset mining algorithms.

    These algorithms discover frequent co-occurring item combinations
    without forming rules (no antecedent -> consequent structure).
    """

    def __init__(self, min_support: float = 0.1):
        self.min_support = check_threshold('min_support', min_support)

    @abstractmethod
    def mine_itemsets(self, data: Transactions) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine frequent itemsets from transactions.

        Args:
            data: Transactions, each a collection of item identifiers

        Returns:
            Tuple of (itemsets, stats) where:
                itemsets: List of dicts with keys 'items' (sorted list), 'support' and 'count'
                stats: Dict with mining statistics (execution_time, num_itemsets, etc.)
        """
        pass


class AssociationRuleMiner(ABC):
    """
    Base class for association rule mining algorithms.

    These algorithms discover rules in the form: antecedent -> consequent
    with quality metrics (support, confidence, lift).
    """

    def __init__(self, min_support: float = 0.1, min_confidence: float = 0.5):
        self.min_support = check_threshold('min_support', min_support)
        self.min_confidence = check_threshold('min_confidence', min_confidence)

    @abstractmethod
    def mine_rules(self, data: Transactions) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """
        Mine association rules from transactions.

        Args:
            data: Transactions, each a collection of item identifiers

        Returns:
            Tuple of (rules, stats) where:
                rules: List of dicts with keys:
                    - 'antecedent': sorted list of items
                    - 'consequent': sorted list of items
                    - 'support': float
                    - 'confidence': float
                    - 'lift': float
                stats: Dict with mining statistics
        """
        pass


class HybridMiner(FrequentItemsetMiner, AssociationRuleMiner):
    """
    Base class for algorithms that produce both frequent itemsets and association rules.

    max_length caps the number of items in an itemset, and therefore the
    combined size of a rule's antecedent and consequent.
    """

    def __init__(
        self,
        min_support: float = 0.1,
        min_confidence: float = 0.5,
        max_length: int = None
    ):
        AssociationRuleMiner.__init__(self, min_support, min_confidence)
        if max_length is not None and max_length < 1:
            raise InvalidConfigurationError(f"max_length must be a positive integer, got {max_length}")
        self.max_length = max_length

    @abstractmethod
    def mine_itemsets(self, data: Transactions) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Mine frequent itemsets."""
        pass

    @abstractmethod
    def mine_rules(self, data: Transactions) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Mine association rules."""
        pass
