"""
Value objects shared by the Apriori stages: canonical itemset keys,
frequent itemsets and association rules.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

ItemsetKey = Tuple[str, ...]


def canonical_key(items: Iterable[str]) -> ItemsetKey:
    """
    Canonical, order-independent identity of a collection of items.

    Duplicates are dropped and the remaining items sorted, so any two
    collections holding the same distinct items map to the same tuple.
    """
    return tuple(sorted(set(items)))


@dataclass(frozen=True)
class Itemset:
    items: ItemsetKey
    count: int
    support: float

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'items': list(self.items),
            'support': self.support,
            'count': self.count
        }


@dataclass(frozen=True)
class AssociationRule:
    antecedent: ItemsetKey
    consequent: ItemsetKey
    support: float
    confidence: float
    lift: float

    @property
    def items(self) -> ItemsetKey:
        """Items of the frequent itemset the rule was derived from."""
        return canonical_key(self.antecedent + self.consequent)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'antecedent': list(self.antecedent),
            'consequent': list(self.consequent),
            'support': self.support,
            'confidence': self.confidence,
            'lift': self.lift
        }

    def __str__(self):
        return (f"{{{', '.join(self.antecedent)}}} -> {{{', '.join(self.consequent)}}} "
                f"(support={self.support:.3f}, confidence={self.confidence:.3f}, lift={self.lift:.3f})")
