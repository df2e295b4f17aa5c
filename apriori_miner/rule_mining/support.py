"""
Support counting over a one-hot encoded transaction corpus.
"""
import logging
from typing import Dict, Iterable, List, Sequence

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from mlxtend.preprocessing import TransactionEncoder
from tqdm.auto import tqdm

from apriori_miner.exceptions import InsufficientDataError
from apriori_miner.rule_mining.itemset import ItemsetKey, canonical_key

logger = logging.getLogger(__name__)


class SupportCounter:
    """
    Counts how many transactions contain a given itemset.

    The corpus is encoded once into a boolean DataFrame (one row per
    transaction, one column per distinct item) so that membership follows
    set semantics: an item repeated inside a transaction is counted once.
    """

    def __init__(self, transactions: Sequence[Iterable[str]]):
        if len(transactions) == 0:
            raise InsufficientDataError("Cannot count support over an empty transaction corpus")

        transactions = [[str(item) for item in transaction] for transaction in transactions]

        te = TransactionEncoder()
        te_array = te.fit(transactions).transform(transactions)
        self.encoded = pd.DataFrame(te_array, columns=te.columns_)
        self._matrix = np.asarray(te_array, dtype=bool)
        self._column_index = {item: i for i, item in enumerate(te.columns_)}
        self.total_transactions = len(transactions)

        logger.debug("Encoded %d transactions over %d distinct items",
                     self.total_transactions, len(self.encoded.columns))

    @property
    def items(self) -> List[str]:
        return list(self.encoded.columns)

    def count(self, itemset: Iterable[str]) -> int:
        """Number of transactions that are supersets of ``itemset``."""
        key = canonical_key(itemset)
        if any(item not in self._column_index for item in key):
            return 0
        columns = [self._column_index[item] for item in key]
        return int(np.count_nonzero(self._matrix[:, columns].all(axis=1)))

    def ratio(self, itemset: Iterable[str]) -> float:
        """Fraction of transactions containing ``itemset``."""
        return self.count(itemset) / self.total_transactions

    def item_counts(self) -> Dict[ItemsetKey, int]:
        """Singleton counts for every distinct item, from a single pass over the corpus."""
        column_sums = self.encoded.sum(axis=0)
        return {(item,): int(count) for item, count in column_sums.items()}

    def count_many(
        self,
        candidates: List[ItemsetKey],
        n_jobs: int = 1,
        verbose: bool = False
    ) -> Dict[ItemsetKey, int]:
        """
        Count support for a batch of candidates.

        Args:
            candidates: Canonical candidate keys
            n_jobs: Number of joblib workers (threads); 1 counts inline
            verbose: Show a progress bar

        Returns:
            Dict mapping each candidate key to its count, in candidate order
        """
        if verbose:
            candidates_iter = tqdm(candidates, desc="Counting support", unit="candidate")
        else:
            candidates_iter = candidates

        counts = Parallel(n_jobs=n_jobs, prefer="threads")(
            delayed(self.count)(candidate) for candidate in candidates_iter
        )
        return dict(zip(candidates, counts))

    def __repr__(self):
        return (f"SupportCounter(total_transactions={self.total_transactions}, "
                f"items={len(self.encoded.columns)})")
