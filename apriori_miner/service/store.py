"""
Single-slot store for the most recent mining result.
"""
import threading
from typing import Optional

from apriori_miner.rule_mining.apriori import MiningResult


class ResultStore:
    """
    Holds at most one MiningResult.

    Writers replace the whole result under a lock, so readers see either the
    previous result or the new one, never a mix.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._result: Optional[MiningResult] = None

    def set(self, result: MiningResult) -> None:
        with self._lock:
            self._result = result

    def get(self) -> Optional[MiningResult]:
        with self._lock:
            return self._result

    def clear(self) -> None:
        with self._lock:
            self._result = None
