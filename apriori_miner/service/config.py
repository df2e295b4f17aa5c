from dataclasses import dataclass
from typing import Any, Dict, Optional

from apriori_miner.exceptions import InvalidConfigurationError
from apriori_miner.rule_mining.base import check_threshold


@dataclass(frozen=True)
class DataConfig:
    path: str
    name: str = "transactions"
    # With a header row, the column named items_column holds each
    # transaction's items joined by item_separator. Without one (or when the
    # column is absent) every non-empty cell is an item.
    header: bool = False
    items_column: str = "items"
    sep: str = ","
    item_separator: Optional[str] = ";"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'name': self.name,
            'header': self.header,
            'items_column': self.items_column,
            'sep': self.sep,
            'item_separator': self.item_separator
        }


@dataclass(frozen=True)
class MiningConfig:
    min_support: float = 0.1
    min_confidence: float = 0.5
    max_length: Optional[int] = None
    n_jobs: int = 1

    def validate(self) -> 'MiningConfig':
        check_threshold('min_support', self.min_support)
        check_threshold('min_confidence', self.min_confidence)
        if self.max_length is not None and self.max_length < 1:
            raise InvalidConfigurationError(f"max_length must be a positive integer, got {self.max_length}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min_support': self.min_support,
            'min_confidence': self.min_confidence,
            'max_length': self.max_length,
            'n_jobs': self.n_jobs
        }


@dataclass(frozen=True)
class FilterConfig:
    metric: str
    threshold: float

    def to_dict(self) -> Dict[str, Any]:
        return {'metric': self.metric, 'threshold': self.threshold}
