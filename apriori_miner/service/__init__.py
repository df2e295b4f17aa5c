from .config import DataConfig, MiningConfig, FilterConfig
from .store import ResultStore
from .base import (
    load_transactions,
    file_corpus,
    create_miner,
    run_mining,
    get_last_result,
    apply_filters
)

__all__ = [
    'DataConfig',
    'MiningConfig',
    'FilterConfig',
    'ResultStore',
    'load_transactions',
    'file_corpus',
    'create_miner',
    'run_mining',
    'get_last_result',
    'apply_filters'
]
