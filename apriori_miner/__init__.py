"""
Apriori frequent itemset and association rule mining over transaction data.
"""
from .exceptions import (
    AprioriMinerError,
    InsufficientDataError,
    InvalidConfigurationError,
    MiningInvariantError
)
from .rule_mining import AprioriMiner, AssociationRule, Itemset, MiningResult, canonical_key

__version__ = '0.1.0'

__all__ = [
    'AprioriMinerError',
    'InsufficientDataError',
    'InvalidConfigurationError',
    'MiningInvariantError',
    'AprioriMiner',
    'AssociationRule',
    'Itemset',
    'MiningResult',
    'canonical_key'
]
