"""
Rule Mining Module

Classic Apriori mining:
- Frequent itemset mining (level-wise candidate generation with pruning)
- Association rule mining (support, confidence, lift)
"""
from .itemset import AssociationRule, Itemset, canonical_key
from .support import SupportCounter
from .apriori import AprioriMiner, MiningResult, MiningState

__all__ = [
    'AssociationRule',
    'Itemset',
    'canonical_key',
    'SupportCounter',
    'AprioriMiner',
    'MiningResult',
    'MiningState'
]
