"""
Shared test fixtures

- The five-basket milk/bread/eggs corpus
- A larger grocery corpus for cross-checking against mlxtend
"""
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from apriori_miner.rule_mining.apriori import AprioriMiner
from apriori_miner.rule_mining.support import SupportCounter


@pytest.fixture
def basket_transactions():
    return [
        ['milk', 'bread'],
        ['milk', 'bread', 'eggs'],
        ['bread', 'eggs'],
        ['milk', 'eggs'],
        ['milk', 'bread', 'eggs'],
    ]


@pytest.fixture
def basket_counter(basket_transactions):
    return SupportCounter(basket_transactions)


@pytest.fixture
def basket_result(basket_transactions):
    return AprioriMiner(min_support=0.4, min_confidence=0.6).run(basket_transactions)


@pytest.fixture
def grocery_transactions():
    return [
        ['bread', 'butter', 'milk'],
        ['beer', 'chips', 'salsa'],
        ['bread', 'butter', 'jam', 'milk'],
        ['beer', 'chips'],
        ['bread', 'milk'],
        ['bread', 'butter', 'eggs', 'milk'],
        ['beer', 'chips', 'diapers', 'salsa'],
        ['butter', 'eggs', 'milk'],
        ['bread', 'butter', 'jam'],
        ['chips', 'diapers', 'milk', 'salsa'],
        ['bread', 'butter', 'eggs', 'milk'],
        ['beer', 'diapers'],
    ]
