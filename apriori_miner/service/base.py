import csv
import dataclasses
import json
import logging
import time
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

import pandas as pd

from apriori_miner.exceptions import InsufficientDataError
from apriori_miner.postprocessing.rule import filter_rules
from apriori_miner.rule_mining.apriori import AprioriMiner, MiningResult
from apriori_miner.service.config import DataConfig, FilterConfig, MiningConfig
from apriori_miner.service.store import ResultStore

logger = logging.getLogger(__name__)

CorpusProvider = Callable[[], List[List[str]]]


def _clean_items(values: Iterable[Any]) -> List[str]:
    items = []
    for value in values:
        if value is None or (not isinstance(value, str) and pd.isna(value)):
            continue
        item = str(value).strip()
        if item:
            items.append(item)
    return items


def _split_cell(cell: Any, item_separator: Optional[str]) -> List[Any]:
    if isinstance(cell, str):
        return cell.split(item_separator) if item_separator else [cell]
    if isinstance(cell, Iterable):
        return list(cell)
    return [cell]


def _read_raw_table(df: pd.DataFrame, config: DataConfig) -> pd.DataFrame:
    # csv/excel are read without a header; the first row is promoted only on request
    if config.header and len(df) > 0:
        df = df.iloc[1:].set_axis([str(v).strip() for v in df.iloc[0].tolist()], axis=1)
    return df


def _frame_to_transactions(df: pd.DataFrame, config: DataConfig) -> List[List[str]]:
    if config.items_column in df.columns:
        return [
            _clean_items(_split_cell(cell, config.item_separator))
            for cell in df[config.items_column].tolist()
        ]

    # Basket layout: one item per cell, short rows padded with None/NaN
    return [_clean_items(row) for row in df.itertuples(index=False, name=None)]


def _records_to_transactions(records: Any) -> List[List[str]]:
    if isinstance(records, dict):
        records = records.get('transactions', [])
    if not isinstance(records, list):
        raise ValueError("Invalid data format: expected a list of transactions")

    transactions = []
    for record in records:
        items = record.get('items', []) if isinstance(record, dict) else record
        if isinstance(items, str) or not isinstance(items, Iterable):
            raise ValueError(f"Invalid transaction: {record!r}")
        transactions.append(_clean_items(items))
    return transactions


def load_transactions(config: DataConfig) -> List[List[str]]:
    """
    Load transactions from a file, choosing the reader by suffix.

    Supported: .csv, .xlsx/.xls, .parquet (items column or one item per cell)
    and .json ({"transactions": [{"items": [...]}, ...]} or a list of item lists).
    The first csv/xlsx row is data unless ``config.header`` is set.
    Transactions left with no items are skipped.
    """
    path = Path(config.path)
    if path.suffix == '.csv':
        # Basket files are ragged, which read_csv rejects
        with open(path, newline='', encoding='utf-8') as f:
            rows = [row for row in csv.reader(f, delimiter=config.sep) if row]
        df = _read_raw_table(pd.DataFrame(rows), config)
        transactions = _frame_to_transactions(df, config)
    elif path.suffix in ['.xlsx', '.xls']:
        df = _read_raw_table(pd.read_excel(path, header=None, dtype=str), config)
        transactions = _frame_to_transactions(df, config)
    elif path.suffix == '.parquet':
        df = pd.read_parquet(path)
        transactions = _frame_to_transactions(df, config)
    elif path.suffix == '.json':
        with open(path, encoding='utf-8') as f:
            transactions = _records_to_transactions(json.load(f))
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")

    non_empty = [t for t in transactions if t]
    skipped = len(transactions) - len(non_empty)
    if skipped:
        logger.warning("Skipped %d empty transactions in %s", skipped, path)
    logger.info("Loaded %d transactions from %s", len(non_empty), path)
    return non_empty


def file_corpus(config: DataConfig) -> CorpusProvider:
    """Corpus provider that re-reads the file on every call."""
    return partial(load_transactions, config)


def create_miner(config: MiningConfig, verbose: bool = False) -> AprioriMiner:
    return AprioriMiner(
        min_support=config.min_support,
        min_confidence=config.min_confidence,
        max_length=config.max_length,
        n_jobs=config.n_jobs,
        verbose=verbose
    )


def run_mining(
    corpus_provider: CorpusProvider,
    config: MiningConfig,
    store: Optional[ResultStore] = None,
    verbose: bool = False
) -> MiningResult:
    """
    Run one mining pass over the current corpus.

    Args:
        corpus_provider: Callable returning the current transactions
        config: Mining thresholds
        store: Optional result slot receiving the finished result
        verbose: Show progress bars

    Returns:
        MiningResult whose processing_time includes fetching the corpus
    """
    config.validate()

    start_time = time.time()
    transactions = list(corpus_provider())
    if not transactions:
        raise InsufficientDataError(
            "No transactions available for mining. Please create some transactions first."
        )

    result = create_miner(config, verbose=verbose).run(transactions)
    result = dataclasses.replace(result, processing_time=time.time() - start_time)

    if store is not None:
        store.set(result)
    return result


def get_last_result(store: ResultStore) -> MiningResult:
    result = store.get()
    if result is None:
        raise LookupError("No results available")
    return result


def apply_filters(rules: List[Dict], filters: List[FilterConfig]) -> List[Dict]:
    result = rules
    for f in filters:
        result = filter_rules(result, criterion=f.metric, threshold=f.threshold)
    return result
