"""
Market Basket Mining Run

Loads a transaction file, mines frequent itemsets and association rules
with Apriori, and saves the result as an Excel workbook plus a text listing.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import List

from apriori_miner.service.base import apply_filters, file_corpus, run_mining
from apriori_miner.service.config import DataConfig, FilterConfig, MiningConfig
from apriori_miner.service.store import ResultStore
from apriori_miner.utils.excel_io import save_mining_results, save_rules_text
from apriori_miner.utils.log import setup_logging

# =============================================================================
# CONFIGURATION
# =============================================================================

DATA_PATH = "../../data/raw/transactions.csv"
OUTPUT_DIR = "../../out/basket_rules"

MINING_CONFIG = MiningConfig(
    min_support=0.05,
    min_confidence=0.5,
    max_length=None,
    n_jobs=1
)

# Applied to the mined rules before saving
RULE_FILTERS = [
    FilterConfig(metric='lift', threshold=1.0)
]


# =============================================================================
# EXPERIMENT
# =============================================================================

def run_experiment(
    data_path: str = DATA_PATH,
    output_dir: str = OUTPUT_DIR,
    mining_config: MiningConfig = MINING_CONFIG,
    rule_filters: List[FilterConfig] = None,
    store: ResultStore = None
) -> Path:
    if rule_filters is None:
        rule_filters = RULE_FILTERS

    print("=" * 70)
    print("MARKET BASKET MINING")
    print("=" * 70)

    data_config = DataConfig(path=data_path, name=Path(data_path).stem)

    print(f"\n[1] Mining {data_path}...")
    print(f"  min_support={mining_config.min_support}, min_confidence={mining_config.min_confidence}")
    result = run_mining(file_corpus(data_config), mining_config, store=store)
    print(f"  Transactions: {result.total_transactions}")
    print(f"  Frequent itemsets: {len(result.frequent_itemsets)}")
    print(f"  Rules: {len(result.rules)}")

    rules = [rule.to_dict() for rule in result.rules]
    for f in rule_filters:
        rules = apply_filters(rules, [f])
        print(f"  After {f.metric} >= {f.threshold}: {len(rules)} rules")

    print(f"\n[2] Saving results...")
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    filename = f"{timestamp}_{data_config.name}_apriori"

    parameters = {
        **data_config.to_dict(),
        **mining_config.to_dict(),
        'rule_filters': str([f.to_dict() for f in rule_filters])
    }
    excel_path = save_mining_results(
        result,
        output_path / filename,
        parameters=parameters,
        metadata={'dataset': data_config.name},
        rules=rules
    )
    save_rules_text(
        rules,
        output_path / filename,
        title=f"APRIORI RULES: {data_config.name}",
        metadata={'transactions': result.total_transactions}
    )

    print(f"\n{'=' * 70}")
    print("MINING COMPLETE")
    print("=" * 70)
    for rule in rules[:10]:
        print(f"  {{{', '.join(rule['antecedent'])}}} -> {{{', '.join(rule['consequent'])}}}"
              f"  conf={rule['confidence']:.3f} lift={rule['lift']:.3f}")
    print(f"\nProcessing time: {result.processing_time:.3f}s")
    print(f"Output: {excel_path}")
    print("=" * 70)

    return excel_path


if __name__ == '__main__':
    setup_logging(logging.INFO)
    run_experiment()
