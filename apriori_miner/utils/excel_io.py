import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from apriori_miner.rule_mining.apriori import MiningResult

logger = logging.getLogger(__name__)

ITEMSET_COLUMNS = ['items', 'size', 'support', 'count']
RULE_COLUMNS = ['antecedent', 'consequent', 'support', 'confidence', 'lift']


def save_mining_results(
    result: MiningResult,
    output_path: Union[str, Path],
    parameters: Dict[str, Any] = None,
    metadata: Dict[str, Any] = None,
    rules: List[Dict[str, Any]] = None
) -> Path:
    """
    Save a mining result to Excel with multiple sheets.

    Sheets:
        - Frequent Itemsets: All frequent itemsets with support and count
        - Rules: Association rules with metrics
        - Summary: Aggregate statistics
        - Parameters: Mining parameters used

    Args:
        result: MiningResult from a mining run
        output_path: Output file path (will add .xlsx if needed)
        parameters: Mining parameters used
        metadata: Additional metadata (dataset name, etc.)
        rules: Rule dicts to write instead of the result's own rules (e.g. after filtering)
    """
    output_path = Path(output_path)
    if output_path.suffix != '.xlsx':
        output_path = output_path.with_suffix('.xlsx')
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if rules is None:
        rules = [rule.to_dict() for rule in result.rules]

    itemset_rows = [format_itemset_for_excel(itemset.to_dict()) for itemset in result.frequent_itemsets]
    rule_rows = [format_rule_for_excel(rule) for rule in rules]

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        # Sheet 1: Frequent Itemsets
        itemsets_df = pd.DataFrame(itemset_rows, columns=ITEMSET_COLUMNS)
        itemsets_df.to_excel(writer, sheet_name='Frequent Itemsets', index=False)

        # Sheet 2: Rules
        rules_df = pd.DataFrame(rule_rows, columns=RULE_COLUMNS)
        rules_df.to_excel(writer, sheet_name='Rules', index=False)

        # Sheet 3: Summary
        summary_data = {
            'Metric': [
                'total_transactions',
                'num_itemsets',
                'num_rules',
                'processing_time',
                'timestamp'
            ],
            'Value': [
                result.total_transactions,
                len(result.frequent_itemsets),
                len(rules),
                result.processing_time,
                datetime.now().isoformat()
            ]
        }
        if metadata:
            summary_data['Metric'].extend(list(metadata.keys()))
            summary_data['Value'].extend(list(metadata.values()))
        summary_df = pd.DataFrame(summary_data)
        summary_df.to_excel(writer, sheet_name='Summary', index=False)

        # Sheet 4: Parameters
        if parameters:
            params_df = pd.DataFrame({
                'Parameter': list(parameters.keys()),
                'Value': [str(v) for v in parameters.values()]
            })
            params_df.to_excel(writer, sheet_name='Parameters', index=False)

    logger.info("Results saved to: %s", output_path)
    return output_path


def format_itemset_for_excel(itemset: Dict[str, Any]) -> Dict[str, Any]:
    formatted = itemset.copy()
    formatted['size'] = len(itemset['items'])
    formatted['items'] = _format_items(itemset['items'])
    return formatted


def format_rule_for_excel(rule: Dict[str, Any]) -> Dict[str, Any]:
    """
    Format a rule dictionary for Excel output with human-readable antecedent/consequent.

    Item lists become "item1, item2" strings, parseable by splitting on ", ".
    """
    formatted = rule.copy()

    for key in ['antecedent', 'consequent']:
        if key in formatted:
            formatted[key] = _format_items(formatted[key])

    return formatted


def _format_items(val: Any) -> str:
    if isinstance(val, str):
        return val
    if isinstance(val, (list, tuple, set, frozenset)):
        return ', '.join(str(item) for item in val)
    return str(val)


def save_rules_text(
    rules: List[Dict[str, Any]],
    output_path: Union[str, Path],
    title: str = "MINED RULES",
    metadata: Dict[str, Any] = None
) -> Path:
    """
    Save rules to a human-readable text file.

    Args:
        rules: List of rule dictionaries
        output_path: Output file path (will add .txt if needed)
        title: Title for the output file header
        metadata: Optional metadata to include in header
    """
    output_path = Path(output_path)
    if output_path.suffix != '.txt':
        output_path = output_path.with_suffix('.txt')
    output_path.parent.mkdir(parents=True, exist_ok=True)

    def format_metric(value, decimals=4):
        if isinstance(value, (int, float)):
            return f"{value:.{decimals}f}"
        return str(value) if value is not None else "N/A"

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write("=" * 80 + "\n")
        f.write(f"{title}\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if metadata:
            for key, val in metadata.items():
                f.write(f"{key}: {val}\n")
        f.write("=" * 80 + "\n\n")

        if not rules:
            f.write("No rules found.\n")
        else:
            for i, rule in enumerate(rules, 1):
                _write_rule(f, rule, i, format_metric)

        f.write("=" * 80 + "\n")
        f.write(f"Total rules: {len(rules)}\n")
        f.write("=" * 80 + "\n")

    logger.info("Rules saved to: %s", output_path)
    return output_path


def _write_rule(f, rule: Dict[str, Any], rule_num: int, format_metric) -> None:
    f.write(f"Rule #{rule_num}:\n")
    f.write(f"  IF {_format_items(rule.get('antecedent', 'N/A'))}\n")
    f.write(f"  THEN {_format_items(rule.get('consequent', 'N/A'))}\n\n")
    f.write(f"  Metrics:\n")

    for key, label in [('confidence', 'Confidence'), ('support', 'Support'), ('lift', 'Lift')]:
        if key in rule:
            f.write(f"    {label:18s} {format_metric(rule[key])}\n")

    f.write("\n")
