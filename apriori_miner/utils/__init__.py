from .excel_io import (
    save_mining_results,
    save_rules_text,
    format_rule_for_excel,
    format_itemset_for_excel
)
from .log import setup_logging

__all__ = [
    'save_mining_results',
    'save_rules_text',
    'format_rule_for_excel',
    'format_itemset_for_excel',
    'setup_logging'
]
