# receipt_processor/services/rules/engine.py
from typing import Dict

from ...rules.ruleset import DEFAULT_RULES
from ...schemas import StoredReceipt
from ...utils.logging import logger

def points_breakdown(stored: StoredReceipt) -> Dict[str, int]:
    """
    Returns {rule_name: points} in rule order.
    Raises ReceiptParseError on the first field that does not parse.
    """
    breakdown: Dict[str, int] = {}
    for name, rule in DEFAULT_RULES:
        breakdown[name] = rule(stored.receipt)
    logger.debug("Receipt %s points breakdown: %s", stored.id, breakdown)
    return breakdown

def compute_points(stored: StoredReceipt) -> int:
    return sum(points_breakdown(stored).values())
