# receipt_processor/rules/ruleset.py
from __future__ import annotations
import math
import re
from typing import Callable, List, Tuple

from ..schemas import Receipt

# -----------------------------
# Tunables
# -----------------------------
POINTS = {
    "round_dollar": 50,
    "quarter_multiple": 25,
    "item_pair": 5,
    "odd_day": 6,
    "afternoon": 10,
}

QUARTER = 0.25
DESCRIPTION_LENGTH_FACTOR = 3
DESCRIPTION_PRICE_MULTIPLIER = 0.2
AFTERNOON_START_HOUR = 14
AFTERNOON_END_HOUR = 16

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class ReceiptParseError(ValueError):
    """A stored receipt field could not be parsed while scoring."""


# -----------------------------
# Helpers
# -----------------------------
def parse_decimal(value: str, field: str) -> float:
    if not _DECIMAL_RE.fullmatch(value or ""):
        raise ReceiptParseError(f"invalid {field}: {value!r} is not a decimal number")
    number = float(value)
    if not math.isfinite(number):
        raise ReceiptParseError(f"invalid {field}: {value!r} is out of range")
    return number

def parse_int(value: str, field: str) -> int:
    if not _INT_RE.fullmatch(value or ""):
        raise ReceiptParseError(f"invalid {field}: {value!r} is not an integer")
    return int(value)


# -----------------------------
# Rules
# Each rule takes the receipt and returns the points it earns.
# -----------------------------
def retailer_alphanumeric(receipt: Receipt) -> int:
    return sum(1 for c in receipt.retailer if c.isalpha() or c.isdecimal())

def round_dollar_total(receipt: Receipt) -> int:
    total = parse_decimal(receipt.total, "total")
    if total == math.floor(total):
        return POINTS["round_dollar"]
    return 0

def quarter_multiple_total(receipt: Receipt) -> int:
    total = parse_decimal(receipt.total, "total")
    # exact float remainder, no tolerance
    if math.fmod(total, QUARTER) == 0:
        return POINTS["quarter_multiple"]
    return 0

def item_pairs(receipt: Receipt) -> int:
    return (len(receipt.items) // 2) * POINTS["item_pair"]

def item_descriptions(receipt: Receipt) -> int:
    points = 0
    for item in receipt.items:
        # byte length; an empty description counts as a multiple of 3
        trimmed = item.shortDescription.strip()
        if len(trimmed.encode("utf-8")) % DESCRIPTION_LENGTH_FACTOR == 0:
            price = parse_decimal(item.price, "item price")
            points += math.ceil(price * DESCRIPTION_PRICE_MULTIPLIER)
    return points

def odd_purchase_day(receipt: Receipt) -> int:
    parts = receipt.purchaseDate.split("-")
    if len(parts) != 3:
        raise ReceiptParseError(
            f"invalid purchaseDate: {receipt.purchaseDate!r} must follow the YYYY-MM-DD scheme"
        )
    day = parse_int(parts[2], "purchaseDate day")
    if day % 2 == 1:
        return POINTS["odd_day"]
    return 0

def afternoon_purchase(receipt: Receipt) -> int:
    parts = receipt.purchaseTime.split(":")
    if len(parts) != 2:
        raise ReceiptParseError(
            f"invalid purchaseTime: {receipt.purchaseTime!r} must follow the HH:MM scheme"
        )
    hour = parse_int(parts[0], "purchaseTime hour")
    minute = parse_int(parts[1], "purchaseTime minute")
    if hour == AFTERNOON_START_HOUR and minute == 0:
        return 0
    if AFTERNOON_START_HOUR <= hour < AFTERNOON_END_HOUR:
        return POINTS["afternoon"]
    return 0


Rule = Callable[[Receipt], int]

DEFAULT_RULES: List[Tuple[str, Rule]] = [
    ("retailer_alphanumeric", retailer_alphanumeric),
    ("round_dollar_total", round_dollar_total),
    ("quarter_multiple_total", quarter_multiple_total),
    ("item_pairs", item_pairs),
    ("item_descriptions", item_descriptions),
    ("odd_purchase_day", odd_purchase_day),
    ("afternoon_purchase", afternoon_purchase),
]
