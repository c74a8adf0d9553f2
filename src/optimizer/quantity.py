"""Quantity extraction and per-unit price normalization.

A listing title like "Vitamin C 500mg, 120 Capsules" hides the unit count
that makes two prices comparable. ``extract_quantity`` pulls that count out
of the title; ``calculate_unit_price`` turns a sticker price into a per-unit
price.

Unit price sentinel:
    A listing without a usable price (absent, zero or negative) gets
    ``UNIT_PRICE_UNAVAILABLE``. It ranks worse than every real unit price,
    is never taken as a batch maximum, and serializes to ``None``.
    Always test it with ``is_unit_price_available``.
"""

from __future__ import annotations

import math
import re

# Worse than any finite unit price.
UNIT_PRICE_UNAVAILABLE: float = math.inf

MAX_QUANTITY = 10_000

# Ordered: the first pattern that yields an in-range number wins.
QUANTITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"(\d+)\s*[-–]?\s*(count|ct|pack|pk|pcs|pieces|units|ea|each|capsules"
        r"|tablets|pods|sheets|rolls|bags|bars|cans|bottles)",
        re.IGNORECASE,
    ),
    re.compile(r"pack\s*of\s*(\d+)", re.IGNORECASE),
    re.compile(r"(\d+)\s*per\s*(box|case|pack|bag)", re.IGNORECASE),
    re.compile(r"set\s*of\s*(\d+)", re.IGNORECASE),
    re.compile(r"(\d+)\s*x\s*\d", re.IGNORECASE),  # "24 x 500ml"
)


def extract_quantity(title: str | None) -> int:
    """Extract the unit count from a product title.

    Examples:
        "Vitamin C 500mg, 120 Capsules" → 120
        "Pack of 6 Towels" → 6
        "Wireless Mouse" → 1

    Returns 1 when the title is empty, nothing matches, or the matched
    number is outside 1..9999.
    """
    if not title or not isinstance(title, str):
        return 1
    for pattern in QUANTITY_PATTERNS:
        match = pattern.search(title)
        if match:
            num = int(match.group(1))
            if 0 < num < MAX_QUANTITY:
                return num
    return 1


def calculate_unit_price(price: float | None, quantity: int | None) -> float:
    """Price per unit, or ``UNIT_PRICE_UNAVAILABLE`` without a positive price."""
    if price is None or not _is_positive_number(price):
        return UNIT_PRICE_UNAVAILABLE
    try:
        qty = max(int(quantity or 1), 1)
    except (TypeError, ValueError):
        qty = 1
    return price / qty


def is_unit_price_available(unit_price: float | None) -> bool:
    """True for a real (finite, non-NaN) unit price."""
    if unit_price is None:
        return False
    return math.isfinite(unit_price)


def _is_positive_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0
