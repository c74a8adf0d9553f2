"""Shopping value optimizer — deterministic scoring and ranking engine.

Turns a batch of scraped product listings into a ranked list with a
reproducible per-dimension breakdown and a plain-text explanation of the
winner.
"""

from .models import (
    DIMENSIONS,
    OptimizationResult,
    RawProduct,
    ReviewAnalysis,
    ScoredProduct,
    ShippingInfo,
)
from .quantity import UNIT_PRICE_UNAVAILABLE, calculate_unit_price, extract_quantity
from .scorer import ProductScorer, score_products
from .summary import generate_fallback_summary
from .weights import WEIGHTS_WITH_SENTIMENT, WEIGHTS_WITHOUT_SENTIMENT, select_weights

__version__ = "0.1.0"

__all__ = [
    "DIMENSIONS",
    "OptimizationResult",
    "ProductScorer",
    "RawProduct",
    "ReviewAnalysis",
    "ScoredProduct",
    "ShippingInfo",
    "UNIT_PRICE_UNAVAILABLE",
    "WEIGHTS_WITH_SENTIMENT",
    "WEIGHTS_WITHOUT_SENTIMENT",
    "calculate_unit_price",
    "extract_quantity",
    "generate_fallback_summary",
    "score_products",
    "select_weights",
]
