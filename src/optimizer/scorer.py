"""Product scoring — normalizes listing attributes into 0–100 sub-scores.

Scores each listing across 6 dimensions and combines them into one
composite score (see ``weights`` for the two weight vectors):
- Unit Price: lower per-unit price is better
- Rating: star rating out of 5
- Review Count: log-scaled review volume
- Shipping: Prime / free / paid / unknown
- Price: lower sticker price is better
- Sentiment: external review sentiment, when supplied

Price, unit price and review count are relative to the batch, so scores
are only comparable within one ranking run.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping

from .models import (
    DIM_PRICE,
    DIM_RATING,
    DIM_REVIEW_COUNT,
    DIM_SENTIMENT,
    DIM_SHIPPING,
    DIM_UNIT_PRICE,
    DIMENSIONS,
    RawProduct,
    ScoredProduct,
    ShippingInfo,
)
from .quantity import calculate_unit_price, extract_quantity, is_unit_price_available
from .sentiment import has_sentiment, sentiment_for
from .weights import WeightVector, select_weights

logger = logging.getLogger(__name__)

SHIPPING_FREE = 100.0
SHIPPING_PAID = 50.0
SHIPPING_UNKNOWN = 25.0

# Used for every product when no listing has more than one review.
NEUTRAL_REVIEW_SCORE = 50.0


def _finite(value: float | None) -> float | None:
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) if math.isfinite(value) else None


def _positive_price(product: RawProduct) -> float | None:
    price = _finite(product.price)
    return price if price is not None and price > 0 else None


def product_rating(product: RawProduct) -> float:
    """Star rating, 0 when missing or not a finite number."""
    return _finite(product.rating) or 0.0


def product_review_count(product: RawProduct) -> int:
    """Review count, 0 when missing, negative or not a number."""
    count = _finite(product.review_count)
    return int(count) if count is not None and count > 0 else 0


def get_shipping_score(shipping: ShippingInfo | None) -> float:
    """Shipping sub-score: Prime/free=100, known paid cost=50, unknown=25."""
    if shipping is None:
        return SHIPPING_UNKNOWN
    if shipping.is_prime or shipping.is_free:
        return SHIPPING_FREE
    cost = _finite(shipping.cost)
    if cost is None:
        return SHIPPING_UNKNOWN
    if cost == 0:
        return SHIPPING_FREE
    if cost > 0:
        return SHIPPING_PAID
    return SHIPPING_UNKNOWN


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class ProductScorer:
    """Scores and ranks one batch of listings.

    Holds no state between calls; one instance can rank any number of
    batches, from any number of callers.

    Usage:
        scorer = ProductScorer()
        ranked = scorer.score_products(products, sentiments={"B0ABC": 82})
        # ranked[0].is_best_value -> True
    """

    def score_products(
        self,
        products: Iterable[RawProduct | dict] | None,
        sentiments: Mapping[str, float] | None = None,
    ) -> list[ScoredProduct]:
        """Score all products and return them sorted by composite score.

        Args:
            products: Batch of listings (RawProduct or extractor dicts).
            sentiments: Optional product id → 0-100 sentiment map.

        Returns:
            ScoredProduct list, best first. Ties keep input order.
        """
        batch = [
            p if isinstance(p, RawProduct) else RawProduct.from_dict(p)
            for p in (products or [])
        ]
        if not batch:
            return []

        use_sentiment = has_sentiment(sentiments)
        weights = select_weights(use_sentiment)

        quantities = [extract_quantity(p.title) for p in batch]
        unit_prices = [
            calculate_unit_price(_positive_price(p), qty)
            for p, qty in zip(batch, quantities)
        ]

        max_price = self._max_price(batch)
        max_unit_price = self._max_unit_price(unit_prices)
        max_reviews = self._max_review_count(batch)

        scored: list[ScoredProduct] = []
        for product, qty, unit_price in zip(batch, quantities, unit_prices):
            breakdown = {
                DIM_UNIT_PRICE: self._score_unit_price(unit_price, max_unit_price),
                DIM_RATING: self._score_rating(product),
                DIM_REVIEW_COUNT: self._score_review_count(product, max_reviews),
                DIM_SHIPPING: get_shipping_score(product.shipping),
                DIM_PRICE: self._score_price(product, max_price),
                DIM_SENTIMENT: (
                    sentiment_for(product.id, sentiments) if use_sentiment else 0.0
                ),
            }
            score = self.composite_score(breakdown, weights)
            scored.append(ScoredProduct(
                product=product,
                quantity=qty,
                unit_price=unit_price,
                breakdown=breakdown,
                score=score,
            ))
            logger.debug(
                "Score %s: unit=%.1f rating=%.1f reviews=%.1f ship=%.0f price=%.1f sent=%.1f total=%d",
                product.id, breakdown[DIM_UNIT_PRICE], breakdown[DIM_RATING],
                breakdown[DIM_REVIEW_COUNT], breakdown[DIM_SHIPPING],
                breakdown[DIM_PRICE], breakdown[DIM_SENTIMENT], score,
            )

        # sorted() is stable, also with reverse=True
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        ranked[0].is_best_value = True

        logger.info(
            "Ranked %d products (sentiment=%s), best=%s score=%d",
            len(ranked), use_sentiment, ranked[0].id, ranked[0].score,
        )
        return ranked

    @staticmethod
    def composite_score(breakdown: Mapping[str, float], weights: WeightVector) -> int:
        """Weighted sum of sub-scores, rounded and clamped to 0-100."""
        total = sum(breakdown.get(dim, 0.0) * weights.get(dim, 0.0) for dim in DIMENSIONS)
        if not math.isfinite(total):
            total = 0.0
        return _round_half_up(max(0.0, min(100.0, total)))

    @staticmethod
    def _max_price(batch: list[RawProduct]) -> float:
        """Largest positive price in the batch, floored at 1."""
        prices = [p for p in (_positive_price(prod) for prod in batch) if p is not None]
        return max(prices + [1.0])

    @staticmethod
    def _max_unit_price(unit_prices: list[float]) -> float:
        """Largest available unit price, floored at 1. Sentinels are skipped."""
        finite = [u for u in unit_prices if is_unit_price_available(u)]
        return max(finite + [1.0])

    @staticmethod
    def _max_review_count(batch: list[RawProduct]) -> int:
        return max([product_review_count(p) for p in batch] + [1])

    @staticmethod
    def _score_unit_price(unit_price: float, max_unit_price: float) -> float:
        """(1 - unit_price / max) * 100; 0 when the unit price is unavailable."""
        if not is_unit_price_available(unit_price):
            return 0.0
        return (1 - unit_price / max_unit_price) * 100

    @staticmethod
    def _score_rating(product: RawProduct) -> float:
        return (product_rating(product) / 5) * 100

    @staticmethod
    def _score_review_count(product: RawProduct, max_reviews: int) -> float:
        """log(count) / log(max) * 100, neutral 50 when max <= 1."""
        if max_reviews <= 1:
            return NEUTRAL_REVIEW_SCORE
        count = max(product_review_count(product), 1)
        return math.log(count) / math.log(max_reviews) * 100

    @staticmethod
    def _score_price(product: RawProduct, max_price: float) -> float:
        price = _positive_price(product)
        if price is None:
            return 0.0
        return (1 - price / max_price) * 100


_default_scorer = ProductScorer()


def score_products(
    products: Iterable[RawProduct | dict] | None,
    sentiments: Mapping[str, float] | None = None,
) -> list[ScoredProduct]:
    """Module-level shortcut for ``ProductScorer().score_products``."""
    return _default_scorer.score_products(products, sentiments)
