"""Composite score weights.

Two fixed vectors:
- With sentiment: Unit Price 30%, Rating 20%, Sentiment 15%,
  Review Count 10%, Shipping 15%, Price 10%
- Without sentiment: Unit Price 35%, Rating 25%, Sentiment 0%,
  Review Count 15%, Shipping 15%, Price 10%

The second vector is a hand-picked redistribution of the sentiment share,
not a proportional rescale of the first. Both are hardcoded.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .models import (
    DIM_PRICE,
    DIM_RATING,
    DIM_REVIEW_COUNT,
    DIM_SENTIMENT,
    DIM_SHIPPING,
    DIM_UNIT_PRICE,
)

WeightVector = Mapping[str, float]

WEIGHTS_WITH_SENTIMENT: WeightVector = MappingProxyType({
    DIM_UNIT_PRICE: 0.30,
    DIM_RATING: 0.20,
    DIM_SENTIMENT: 0.15,
    DIM_REVIEW_COUNT: 0.10,
    DIM_SHIPPING: 0.15,
    DIM_PRICE: 0.10,
})

WEIGHTS_WITHOUT_SENTIMENT: WeightVector = MappingProxyType({
    DIM_UNIT_PRICE: 0.35,
    DIM_RATING: 0.25,
    DIM_SENTIMENT: 0.0,
    DIM_REVIEW_COUNT: 0.15,
    DIM_SHIPPING: 0.15,
    DIM_PRICE: 0.10,
})


def select_weights(sentiment_available: bool) -> WeightVector:
    """Return the weight vector for a batch.

    The choice is made once per batch: products missing from a partial
    sentiment map still use the with-sentiment vector and score 0 there.
    """
    return WEIGHTS_WITH_SENTIMENT if sentiment_available else WEIGHTS_WITHOUT_SENTIMENT
