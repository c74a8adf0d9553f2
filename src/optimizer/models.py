"""Data models for the optimizer.

Listings and rankings use @dataclass with to_dict() for JSON serialization.
Review analyses come back from an AI provider as loosely shaped JSON, so
they are validated with a Pydantic model instead.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .quantity import UNIT_PRICE_UNAVAILABLE, is_unit_price_available

# Breakdown keys, in presentation order.
DIM_UNIT_PRICE = "unit_price"
DIM_RATING = "rating"
DIM_REVIEW_COUNT = "review_count"
DIM_SHIPPING = "shipping"
DIM_PRICE = "price"
DIM_SENTIMENT = "sentiment"

DIMENSIONS: tuple[str, ...] = (
    DIM_UNIT_PRICE,
    DIM_RATING,
    DIM_REVIEW_COUNT,
    DIM_SHIPPING,
    DIM_PRICE,
    DIM_SENTIMENT,
)

_NUMBER = re.compile(r"-?\d[\d,]*(?:\.\d+)?")


def _safe_float(value: Any) -> float | None:
    """Convert a scraped value to float; None when it is not a finite number.

    Takes the first number in the text. Handles: 24.99, "24.99",
    "$1,299.00", "4.5 out of 5 stars", "$12.99 ($0.50/count)".
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _NUMBER.search(value)
        if not match:
            return None
        result = float(match.group(0).replace(",", ""))
        return result if math.isfinite(result) else None
    return None


def _safe_int(value: Any) -> int:
    """Convert a scraped count to a non-negative int (handles '1,234')."""
    number = _safe_float(value)
    if number is None or number < 0:
        return 0
    return int(number)


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass(frozen=True)
class ShippingInfo:
    """Shipping terms shown on a listing."""

    is_prime: bool = False
    is_free: bool = False
    cost: float | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> ShippingInfo | None:
        if not isinstance(data, dict):
            return None
        return cls(
            is_prime=bool(_pick(data, "is_prime", "isPrime", default=False)),
            is_free=bool(_pick(data, "is_free", "isFree", default=False)),
            cost=_safe_float(data.get("cost")),
        )

    def to_dict(self) -> dict:
        return {
            "is_prime": self.is_prime,
            "is_free": self.is_free,
            "cost": self.cost,
        }


@dataclass(frozen=True)
class RawProduct:
    """One scraped listing, as handed over by the extraction layer."""

    id: str
    title: str = ""
    price: float | None = None
    rating: float | None = None  # 0-5
    review_count: int = 0
    shipping: ShippingInfo | None = None
    image_url: str = ""
    source_url: str = ""
    is_original: bool = False
    review_texts: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> RawProduct:
        """Build from extractor output (camelCase or snake_case keys).

        Malformed numbers fall back to their defaults instead of raising.
        """
        reviews = _pick(data, "review_texts", "reviewTexts", default=())
        if not isinstance(reviews, (list, tuple)):
            reviews = ()
        return cls(
            id=str(_pick(data, "id", "asin", "sku", default="")),
            title=str(data.get("title") or ""),
            price=_safe_float(data.get("price")),
            rating=_safe_float(data.get("rating")),
            review_count=_safe_int(_pick(data, "review_count", "reviewCount", default=0)),
            shipping=ShippingInfo.from_dict(data.get("shipping")),
            image_url=str(_pick(data, "image_url", "imageUrl", default="")),
            source_url=str(_pick(data, "source_url", "sourceUrl", "url", default="")),
            is_original=bool(_pick(data, "is_original", "isOriginal", default=False)),
            review_texts=tuple(str(r) for r in reviews),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "rating": self.rating,
            "review_count": self.review_count,
            "shipping": self.shipping.to_dict() if self.shipping else None,
            "image_url": self.image_url,
            "source_url": self.source_url,
            "is_original": self.is_original,
            "review_texts": list(self.review_texts),
        }


class ReviewAnalysis(BaseModel):
    """Structured review assessment for one product, produced by the AI provider."""

    sentiment_score: float = Field(default=50.0, alias="sentimentScore")
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    quality_flag: str = Field(default="unknown", alias="qualityFlag")
    summary: str = ""

    model_config = {"populate_by_name": True}

    @field_validator("sentiment_score", mode="before")
    @classmethod
    def _clamp_sentiment(cls, value: Any) -> float:
        # Missing or zero scores are treated as neutral.
        number = _safe_float(value)
        if not number:
            return 50.0
        return max(0.0, min(100.0, number))

    @field_validator("pros", "cons", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [str(v) for v in value]

    @field_validator("quality_flag", "summary", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any, info) -> str:
        if not value:
            return "unknown" if info.field_name == "quality_flag" else ""
        return str(value)


@dataclass
class ScoredProduct:
    """A listing with its derived values, sub-scores and composite score."""

    product: RawProduct
    quantity: int = 1
    unit_price: float = UNIT_PRICE_UNAVAILABLE
    breakdown: dict[str, float] = field(
        default_factory=lambda: {dim: 0.0 for dim in DIMENSIONS}
    )
    score: int = 0
    is_best_value: bool = False
    review_analysis: ReviewAnalysis | None = None

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def title(self) -> str:
        return self.product.title

    @property
    def is_original(self) -> bool:
        return self.product.is_original

    @property
    def has_unit_price(self) -> bool:
        return is_unit_price_available(self.unit_price)

    def to_dict(self) -> dict:
        data = self.product.to_dict()
        data.update({
            "quantity": self.quantity,
            "unit_price": round(self.unit_price, 4) if self.has_unit_price else None,
            "breakdown": {dim: round(self.breakdown.get(dim, 0.0), 2) for dim in DIMENSIONS},
            "score": self.score,
            "is_best_value": self.is_best_value,
            "review_analysis": (
                self.review_analysis.model_dump() if self.review_analysis else None
            ),
        })
        return data


@dataclass
class OptimizationResult:
    """The complete output of one optimization run."""

    original: RawProduct
    products: list[ScoredProduct]
    summary: str
    sentiment_used: bool = False
    search_query: str = ""

    @property
    def best_value(self) -> ScoredProduct | None:
        return self.products[0] if self.products else None

    def to_dict(self) -> dict:
        return {
            "original_product": self.original.to_dict(),
            "products": [p.to_dict() for p in self.products],
            "summary": self.summary,
            "sentiment_used": self.sentiment_used,
            "search_query": self.search_query,
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2, default=str)
