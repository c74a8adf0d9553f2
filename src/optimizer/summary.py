"""Template-based decision summary, used when no AI narrative is available."""

from __future__ import annotations

from collections.abc import Sequence

from .models import DIM_SHIPPING, ScoredProduct
from .scorer import SHIPPING_FREE, product_rating, product_review_count

HIGH_RATING_THRESHOLD = 4.5


def generate_fallback_summary(
    ranked: Sequence[ScoredProduct] | None,
    currency_symbol: str = "$",
) -> str:
    """Build a short paragraph explaining the top pick.

    Uses only the first two entries of an already-ranked list. Returns an
    empty string for an empty ranking.
    """
    if not ranked:
        return ""

    best = ranked[0]
    parts = [f"**{best.title}** is the top pick with a score of {best.score}/100."]

    if best.quantity > 1 and best.has_unit_price:
        parts.append(
            f"At {currency_symbol}{best.unit_price:.2f} per unit "
            f"({best.quantity}-pack), it offers strong value."
        )

    if best.breakdown.get(DIM_SHIPPING) == SHIPPING_FREE:
        parts.append("Ships free with Prime.")

    rating = product_rating(best.product)
    if rating >= HIGH_RATING_THRESHOLD:
        parts.append(
            f"Rated {rating:g}/5 stars with {product_review_count(best.product):,} reviews."
        )

    if len(ranked) > 1:
        runner = ranked[1]
        parts.append(f"Runner-up: {runner.title} ({runner.score}/100).")

    return " ".join(parts)


def resolve_summary(
    ranked: Sequence[ScoredProduct],
    narrative: str | None = None,
    currency_symbol: str = "$",
) -> str:
    """Caller-supplied narrative when non-blank, otherwise the template summary."""
    if narrative and narrative.strip():
        return narrative.strip()
    return generate_fallback_summary(ranked, currency_symbol=currency_symbol)
