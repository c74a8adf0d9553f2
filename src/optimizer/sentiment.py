"""Sentiment adapter — external review analyses into the scoring pipeline.

The AI provider returns a JSON map of product id → review analysis. This
module parses that payload leniently and reduces it to the
``product id → 0-100`` sentiment map the scorer consumes. Any parse failure
degrades to "no sentiment" rather than failing the ranking.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping

from pydantic import ValidationError

from .models import ReviewAnalysis

logger = logging.getLogger(__name__)

SentimentMap = Mapping[str, float]


def has_sentiment(sentiments: SentimentMap | None) -> bool:
    """True iff a non-empty sentiment map was supplied."""
    return bool(sentiments)


def sentiment_for(product_id: str, sentiments: SentimentMap | None) -> float:
    """Sentiment sub-score for one product; 0 when it is not covered."""
    if not sentiments:
        return 0.0
    value = sentiments.get(product_id)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return float(value)


def _extract_json(response_text: str) -> str:
    """Strip a ```json ... ``` fence if the model wrapped its answer in one."""
    json_str = response_text
    if "```json" in json_str:
        json_str = json_str.split("```json")[1].split("```")[0]
    elif "```" in json_str:
        json_str = json_str.split("```")[1].split("```")[0]
    return json_str.strip()


def parse_review_analyses(response_text: str | None) -> dict[str, ReviewAnalysis]:
    """Parse a batch review-analysis response into ReviewAnalysis objects.

    Args:
        response_text: Raw provider response, expected to hold a JSON object
            keyed by product id.

    Returns:
        Dict mapping product id to ReviewAnalysis. Empty on any parse error.
    """
    if not response_text:
        return {}

    try:
        data = json.loads(_extract_json(response_text))
    except json.JSONDecodeError:
        logger.warning("Failed to parse review analysis response as JSON")
        return {}

    if not isinstance(data, dict):
        logger.warning("Review analysis response is not a JSON object: %s", type(data).__name__)
        return {}

    return analyses_from_dict(data)


def analyses_from_dict(data: Mapping[str, object]) -> dict[str, ReviewAnalysis]:
    """Validate an already-decoded analysis map, skipping malformed entries."""
    results: dict[str, ReviewAnalysis] = {}
    for product_id, entry in data.items():
        if isinstance(entry, ReviewAnalysis):
            results[str(product_id)] = entry
            continue
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object analysis for %s", product_id)
            continue
        try:
            results[str(product_id)] = ReviewAnalysis.model_validate(entry)
        except ValidationError as e:
            logger.warning("Invalid review analysis for %s: %s", product_id, e)
    return results


def sentiments_from_analyses(
    analyses: Mapping[str, ReviewAnalysis] | None,
) -> dict[str, float] | None:
    """Reduce review analyses to a sentiment map; None when there are none."""
    if not analyses:
        return None
    return {pid: analysis.sentiment_score for pid, analysis in analyses.items()}
