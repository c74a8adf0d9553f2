"""Optimization pipeline — one ranking run for one original product.

Steps:
1. Build the fallback search query for the original title
2. Assemble the batch (original first, duplicates dropped, capped)
3. Reduce review analyses to a sentiment map
4. Score and rank
5. Resolve the summary (caller narrative or template fallback)

Fetching candidates and calling the AI provider happen upstream; this
pipeline only consumes their output.

Usage:
    pipeline = OptimizationPipeline()
    result = pipeline.run(original, candidates, review_analyses=analyses)
    print(result.to_json())
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping

from ..common.config import Settings
from ..common.config import settings as default_settings
from .models import OptimizationResult, RawProduct, ReviewAnalysis
from .query_builder import build_search_query_fallback
from .scorer import ProductScorer
from .sentiment import analyses_from_dict, sentiments_from_analyses
from .summary import resolve_summary

logger = logging.getLogger(__name__)


class OptimizationPipeline:
    """Ranks an original product against scraped alternatives.

    Usage:
        pipeline = OptimizationPipeline(settings)
        result = pipeline.run(original, candidates)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings
        self._scorer = ProductScorer()

    def run(
        self,
        original: RawProduct | dict,
        candidates: Iterable[RawProduct | dict],
        review_analyses: Mapping[str, ReviewAnalysis | dict] | None = None,
        narrative: str | None = None,
        sentiments: Mapping[str, float] | None = None,
    ) -> OptimizationResult:
        """Execute the pipeline.

        Args:
            original: The listing the user started from.
            candidates: Alternatives found for it.
            review_analyses: Optional product id → review analysis map.
            narrative: Optional externally written explanation.
            sentiments: Optional product id → 0-100 map; takes precedence
                over the scores carried by review_analyses.

        Returns:
            OptimizationResult with the ranked products and summary.

        Raises:
            ValueError: If the original product has no title.
        """
        if isinstance(original, dict):
            original = RawProduct.from_dict(original)
        if not original.title:
            raise ValueError("No product data provided")

        ranking = self.settings.ranking
        original = dataclasses.replace(original, is_original=True)
        logger.info("=== Optimization: %s ===", original.title)

        search_query = build_search_query_fallback(
            original.title, max_keywords=ranking.max_query_keywords
        )
        logger.info("Fallback search query: %s", search_query)

        batch = self._build_batch(original, candidates, ranking.max_candidates)
        logger.info("Batch: original + %d candidates", len(batch) - 1)

        analyses = analyses_from_dict(review_analyses) if review_analyses else {}
        if not sentiments:
            sentiments = sentiments_from_analyses(analyses)

        ranked = self._scorer.score_products(batch, sentiments)
        for item in ranked:
            item.review_analysis = analyses.get(item.id)

        summary = resolve_summary(
            ranked, narrative, currency_symbol=ranking.currency_symbol
        )
        if not (narrative and narrative.strip()):
            logger.info("No narrative supplied, using fallback summary")

        return OptimizationResult(
            original=original,
            products=ranked,
            summary=summary,
            sentiment_used=bool(sentiments),
            search_query=search_query,
        )

    @staticmethod
    def _build_batch(
        original: RawProduct,
        candidates: Iterable[RawProduct | dict],
        max_candidates: int,
    ) -> list[RawProduct]:
        """Original first, then unique candidates up to max_candidates."""
        seen = {original.id}
        batch = [original]
        for candidate in candidates or []:
            if isinstance(candidate, dict):
                candidate = RawProduct.from_dict(candidate)
            if candidate.id and candidate.id in seen:
                logger.debug("Skipping duplicate candidate %s", candidate.id)
                continue
            if len(batch) > max_candidates:
                break
            if candidate.id:
                seen.add(candidate.id)
            batch.append(dataclasses.replace(candidate, is_original=False))
        return batch
