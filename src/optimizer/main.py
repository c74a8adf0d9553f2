"""CLI entry point for the shopping optimizer.

Usage:
    # Rank a scraped batch (first item or "original" key is the user's product)
    python -m src.optimizer.main --input data/batch.json

    # With AI review analyses (raw provider response or decoded JSON map)
    python -m src.optimizer.main --input data/batch.json --analyses data/analyses.json

    # With a plain sentiment map and a caller-written narrative
    python -m src.optimizer.main --input data/batch.json \
        --sentiments data/sentiments.json --narrative "B wins on unit price."
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from ..common.config import settings
from ..common.logging import setup_logging
from .models import ReviewAnalysis
from .pipeline import OptimizationPipeline
from .sentiment import parse_review_analyses

logger = setup_logging(module_name="optimizer.main")


def _read_text(path: str) -> str:
    file_path = Path(path)
    if not file_path.exists():
        raise SystemExit(f"Error: file not found: {path}")
    return file_path.read_text(encoding="utf-8")


def _load_json(path: str) -> object:
    try:
        return json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise SystemExit(f"Error: invalid JSON in {path}: {e}") from e


def _split_batch(data: object) -> tuple[dict, list[dict]]:
    """Accept {"original": {...}, "candidates": [...]} or a bare list."""
    if isinstance(data, dict) and "original" in data:
        return data["original"], list(data.get("candidates") or [])
    if isinstance(data, list) and data:
        return data[0], data[1:]
    raise SystemExit("Error: input must be a non-empty list or an object with 'original'")


def _load_analyses(args: argparse.Namespace) -> dict[str, ReviewAnalysis] | None:
    if not args.analyses:
        return None
    return parse_review_analyses(_read_text(args.analyses))


def _load_sentiments(args: argparse.Namespace) -> dict[str, float] | None:
    if not args.sentiments:
        return None
    data = _load_json(args.sentiments)
    if not isinstance(data, dict):
        raise SystemExit("Error: sentiments file must hold a JSON object")
    return data


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Rank product listings by composite value score"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Batch JSON file (list of products, or {original, candidates})",
    )
    parser.add_argument(
        "--analyses",
        type=str,
        help="AI review-analysis response (JSON map of product id → analysis)",
    )
    parser.add_argument(
        "--sentiments",
        type=str,
        help="JSON map of product id → sentiment score (0-100)",
    )
    parser.add_argument(
        "--narrative",
        type=str,
        default="",
        help="Externally written summary; template summary is used when empty",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Output JSON file path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-product score breakdowns",
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else settings.log_level
    engine_logger = setup_logging(level, module_name="src.optimizer")
    engine_logger.setLevel(level)
    for handler in engine_logger.handlers:
        handler.setLevel(level)

    original, candidates = _split_batch(_load_json(args.input))
    analyses = _load_analyses(args)
    sentiments = _load_sentiments(args)

    pipeline = OptimizationPipeline(settings)
    try:
        result = pipeline.run(
            original, candidates, analyses, args.narrative, sentiments=sentiments
        )
    except ValueError as e:
        raise SystemExit(f"Error: {e}") from e

    logger.info("=== Ranking: %s ===", result.original.title)
    for rank, item in enumerate(result.products, 1):
        logger.info(
            "  #%d: %s — score=%d%s%s",
            rank,
            item.title,
            item.score,
            " [BEST VALUE]" if item.is_best_value else "",
            " [ORIGINAL]" if item.is_original else "",
        )
    logger.info("Summary: %s", result.summary)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info("Output written to %s", args.output)


if __name__ == "__main__":
    main()
