"""Tests for the optimization pipeline and result models."""

from __future__ import annotations

import json

import pytest

from src.common.config import RankingSettings, Settings
from src.optimizer.models import OptimizationResult, RawProduct, ShippingInfo
from src.optimizer.pipeline import OptimizationPipeline
from src.optimizer.summary import generate_fallback_summary


class TestRawProductFromDict:
    def test_camel_case_keys(self, sample_batch_data):
        product = RawProduct.from_dict(sample_batch_data[0])
        assert product.id == "B0ORIG0001"
        assert product.review_count == 5400
        assert product.shipping == ShippingInfo(is_prime=True, is_free=False, cost=None)
        assert product.source_url == "https://www.amazon.com/dp/B0ORIG0001"

    def test_snake_case_keys(self):
        product = RawProduct.from_dict({
            "id": "x", "title": "Thing", "review_count": 7,
            "shipping": {"is_free": True}, "is_original": True,
        })
        assert product.review_count == 7
        assert product.shipping.is_free
        assert product.is_original

    def test_missing_fields(self):
        product = RawProduct.from_dict({})
        assert product.id == ""
        assert product.price is None
        assert product.rating is None
        assert product.review_count == 0
        assert product.shipping is None

    def test_negative_review_count(self):
        assert RawProduct.from_dict({"reviewCount": -3}).review_count == 0

    def test_scraped_text_takes_first_number(self):
        product = RawProduct.from_dict({
            "id": "a",
            "rating": "4.5 out of 5 stars",
            "price": "$12.99 ($0.50/count)",
            "reviewCount": "2,847 ratings",
        })
        assert product.rating == pytest.approx(4.5)
        assert product.price == pytest.approx(12.99)
        assert product.review_count == 2847

    def test_thousands_separator_price(self):
        assert RawProduct.from_dict({"price": "$1,299.00"}).price == pytest.approx(1299.0)

    def test_review_texts_serialized(self):
        product = RawProduct.from_dict({"id": "a", "reviewTexts": ["Works well.", "Broke fast."]})
        assert product.review_texts == ("Works well.", "Broke fast.")
        assert product.to_dict()["review_texts"] == ["Works well.", "Broke fast."]

    def test_frozen(self):
        product = RawProduct(id="a")
        with pytest.raises(Exception):
            product.price = 5.0  # type: ignore[misc]


class TestOptimizationPipeline:
    def test_run(self, test_settings, sample_batch_data):
        pipeline = OptimizationPipeline(test_settings)
        result = pipeline.run(sample_batch_data[0], sample_batch_data[1:])

        assert isinstance(result, OptimizationResult)
        assert len(result.products) == 4
        assert result.original.is_original
        originals = [p for p in result.products if p.is_original]
        assert [p.id for p in originals] == ["B0ORIG0001"]
        assert result.best_value is result.products[0]
        assert result.summary == generate_fallback_summary(result.products)
        assert not result.sentiment_used
        assert result.search_query == "vitamin 500mg capsules"

    def test_narrative_used(self, test_settings, prime_product, budget_product):
        pipeline = OptimizationPipeline(test_settings)
        result = pipeline.run(prime_product, [budget_product], narrative="A is better.")
        assert result.summary == "A is better."

    def test_review_analyses_feed_sentiment(self, test_settings, prime_product, budget_product):
        pipeline = OptimizationPipeline(test_settings)
        result = pipeline.run(
            prime_product,
            [budget_product],
            review_analyses={"B": {"sentimentScore": 95, "pros": ["cheap"]}},
        )
        by_id = {p.id: p for p in result.products}
        assert result.sentiment_used
        assert by_id["B"].breakdown["sentiment"] == 95
        assert by_id["A"].breakdown["sentiment"] == 0
        assert by_id["B"].review_analysis.pros == ["cheap"]
        assert by_id["A"].review_analysis is None

    def test_explicit_sentiments_take_precedence(self, test_settings, prime_product, budget_product):
        pipeline = OptimizationPipeline(test_settings)
        result = pipeline.run(
            prime_product,
            [budget_product],
            review_analyses={"B": {"sentimentScore": 95}},
            sentiments={"A": 10},
        )
        by_id = {p.id: p for p in result.products}
        assert by_id["A"].breakdown["sentiment"] == 10
        assert by_id["B"].breakdown["sentiment"] == 0

    def test_duplicates_and_original_flag_dropped(self, test_settings, prime_product, budget_product):
        pipeline = OptimizationPipeline(test_settings)
        flagged = RawProduct(id="C", title="Other Mouse", price=15.0, is_original=True)
        result = pipeline.run(prime_product, [prime_product, budget_product, budget_product, flagged])
        assert sorted(p.id for p in result.products) == ["A", "B", "C"]
        assert sum(1 for p in result.products if p.is_original) == 1

    def test_candidate_cap(self, prime_product):
        settings = Settings(ranking=RankingSettings(max_candidates=2))
        candidates = [RawProduct(id=f"C{i}", title=f"Mouse {i}", price=10.0 + i) for i in range(5)]
        result = OptimizationPipeline(settings).run(prime_product, candidates)
        assert sorted(p.id for p in result.products) == ["A", "C0", "C1"]

    def test_missing_title_raises(self, test_settings):
        with pytest.raises(ValueError, match="No product data"):
            OptimizationPipeline(test_settings).run({"id": "x"}, [])

    def test_to_json(self, test_settings, sample_batch_data):
        result = OptimizationPipeline(test_settings).run(sample_batch_data[0], sample_batch_data[1:])
        data = json.loads(result.to_json())
        assert data["original_product"]["id"] == "B0ORIG0001"
        assert len(data["products"]) == 4
        powder = next(p for p in data["products"] if p["id"] == "B0ALT00004")
        assert powder["unit_price"] is None
        assert sum(1 for p in data["products"] if p["is_best_value"]) == 1
        for p in data["products"]:
            assert list(p["breakdown"]) == [
                "unit_price", "rating", "review_count", "shipping", "price", "sentiment",
            ]
