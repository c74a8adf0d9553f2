"""Shared test fixtures for the shopping optimizer."""

import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.config import RankingSettings, Settings
from src.optimizer.models import RawProduct, ShippingInfo


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of config/settings.yaml and the environment."""
    return Settings(ranking=RankingSettings(max_candidates=8, max_query_keywords=5))


@pytest.fixture
def prime_product() -> RawProduct:
    """Expensive, well-reviewed Prime listing."""
    return RawProduct(
        id="A",
        title="Premium Wireless Mouse",
        price=20.0,
        rating=5.0,
        review_count=1000,
        shipping=ShippingInfo(is_prime=True),
    )


@pytest.fixture
def budget_product() -> RawProduct:
    """Cheap listing with few reviews and no Prime."""
    return RawProduct(
        id="B",
        title="Basic Wireless Mouse",
        price=10.0,
        rating=3.0,
        review_count=10,
        shipping=ShippingInfo(is_prime=False),
    )


@pytest.fixture
def sample_batch_data() -> list[dict]:
    """Extractor-shaped batch (camelCase keys), original first."""
    return [
        {
            "asin": "B0ORIG0001",
            "title": "Vitamin C 500mg, 120 Capsules",
            "price": 18.99,
            "rating": 4.6,
            "reviewCount": 5400,
            "shipping": {"isPrime": True, "isFree": False, "cost": None},
            "url": "https://www.amazon.com/dp/B0ORIG0001",
        },
        {
            "asin": "B0ALT00002",
            "title": "Vitamin C 1000mg - 250 Tablets",
            "price": 22.49,
            "rating": 4.7,
            "reviewCount": 12800,
            "shipping": {"isPrime": True},
        },
        {
            "asin": "B0ALT00003",
            "title": "Vitamin C Gummies",
            "price": 9.99,
            "rating": 4.1,
            "reviewCount": 310,
            "shipping": {"cost": 4.99},
        },
        {
            "asin": "B0ALT00004",
            "title": "Vitamin C Powder, Pack of 2",
            "price": None,
            "rating": None,
            "reviewCount": None,
        },
    ]
