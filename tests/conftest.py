"""Pytest configuration and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.core.config import Settings
from src.core.models import CampaignRow, FbaRow, ListingRow


@pytest.fixture
def settings() -> Settings:
    """Create default settings for testing."""
    return Settings()


@pytest.fixture
def sample_campaign() -> CampaignRow:
    """Create a sample auto campaign."""
    return CampaignRow(
        name="Camp1",
        type="Auto",
        spend=245.67,
        sales=1245.89,
        impressions=12450,
        clicks=320,
    )


@pytest.fixture
def sample_fba_row() -> FbaRow:
    """Create a sample FBA product."""
    return FbaRow(product="Yoga Mat", cost=10.0, price=30.0, fees=5.0)


@pytest.fixture
def sample_listing() -> ListingRow:
    """Create a listing that meets every recommendation."""
    return ListingRow(
        product="Bamboo Cutting Board",
        title="Bamboo Cutting Board Set of 3 with Juice Groove and Handles for Kitchen Prep",
        description="A" * 800,
        bullet_points=["Durable", "Eco friendly", "Juice groove", "Easy to clean", "Gift ready"],
        images=7,
        keywords=[f"keyword{i}" for i in range(10)],
        brand="GreenChef",
        rating=4.6,
        review_count=250,
    )


@pytest.fixture
def ppc_csv_path(tmp_path: Path) -> Path:
    """Create a PPC CSV with one invalid row."""
    csv_content = (
        "name,type,spend,sales,impressions,clicks\n"
        "Camp1,Auto,245.67,1245.89,12450,320\n"
        "Camp2,Manual,500.00,800.00,30000,45\n"
        ",Manual,10,20,100,5\n"
        "Camp4,Manual,0,0,0,0\n"
    )
    csv_file = tmp_path / "campaigns.csv"
    csv_file.write_text(csv_content, encoding="utf-8")
    return csv_file


@pytest.fixture
def fba_csv_path(tmp_path: Path) -> Path:
    """Create an FBA CSV with a negative cost row."""
    csv_content = (
        "product,cost,price,fees\n"
        "Yoga Mat,10,30,5\n"
        "Widget,-5,20,3\n"
        "Freebie,0,0,0\n"
    )
    csv_file = tmp_path / "fba.csv"
    csv_file.write_text(csv_content, encoding="utf-8")
    return csv_file


@pytest.fixture
def invalid_csv_path(tmp_path: Path) -> Path:
    """Create a PPC CSV without the sales column."""
    csv_content = "name,type,spend,impressions,clicks\nCamp1,Auto,10,100,5\n"
    csv_file = tmp_path / "invalid.csv"
    csv_file.write_text(csv_content, encoding="utf-8")
    return csv_file
