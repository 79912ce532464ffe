"""Configuration management for Seller Tools."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_dir = Path.home() / ".seller-tools"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_log_dir() -> Path:
    """Get the log directory path."""
    log_dir = get_config_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


class PpcThresholds(BaseModel):
    """Thresholds for the PPC campaign audit rules."""

    high_acos_pct: float = 30.0
    low_ctr_pct: float = 0.3
    low_conversion_pct: float = 8.0  # sales / clicks * 100
    low_click_volume: int = 100
    good_auto_acos_pct: float = 20.0


class AcosRatingBands(BaseModel):
    """Upper bounds (exclusive) for the ACoS rating labels."""

    excellent_below: float = 15.0
    good_below: float = 25.0
    fair_below: float = 35.0


class FbaValidationPolicy(BaseModel):
    """Sign constraints for FBA cost/price/fees.

    Bulk CSV uploads accept zero cost and price; the manual entry form
    requires both to be strictly positive.
    """

    allow_zero_cost: bool = True
    allow_zero_price: bool = True
    allow_zero_fees: bool = True


class ValidationConfig(BaseModel):
    """Row validation policies."""

    fba_bulk: FbaValidationPolicy = Field(default_factory=FbaValidationPolicy)
    fba_manual: FbaValidationPolicy = Field(
        default_factory=lambda: FbaValidationPolicy(
            allow_zero_cost=False, allow_zero_price=False
        )
    )
    max_name_length: int = 100


class FbaThresholds(BaseModel):
    """Thresholds for the FBA profitability rules."""

    low_margin_pct: float = 15.0
    low_roi_pct: float = 30.0


class ListingScoringConfig(BaseModel):
    """Listing quality scoring weights and thresholds."""

    weight_title: int = 20
    weight_description: int = 20
    weight_bullet_points: int = 15
    weight_images: int = 15
    weight_keywords: int = 15
    weight_brand: int = 5
    weight_rating: int = 5
    weight_review_count: int = 5

    min_title_length: int = 50
    max_title_length: int = 200
    min_description_length: int = 500
    max_description_length: int = 2000
    min_bullet_points: int = 3
    recommended_bullet_points: int = 5
    min_images: int = 3
    recommended_images: int = 7
    min_keywords: int = 5
    recommended_keywords: int = 10
    min_review_count: int = 10
    min_rating: float = 3.5
    prohibited_keyword_penalty: int = 2

    prohibited_keywords: list[str] = Field(
        default_factory=lambda: [
            "best seller",
            "cure",
            "fda approved",
            "guaranteed",
            "free shipping",
            "#1",
        ]
    )


class SalesEstimatorConfig(BaseModel):
    """Base sales per category and the price/competition factors."""

    default_base_sales: int = 100
    category_base_sales: dict[str, int] = Field(
        default_factory=lambda: {
            "Electronics": 150,
            "Phone Accessories": 200,
            "Home & Kitchen": 120,
            "Beauty & Personal Care": 180,
            "Sports & Outdoors": 90,
            "Books": 70,
            "Toys & Games": 110,
            "Clothing": 160,
            "Office Products": 100,
            "Pet Supplies": 130,
        }
    )
    # (upper bound exclusive, factor); last band catches everything above
    price_bands: list[tuple[float, float]] = Field(
        default_factory=lambda: [(10.0, 2.0), (25.0, 1.5), (50.0, 1.0)]
    )
    high_price_factor: float = 0.7
    competition_factors: dict[str, float] = Field(
        default_factory=lambda: {"Low": 1.3, "Medium": 1.0, "High": 0.7}
    )


class InventoryConfig(BaseModel):
    """Inventory health multipliers."""

    safety_stock_multiplier: float = 1.5
    max_stock_multiplier: float = 3.0
    default_order_cost: float = 50.0
    default_holding_cost_pct: float = 0.25


class ApiConfig(BaseModel):
    """Web API and outbound API client configuration."""

    analysis_base_url: str = "https://api.example.com"
    analysis_api_key: str = ""
    timeout_seconds: int = 30
    max_retries: int = 3
    retry_backoff_seconds: float = 1.0
    rate_limit_per_minute: int = 60


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SELLER_TOOLS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    ppc: PpcThresholds = Field(default_factory=PpcThresholds)
    acos_rating: AcosRatingBands = Field(default_factory=AcosRatingBands)
    fba: FbaThresholds = Field(default_factory=FbaThresholds)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    listing: ListingScoringConfig = Field(default_factory=ListingScoringConfig)
    sales: SalesEstimatorConfig = Field(default_factory=SalesEstimatorConfig)
    inventory: InventoryConfig = Field(default_factory=InventoryConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    max_upload_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"

    def save(self, path: str | Path | None = None) -> Path:
        """Save settings to a JSON file."""
        config_path = Path(path) if path else get_config_dir() / "settings.json"
        data = self.model_dump(mode="json")
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        return config_path

    @classmethod
    def load(cls, path: str | Path | None = None) -> "Settings":
        """Load settings from a JSON file, falling back to defaults.

        Environment variables (``SELLER_TOOLS_*``) still apply on top of the
        defaults when no file is present.
        """
        config_path = Path(path) if path else get_config_dir() / "settings.json"

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
            return cls.model_validate(data)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load settings from {config_path}: {e}; using defaults")
            return cls()
