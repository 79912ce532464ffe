"""Row validation for Seller Tools CSV uploads and manual entries."""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING, Any

from .keywords import extract_keywords
from .models import (
    AcosRow,
    CampaignRow,
    Competition,
    FbaRow,
    KeywordRow,
    ListingRow,
    Ok,
    RawRecord,
    RawValue,
    SalesRow,
    SkippedRow,
)

if TYPE_CHECKING:
    from .config import FbaValidationPolicy, Settings

NUMBER_PATTERN = re.compile(r"^[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?$")


def parse_number(value: RawValue, strip_currency: bool = False) -> float | None:
    """Parse a raw cell into a finite float.

    Returns None when the cell is missing, empty or not a number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    cleaned = str(value).strip()
    if strip_currency:
        cleaned = cleaned.replace("$", "").replace(",", "")
    if not cleaned or not NUMBER_PATTERN.match(cleaned):
        return None
    number = float(cleaned)
    return number if math.isfinite(number) else None


def parse_text(value: RawValue) -> str:
    """Trimmed string form of a raw cell; missing cells become ''."""
    if value is None:
        return ""
    return str(value).strip()


def split_list(value: RawValue, separator: str) -> list[str]:
    """Split a delimited cell, dropping empty items."""
    return [item.strip() for item in parse_text(value).split(separator) if item.strip()]


class RowValidator:
    """Base class for per-tool row validators.

    Subclasses implement ``parse_row`` which appends human-readable messages
    to ``errors`` and returns the typed row (ignored if any error was added).
    """

    REQUIRED_HEADERS: list[str] = []
    OPTIONAL_HEADERS: list[str] = []

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def validate(self, raw: RawRecord, index: int) -> Ok[Any] | SkippedRow:
        """Validate one raw record into ``Ok`` or ``SkippedRow``."""
        errors: list[str] = []
        row = self.parse_row(raw, errors)
        if errors or row is None:
            return SkippedRow(index=index, reason="; ".join(errors) or "Invalid row")
        return Ok(index=index, row=row)

    def parse_row(self, raw: RawRecord, errors: list[str]) -> Any:
        raise NotImplementedError

    def get_required_headers(self) -> list[str]:
        """Return the list of required headers."""
        return self.REQUIRED_HEADERS.copy()

    # --- field helpers ---

    def require_text(self, raw: RawRecord, field_name: str, message: str, errors: list[str]) -> str:
        text = parse_text(raw.get(field_name))
        if not text:
            errors.append(message)
        return text[: self.settings.validation.max_name_length]

    def require_number(
        self,
        raw: RawRecord,
        field_name: str,
        errors: list[str],
        allow_zero: bool = True,
        integer: bool = False,
        strip_currency: bool = False,
        label: str | None = None,
    ) -> float:
        label = label or field_name
        number = parse_number(raw.get(field_name), strip_currency=strip_currency)
        if number is None:
            errors.append(f"Invalid or missing {label} value")
            return 0.0
        if number < 0 or (not allow_zero and number == 0) or (integer and not number.is_integer()):
            errors.append(f"Invalid or negative {label} value")
        return number


class CampaignValidator(RowValidator):
    """PPC campaign audit rows."""

    REQUIRED_HEADERS = ["name", "type", "spend", "sales", "impressions", "clicks"]

    def parse_row(self, raw: RawRecord, errors: list[str]) -> CampaignRow:
        name = self.require_text(raw, "name", "Invalid or missing campaign name", errors)
        campaign_type = self.require_text(raw, "type", "Invalid or missing campaign type", errors)
        spend = self.require_number(raw, "spend", errors)
        sales = self.require_number(raw, "sales", errors)
        impressions = self.require_number(raw, "impressions", errors, integer=True)
        clicks = self.require_number(raw, "clicks", errors, integer=True)

        return CampaignRow(
            name=name,
            type=campaign_type,
            spend=spend,
            sales=sales,
            impressions=int(impressions),
            clicks=int(clicks),
        )


class AcosValidator(RowValidator):
    """ACoS calculator rows; amounts may carry '$' and thousands separators."""

    REQUIRED_HEADERS = ["campaign", "adSpend", "sales"]
    OPTIONAL_HEADERS = ["impressions", "clicks"]

    def parse_row(self, raw: RawRecord, errors: list[str]) -> AcosRow:
        campaign = self.require_text(raw, "campaign", "Campaign name is required", errors)
        ad_spend = self.require_number(raw, "adSpend", errors, strip_currency=True, label="ad spend")
        sales = self.require_number(raw, "sales", errors, strip_currency=True)

        # Optional counters fall back to 0 when blank or invalid
        impressions = parse_number(raw.get("impressions"), strip_currency=True)
        clicks = parse_number(raw.get("clicks"), strip_currency=True)

        return AcosRow(
            campaign=campaign,
            ad_spend=ad_spend,
            sales=sales,
            impressions=int(impressions) if impressions and impressions > 0 else 0,
            clicks=int(clicks) if clicks and clicks > 0 else 0,
        )


class FbaValidator(RowValidator):
    """FBA calculator rows, checked against a sign policy."""

    REQUIRED_HEADERS = ["product", "cost", "price", "fees"]

    def __init__(self, settings: Settings, policy: FbaValidationPolicy | None = None) -> None:
        super().__init__(settings)
        self.policy = policy or settings.validation.fba_bulk

    def parse_row(self, raw: RawRecord, errors: list[str]) -> FbaRow:
        product = self.require_text(raw, "product", "Invalid or missing product name", errors)
        cost = self.require_number(raw, "cost", errors, allow_zero=self.policy.allow_zero_cost)
        price = self.require_number(raw, "price", errors, allow_zero=self.policy.allow_zero_price)
        fees = self.require_number(raw, "fees", errors, allow_zero=self.policy.allow_zero_fees)

        return FbaRow(product=product, cost=cost, price=price, fees=fees)


class KeywordValidator(RowValidator):
    """Keyword deduplicator rows."""

    REQUIRED_HEADERS = ["product", "keywords"]

    def parse_row(self, raw: RawRecord, errors: list[str]) -> KeywordRow:
        product = self.require_text(raw, "product", "Invalid or missing product name", errors)
        keywords = extract_keywords(parse_text(raw.get("keywords")))
        if product and not keywords:
            errors.append(f'No valid keywords found for product "{product}"')

        return KeywordRow(product=product, keywords=keywords)


class ListingValidator(RowValidator):
    """Listing quality checker rows."""

    REQUIRED_HEADERS = ["product", "title", "description", "bullet_points", "images", "keywords"]
    OPTIONAL_HEADERS = ["brand", "rating", "review_count"]

    def parse_row(self, raw: RawRecord, errors: list[str]) -> ListingRow:
        product = self.require_text(raw, "product", "Invalid or missing product name", errors)

        images = parse_number(raw.get("images"))
        rating = parse_number(raw.get("rating"))
        review_count = parse_number(raw.get("review_count"))

        if rating is not None and not 0 <= rating <= 5:
            errors.append("Invalid rating value (must be between 0 and 5)")

        return ListingRow(
            product=product,
            title=parse_text(raw.get("title")),
            description=parse_text(raw.get("description")),
            bullet_points=split_list(raw.get("bullet_points"), ";"),
            images=int(images) if images and images > 0 else 0,
            keywords=split_list(raw.get("keywords"), ","),
            brand=parse_text(raw.get("brand")),
            rating=rating,
            review_count=int(review_count) if review_count and review_count > 0 else None,
        )


class SalesValidator(RowValidator):
    """Sales estimator rows."""

    REQUIRED_HEADERS = ["product", "category", "price"]
    OPTIONAL_HEADERS = ["competition"]

    def parse_row(self, raw: RawRecord, errors: list[str]) -> SalesRow:
        product = self.require_text(raw, "product", "Invalid or missing product name", errors)
        category = self.require_text(raw, "category", "Category is required", errors)

        price = parse_number(raw.get("price"))
        if price is None or price <= 0:
            errors.append("Price must be positive")
            price = 0.0

        competition = Competition.MEDIUM
        competition_text = parse_text(raw.get("competition"))
        if competition_text:
            try:
                competition = Competition.from_string(competition_text)
            except ValueError:
                errors.append(
                    f"Invalid competition '{competition_text}'. Must be one of: Low, Medium, High"
                )

        return SalesRow(product=product, category=category, price=price, competition=competition)
