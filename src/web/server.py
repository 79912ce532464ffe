"""Flask web server exposing the seller tools as a JSON API."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any

from flask import Flask, jsonify, request
from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, ValidationError

from src.core.config import Settings
from src.core.inventory import InventoryCalculator
from src.core.models import ToolKind
from src.core.pipeline import BatchPipeline, MissingColumnsError, PipelineError
from src.core.pricing import calculate_optimal_price
from src.utils.export import Exporter

from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)

INVENTORY_ALGORITHM_VERSION = "1.0.0"
PRICING_ALGORITHM_VERSION = "1.1.0"


class InventoryRequest(BaseModel):
    """Body of POST /api/amazon/inventory."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(default="", alias="productId")
    current_inventory: float = Field(alias="currentInventory", ge=0)
    average_daily_sales: float = Field(alias="averageDailySales", ge=0)
    lead_time: float = Field(alias="leadTime", gt=0)
    sales_history: list[float] = Field(default_factory=list, alias="salesHistory")


class PricingRequest(BaseModel):
    """Body of POST /api/amazon/pricing."""

    model_config = ConfigDict(populate_by_name=True)

    competitor_prices: list[PositiveFloat] = Field(alias="competitorPrices", min_length=1)
    product_score: float = Field(alias="productScore", ge=0, le=1)
    current_price: float | None = Field(default=None, alias="currentPrice")


def json_safe(value: Any) -> Any:
    """Replace non-finite floats with 'Infinity'/'-Infinity' strings."""
    if isinstance(value, float) and math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [json_safe(v) for v in value]
    return value


def _validation_error(e: ValidationError):
    details = [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in e.errors()
    ]
    return jsonify({"error": "Invalid request parameters", "details": details}), 400


def _read_upload() -> str:
    """CSV text from a multipart 'file' field or the raw request body."""
    upload = request.files.get("file")
    raw = upload.read() if upload else request.get_data()
    return raw.decode("utf-8-sig")


def create_app(settings: Settings | None = None, rate_limiter: RateLimiter | None = None) -> Flask:
    """Create and configure the Flask application."""
    settings = settings or Settings()
    rate_limiter = rate_limiter or RateLimiter(settings.api.rate_limit_per_minute)
    inventory = InventoryCalculator(settings)

    app = Flask(__name__)
    app.json.sort_keys = False

    @app.before_request
    def check_rate_limit():
        if not request.path.startswith("/api/"):
            return None
        client = request.remote_addr or "unknown"
        if not rate_limiter.allow(client):
            logger.warning(f"Rate limit exceeded for {client}")
            return jsonify({"error": "Too many requests. Please try again later."}), 429
        return None

    @app.route("/api/amazon/inventory", methods=["POST"])
    def api_inventory():
        """Inventory health and reorder recommendation."""
        try:
            body = InventoryRequest.model_validate(request.get_json(silent=True) or {})
        except ValidationError as e:
            return _validation_error(e)

        try:
            recommendation = inventory.analyze(
                body.current_inventory,
                body.average_daily_sales,
                body.lead_time,
                body.sales_history,
            )
        except Exception:
            logger.exception("Inventory calculation failed")
            return jsonify({"error": "Failed to process inventory optimization"}), 500

        return jsonify({
            "data": json_safe({"productId": body.product_id, **recommendation.to_dict()}),
            "analysis": {
                "message": "Real-time inventory optimization calculated",
                "timestamp": datetime.now().isoformat(),
                "algorithmVersion": INVENTORY_ALGORITHM_VERSION,
            },
        })

    @app.route("/api/amazon/pricing", methods=["POST"])
    def api_pricing():
        """Optimal price from competitor prices and product score."""
        try:
            body = PricingRequest.model_validate(request.get_json(silent=True) or {})
        except ValidationError as e:
            return _validation_error(e)

        try:
            optimal_price = calculate_optimal_price(body.competitor_prices, body.product_score)
        except Exception:
            logger.exception("Pricing calculation failed")
            return jsonify({"error": "Failed to process pricing strategy"}), 500

        return jsonify({
            "data": {"optimalPrice": optimal_price},
            "analysis": {
                "message": "Dynamic pricing calculation completed",
                "timestamp": datetime.now().isoformat(),
                "algorithmVersion": PRICING_ALGORITHM_VERSION,
            },
        })

    @app.route("/api/tools/<tool>", methods=["POST"])
    def api_run_tool(tool: str):
        """Run a seller tool over an uploaded CSV."""
        try:
            kind = ToolKind.from_string(tool)
        except ValueError:
            return jsonify({"error": f"Unknown tool: {tool}"}), 404

        try:
            text = _read_upload()
        except UnicodeDecodeError:
            return jsonify({"error": "The uploaded file is not valid UTF-8 text."}), 400

        try:
            result = BatchPipeline(kind, settings).run_text(text)
        except MissingColumnsError as e:
            return jsonify({"error": str(e), "missing_columns": e.missing_headers}), 400
        except PipelineError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception(f"Tool {kind.value} failed")
            return jsonify({"error": f"Failed to process {kind.value} data"}), 500

        return jsonify({
            "tool": kind.value,
            "summary": result.summary(),
            "results": Exporter.results_to_dict(result.results, kind),
            "skipped": [{"index": s.index, "reason": s.reason} for s in result.skipped],
        })

    return app
