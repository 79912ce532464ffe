"""Inventory health and reorder calculations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .metrics import INF

if TYPE_CHECKING:
    from .config import Settings


class InventoryStatus(str, Enum):
    """Stock health bands."""

    HEALTHY = "healthy"
    LOW = "low"
    EXCESS = "excess"
    CRITICAL = "critical"


@dataclass
class InventoryRecommendation:
    """Result of an inventory health check."""

    status: InventoryStatus
    reorder_point: int
    days_until_stockout: float
    economic_order_quantity: int
    recommended_order_quantity: int

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "reorderPoint": self.reorder_point,
            "daysUntilStockout": self.days_until_stockout,
            "economicOrderQuantity": self.economic_order_quantity,
            "recommendedOrderQuantity": self.recommended_order_quantity,
        }


class InventoryCalculator:
    """Reorder point, EOQ and stock status for one SKU."""

    def __init__(self, settings: Settings) -> None:
        self.config = settings.inventory

    def reorder_point(self, average_daily_sales: float, lead_time_days: float) -> int:
        lead_demand = average_daily_sales * lead_time_days
        safety_stock = lead_demand * self.config.safety_stock_multiplier
        return math.ceil(lead_demand + safety_stock)

    @staticmethod
    def days_until_stockout(current_inventory: float, average_daily_sales: float) -> float:
        """Whole days of cover; infinite when nothing is selling."""
        if average_daily_sales <= 0:
            return INF
        return float(math.floor(current_inventory / average_daily_sales))

    @staticmethod
    def economic_order_quantity(annual_demand: float, order_cost: float, holding_cost: float) -> float:
        """Classic EOQ; 0 when the holding cost is not positive."""
        if holding_cost <= 0:
            return 0.0
        return math.sqrt(2 * annual_demand * order_cost / holding_cost)

    @staticmethod
    def recommended_order_quantity(
        sales_history: list[float], lead_time_days: float, current_inventory: float
    ) -> int:
        """Peak daily sales over the lead time, less stock on hand."""
        if not sales_history:
            return 0
        return max(0, math.ceil(max(sales_history) * lead_time_days - current_inventory))

    def status(self, current_inventory: float, reorder_point: int) -> InventoryStatus:
        if current_inventory == 0:
            return InventoryStatus.CRITICAL
        if current_inventory < reorder_point:
            return InventoryStatus.LOW
        if current_inventory > reorder_point * self.config.max_stock_multiplier:
            return InventoryStatus.EXCESS
        return InventoryStatus.HEALTHY

    def analyze(
        self,
        current_inventory: float,
        average_daily_sales: float,
        lead_time_days: float,
        sales_history: list[float] | None = None,
    ) -> InventoryRecommendation:
        """Run the full health check for one SKU.

        ``sales_history`` holds recent daily unit sales; when omitted the
        average is used as the only data point.
        """
        reorder_point = self.reorder_point(average_daily_sales, lead_time_days)
        eoq = self.economic_order_quantity(
            average_daily_sales * 365,
            self.config.default_order_cost,
            current_inventory * self.config.default_holding_cost_pct,
        )

        return InventoryRecommendation(
            status=self.status(current_inventory, reorder_point),
            reorder_point=reorder_point,
            days_until_stockout=self.days_until_stockout(current_inventory, average_daily_sales),
            economic_order_quantity=math.ceil(eoq),
            recommended_order_quantity=self.recommended_order_quantity(
                sales_history or [average_daily_sales], lead_time_days, current_inventory
            ),
        )
