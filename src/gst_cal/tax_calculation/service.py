"""Order totals service: fetch records from the store and run the tax engine."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..utils.config import Config
from ..utils.logging import get_logger
from .aggregation import OrderAggregator
from .catalog import Catalog
from .line_items import LineItemTotalizer
from .orders import OrderComputation, compute_order
from .repository import OrderRepository

logger = get_logger(__name__)


class OrderTotalsService:
    """High-level service for order tax breakdowns."""

    def __init__(
        self,
        db_name: Optional[str] = None,
        mongo_url: Optional[str] = None,
        config: Optional[Config] = None,
    ) -> None:
        self.config = config or Config()
        self.db_name = db_name
        self.mongo_url = mongo_url
        self.totalizer = LineItemTotalizer(
            zero_gst_is_explicit=bool(self.config.get("zero_gst_is_explicit", False)),
            tolerance=float(self.config.get("reconcile_tolerance", 0.01)),
        )
        self.aggregator = OrderAggregator()

    def compute_for_document(
        self,
        order: Dict[str, Any],
        menu_items: Optional[List[Dict[str, Any]]] = None,
        categories: Optional[List[Dict[str, Any]]] = None,
        vendor: Optional[Dict[str, Any]] = None,
    ) -> OrderComputation:
        """Compute line breakdowns and totals for an already-loaded order."""
        catalog = Catalog(menu_items, categories, vendor)
        result = compute_order(order, catalog, self.totalizer, self.aggregator)
        logger.info(
            "Computed order %s: %d lines, total %s (round off %s)",
            result.order_id, len(result.lines), result.totals.final_total, result.totals.round_off,
        )
        return result

    def compute_for_order_id(self, order_id: Any) -> OrderComputation:
        """Fetch an order and its vendor's catalog, then compute its totals."""
        with OrderRepository(url=self.mongo_url, db_name=self.db_name, config=self.config) as repo:
            order = repo.get_order(order_id)
            if not order:
                raise ValueError(f"Order with ID {order_id} not found")
            logger.info("Fetched order %s for vendor %s", order_id, order.get("vendorId"))

            vendor_id = order.get("vendorId")
            return self.compute_for_document(
                order,
                menu_items=repo.get_menu_items(vendor_id),
                categories=repo.get_categories(vendor_id),
                vendor=repo.get_vendor(vendor_id),
            )
