"""Tax calculation module entry point."""

from .aggregation import OrderAggregator, aggregate_order
from .catalog import Catalog
from .line_items import LineItemTotalizer, totalize_line
from .models import (
    EXCLUDE,
    INCLUDE,
    GstBreakdownEntry,
    LineItemBreakdown,
    OrderTotals,
    TaxAttributes,
)
from .money import parse_amount, round2
from .orders import (
    OrderComputation,
    build_submission_items,
    compute_order,
    parse_order_items,
    preview_manual_order,
)
from .repository import OrderRepository
from .resolver import resolve_line_tax, resolve_tax_attributes
from .service import OrderTotalsService

__all__ = [
    "EXCLUDE",
    "INCLUDE",
    "Catalog",
    "GstBreakdownEntry",
    "LineItemBreakdown",
    "LineItemTotalizer",
    "OrderAggregator",
    "OrderComputation",
    "OrderRepository",
    "OrderTotals",
    "OrderTotalsService",
    "TaxAttributes",
    "aggregate_order",
    "build_submission_items",
    "compute_order",
    "parse_amount",
    "parse_order_items",
    "preview_manual_order",
    "resolve_line_tax",
    "resolve_tax_attributes",
    "round2",
    "totalize_line",
]
