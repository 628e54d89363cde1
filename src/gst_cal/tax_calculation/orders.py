"""Adapters between persisted orders / manual selections and the tax engine."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..utils.logging import get_logger
from .aggregation import OrderAggregator
from .catalog import Catalog, to_int_id
from .line_items import LineItemTotalizer, coerce_quantity
from .models import LineItemBreakdown, OrderTotals
from .money import parse_number, round2
from .resolver import resolve_line_tax

logger = get_logger(__name__)


@dataclass(frozen=True)
class OrderComputation:
    """Line breakdowns and reconciled totals for one order."""

    order_id: Any
    lines: List[LineItemBreakdown] = field(default_factory=list)
    totals: Optional[OrderTotals] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "orderId": self.order_id,
            "items": [line.to_dict() for line in self.lines],
            "totals": self.totals.to_dict() if self.totals else None,
        }


def parse_order_items(raw: Any) -> List[Dict[str, Any]]:
    """Normalize an order's ``items`` field to a list of line item dicts.

    Accepts a list or a JSON-encoded list; anything else yields [].
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed order items payload")
            return []
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("Order items payload is %s, expected a list", type(raw).__name__)
        return []
    return [item for item in raw if isinstance(item, dict)]


def compute_line_breakdowns(
    line_items: Iterable[Dict[str, Any]],
    catalog: Optional[Catalog] = None,
    totalizer: Optional[LineItemTotalizer] = None,
) -> List[LineItemBreakdown]:
    totalizer = totalizer or LineItemTotalizer()
    breakdowns = []
    for line_item in line_items:
        tax = resolve_line_tax(line_item, catalog)
        breakdowns.append(totalizer.totalize(line_item, tax))
    return breakdowns


def compute_order(
    order: Dict[str, Any],
    catalog: Optional[Catalog] = None,
    totalizer: Optional[LineItemTotalizer] = None,
    aggregator: Optional[OrderAggregator] = None,
) -> OrderComputation:
    """Run the full pipeline for a persisted order document."""
    lines = compute_line_breakdowns(parse_order_items(order.get("items")), catalog, totalizer)
    totals = (aggregator or OrderAggregator()).aggregate(lines, order.get("totalAmount"))
    return OrderComputation(order_id=order.get("id"), lines=lines, totals=totals)


def _selection_line(selection: Dict[str, Any], catalog: Catalog) -> Optional[Dict[str, Any]]:
    item_id = to_int_id(selection.get("itemId"))
    menu_item = catalog.menu_item(item_id)
    if menu_item is None:
        logger.debug("Skipping selection for unknown menu item %r", selection.get("itemId"))
        return None
    if menu_item.get("isAvailable") is False:
        logger.debug("Skipping unavailable menu item %s", item_id)
        return None
    price = parse_number(menu_item.get("price"))
    return {
        "itemId": item_id,
        "name": menu_item.get("name") or "Item",
        "quantity": coerce_quantity(selection.get("quantity", 1)),
        "price": price if price is not None else 0.0,
    }


def preview_manual_order(
    selections: Iterable[Dict[str, Any]],
    catalog: Catalog,
    totalizer: Optional[LineItemTotalizer] = None,
) -> OrderComputation:
    """Running total for a manual order before it is submitted."""
    line_items = [line for line in (_selection_line(s, catalog) for s in selections) if line]
    lines = compute_line_breakdowns(line_items, catalog, totalizer)
    return OrderComputation(order_id=None, lines=lines, totals=OrderAggregator().aggregate(lines))


def build_submission_items(
    selections: Iterable[Dict[str, Any]],
    catalog: Catalog,
) -> List[Dict[str, Any]]:
    """Serialize manual order lines with their resolved rate, mode and subtotal."""
    items = []
    for selection in selections:
        line = _selection_line(selection, catalog)
        if line is None:
            continue
        tax = resolve_line_tax(line, catalog)
        line.update(
            subtotal=round2(line["price"] * line["quantity"]),
            gstRate=tax.rate,
            gstMode=tax.mode,
        )
        items.append(line)
    return items
