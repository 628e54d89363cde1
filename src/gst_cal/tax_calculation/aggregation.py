"""Order-level aggregation of line breakdowns and round-off reconciliation."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple

from ..utils.logging import get_logger
from .models import INCLUDE, LineItemBreakdown, OrderTotals
from .money import parse_amount, round2
from .statutory import build_statutory_breakdown

logger = get_logger(__name__)


class OrderAggregator:
    """Fold line breakdowns into order totals.

    The authoritative order total (set at creation or payment time) is what
    documents show as TOTAL; any gap to the recomputed sum of line totals is
    isolated as a signed round-off.
    """

    def aggregate(self, lines: Iterable[LineItemBreakdown], order_total: Any = None) -> OrderTotals:
        subtotal = 0.0
        total_tax = 0.0
        gst_included = 0.0
        gst_separate = 0.0
        computed_total = 0.0
        gst_by_rate: Dict[float, float] = {}

        for line in lines:
            subtotal += line.base_subtotal
            total_tax += line.gst_amount
            if line.gst_mode == INCLUDE:
                gst_included += line.gst_amount
            else:
                gst_separate += line.gst_amount
                if line.gst_rate > 0:
                    gst_by_rate[line.gst_rate] = gst_by_rate.get(line.gst_rate, 0.0) + line.gst_amount
            computed_total += line.line_total

        subtotal = round2(subtotal)
        total_tax = round2(total_tax)
        gst_included = round2(gst_included)
        gst_separate = round2(gst_separate)
        computed_total = round2(computed_total)

        final_total, round_off = self.reconcile(computed_total, order_total)
        statutory = build_statutory_breakdown(gst_by_rate, gst_included)

        return OrderTotals(
            subtotal=subtotal,
            total_tax=total_tax,
            gst_included=gst_included,
            gst_separate=gst_separate,
            computed_total=computed_total,
            final_total=final_total,
            round_off=round_off,
            gst_breakdown=statutory.entries,
            cgst_included=statutory.cgst_included,
            sgst_included=statutory.sgst_included,
        )

    def reconcile(self, computed_total: float, order_total: Any = None) -> Tuple[float, float]:
        """Return (final_total, round_off) against an authoritative order total.

        A missing or non-positive order total falls back to the computed one.
        """
        order_total_number = parse_amount(order_total)
        if order_total_number > 0:
            final_total = round2(order_total_number)
        else:
            final_total = computed_total
        round_off = round2(final_total - computed_total)
        if round_off:
            logger.debug(
                "Order total %s differs from computed %s by %s",
                final_total, computed_total, round_off,
            )
        return final_total, round_off


def aggregate_order(lines: Iterable[LineItemBreakdown], order_total: Optional[Any] = None) -> OrderTotals:
    return OrderAggregator().aggregate(lines, order_total)
