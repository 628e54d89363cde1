"""Per-line GST totalization and reconciliation of previously stored figures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..utils.logging import get_logger
from .catalog import line_item_ref
from .models import INCLUDE, Addon, LineItemBreakdown, TaxAttributes
from .money import parse_number, round2

logger = get_logger(__name__)

UNIT_PRICE_KEYS = ("unitPrice", "basePrice", "price")
LINE_TOTAL_KEYS = ("lineTotal", "total", "subtotalWithGst")

RECONCILE_TOLERANCE = 0.01

# Decision tags
ZERO_RATE = "zero-rate"
DERIVE = "derive"
RECONCILE_TO_SUPPLIED = "reconcile-to-supplied"

# (base_subtotal, gst_amount, line_total)
LineAmounts = Tuple[float, float, float]


@dataclass(frozen=True)
class LineInputs:
    """Coerced view of a raw line item; optional figures are None when unusable."""

    quantity: int
    unit_price: float
    subtotal: Optional[float] = None
    line_total: Optional[float] = None
    gst_amount: Optional[float] = None

    @property
    def gross(self) -> float:
        return round2(self.unit_price * self.quantity)

    @property
    def base_subtotal(self) -> float:
        if self.subtotal is not None:
            return self.subtotal
        return self.gross


def coerce_quantity(value: Any) -> int:
    """Quantity as a positive integer, never below 1."""
    number = parse_number(value)
    if number is None or number < 1:
        return 1
    return int(number)


def pick_unit_price(line_item: Dict[str, Any]) -> float:
    """First finite candidate among unitPrice, basePrice and price; else 0.

    Negative prices are floored at 0.
    """
    for key in UNIT_PRICE_KEYS:
        number = parse_number(line_item.get(key))
        if number is not None:
            return max(number, 0.0)
    return 0.0


def _supplied_line_total(line_item: Dict[str, Any]) -> Optional[float]:
    for key in LINE_TOTAL_KEYS:
        value = line_item.get(key)
        if value is None:
            continue
        number = parse_number(value)
        if number is None or number <= 0:
            return None
        return round2(number)
    return None


def _supplied_gst(line_item: Dict[str, Any], zero_is_explicit: bool) -> Optional[float]:
    number = parse_number(line_item.get("gstAmount"))
    if number is None or number < 0:
        return None
    if number == 0 and not zero_is_explicit:
        return None
    return round2(number)


def read_line_inputs(line_item: Dict[str, Any], zero_gst_is_explicit: bool = False) -> LineInputs:
    subtotal = parse_number(line_item.get("subtotal"))
    if subtotal is not None and subtotal < 0:
        logger.debug("Ignoring negative subtotal %s on line item", subtotal)
        subtotal = None
    return LineInputs(
        quantity=coerce_quantity(line_item.get("quantity", 1)),
        unit_price=pick_unit_price(line_item),
        subtotal=round2(subtotal) if subtotal is not None else None,
        line_total=_supplied_line_total(line_item),
        gst_amount=_supplied_gst(line_item, zero_gst_is_explicit),
    )


def extract_inclusive_gst(gross: float, rate: float) -> float:
    """Tax contained in a tax-inclusive amount: gross * rate / (100 + rate)."""
    return round2(gross * rate / (100 + rate))


def exclusive_gst(net: float, rate: float) -> float:
    """Tax added on top of a net amount: net * rate / 100."""
    return round2(net * rate / 100)


def parse_addons(raw: Any) -> List[Addon]:
    if not isinstance(raw, list):
        return []
    addons = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        price = parse_number(entry.get("price"))
        addons.append(
            Addon(
                name=str(entry.get("name") or "Addon"),
                price=round2(price) if price is not None else None,
            )
        )
    return addons


class LineItemTotalizer:
    """Produce one internally consistent breakdown per raw line item.

    Stored ``subtotal``/``lineTotal``/``gstAmount`` figures are treated as
    hints: a stored line total is reconciled toward rather than echoed, and
    a zero rate always wins over any stored tax.
    """

    def __init__(self, zero_gst_is_explicit: bool = False, tolerance: float = RECONCILE_TOLERANCE) -> None:
        self.zero_gst_is_explicit = zero_gst_is_explicit
        self.tolerance = tolerance

    def decide(self, inputs: LineInputs, tax: TaxAttributes) -> str:
        if tax.rate <= 0:
            return ZERO_RATE
        if inputs.line_total is None:
            return DERIVE
        return RECONCILE_TO_SUPPLIED

    def _usable_gst(self, inputs: LineInputs, ceiling: Optional[float] = None) -> Optional[float]:
        gst = inputs.gst_amount
        if gst is None:
            return None
        if ceiling is not None and gst > ceiling:
            logger.debug("Stored gstAmount %s exceeds line total %s, re-deriving", gst, ceiling)
            return None
        return gst

    def zero_rate(self, inputs: LineInputs) -> LineAmounts:
        base = inputs.base_subtotal
        return base, 0.0, base

    def derive(self, inputs: LineInputs, tax: TaxAttributes) -> LineAmounts:
        """Compute the line from unit price, quantity, rate and mode."""
        if tax.mode == INCLUDE:
            line_total = inputs.gross
            gst = self._usable_gst(inputs, ceiling=line_total)
            if gst is None:
                gst = extract_inclusive_gst(line_total, tax.rate)
            return round2(line_total - gst), gst, line_total

        base = inputs.base_subtotal
        gst = self._usable_gst(inputs)
        if gst is None:
            gst = exclusive_gst(base, tax.rate)
        return base, gst, round2(base + gst)

    def reconcile_to_supplied(self, inputs: LineInputs, tax: TaxAttributes) -> LineAmounts:
        """Reconcile the line against a stored, positive line total."""
        line_total = inputs.line_total or 0.0
        gst = self._usable_gst(inputs, ceiling=line_total)

        if tax.mode == INCLUDE:
            if gst is None:
                gst = extract_inclusive_gst(line_total, tax.rate)
            return round2(line_total - gst), gst, line_total

        base = inputs.base_subtotal
        if gst is None:
            gst = exclusive_gst(base, tax.rate)
            if gst > line_total:
                gst = extract_inclusive_gst(line_total, tax.rate)
        expected = round2(base + gst)
        if round2(abs(line_total - expected)) > self.tolerance:
            logger.debug(
                "Stored line total %s disagrees with %s + %s, trusting stored total",
                line_total, base, gst,
            )
            return round2(line_total - gst), gst, line_total
        return base, gst, expected

    def totals_for(self, inputs: LineInputs, tax: TaxAttributes) -> Tuple[str, LineAmounts]:
        decision = self.decide(inputs, tax)
        if decision == ZERO_RATE:
            amounts = self.zero_rate(inputs)
        elif decision == DERIVE:
            amounts = self.derive(inputs, tax)
        else:
            amounts = self.reconcile_to_supplied(inputs, tax)
        return decision, amounts

    def totalize(self, line_item: Dict[str, Any], tax: TaxAttributes) -> LineItemBreakdown:
        inputs = read_line_inputs(line_item, self.zero_gst_is_explicit)
        decision, (base, gst, line_total) = self.totals_for(inputs, tax)

        unit_price = round2(inputs.unit_price)
        if tax.mode == INCLUDE:
            unit_price_with_tax = round2(line_total / inputs.quantity) if inputs.quantity > 0 else line_total
        else:
            unit_price_with_tax = unit_price

        logger.debug(
            "Line %r (%s): base=%s gst=%s total=%s",
            line_item.get("name"), decision, base, gst, line_total,
        )
        notes = line_item.get("notes")
        return LineItemBreakdown(
            quantity=inputs.quantity,
            unit_price=unit_price,
            unit_price_with_tax=unit_price_with_tax,
            base_subtotal=base,
            gst_rate=tax.rate,
            gst_mode=tax.mode,
            gst_amount=gst,
            line_total=line_total,
            name=str(line_item.get("name") or "Item"),
            item_id=line_item_ref(line_item),
            notes=notes if isinstance(notes, str) else None,
            addons=parse_addons(line_item.get("addons")),
        )


def totalize_line(
    line_item: Dict[str, Any],
    tax: TaxAttributes,
    zero_gst_is_explicit: bool = False,
) -> LineItemBreakdown:
    """Convenience wrapper around :class:`LineItemTotalizer`."""
    return LineItemTotalizer(zero_gst_is_explicit=zero_gst_is_explicit).totalize(line_item, tax)
