"""Records produced by the tax breakdown engine.

All monetary fields are plain floats already rounded to 2 decimals.
``to_dict`` emits the camelCase vocabulary used by persisted orders and
by the receipt/invoice renderer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

INCLUDE = "include"
EXCLUDE = "exclude"
GST_MODES = (INCLUDE, EXCLUDE)

ROUND_OFF_THRESHOLD = 0.01


@dataclass(frozen=True)
class TaxAttributes:
    """Effective GST rate (percent) and mode for one line item."""

    rate: float = 0.0
    mode: str = EXCLUDE


@dataclass(frozen=True)
class Addon:
    name: str
    price: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.price is not None:
            data["price"] = self.price
        return data


@dataclass(frozen=True)
class LineItemBreakdown:
    """Fully reconciled monetary fields for one order line."""

    quantity: int
    unit_price: float
    unit_price_with_tax: float
    base_subtotal: float
    gst_rate: float
    gst_mode: str
    gst_amount: float
    line_total: float
    name: str = "Item"
    item_id: Optional[int] = None
    notes: Optional[str] = None
    addons: List[Addon] = field(default_factory=list)

    @property
    def is_inclusive(self) -> bool:
        return self.gst_mode == INCLUDE

    @property
    def display_amount(self) -> float:
        """Row amount shown on receipts: gross for inclusive lines, net otherwise."""
        return self.line_total if self.is_inclusive else self.base_subtotal

    @property
    def display_unit_price(self) -> float:
        return self.unit_price_with_tax if self.is_inclusive else self.unit_price

    def supplied_fields(self) -> Dict[str, Any]:
        """Derived fields in the shape accepted back as a raw line item."""
        return {
            "itemId": self.item_id,
            "name": self.name,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "subtotal": self.base_subtotal,
            "lineTotal": self.line_total,
            "gstAmount": self.gst_amount,
            "gstRate": self.gst_rate,
            "gstMode": self.gst_mode,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "name": self.name,
            "quantity": self.quantity,
            "unitPrice": self.unit_price,
            "unitPriceWithTax": self.unit_price_with_tax,
            "baseSubtotal": self.base_subtotal,
            "gstRate": self.gst_rate,
            "gstMode": self.gst_mode,
            "gstAmount": self.gst_amount,
            "lineTotal": self.line_total,
            "notes": self.notes,
            "addons": [addon.to_dict() for addon in self.addons],
        }


@dataclass(frozen=True)
class GstBreakdownEntry:
    """Exclusive-mode tax collected at one rate, split into CGST/SGST halves."""

    rate: float
    amount: float
    cgst_rate: float
    cgst_amount: float
    sgst_rate: float
    sgst_amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rate": self.rate,
            "amount": self.amount,
            "cgstRate": self.cgst_rate,
            "cgstAmount": self.cgst_amount,
            "sgstRate": self.sgst_rate,
            "sgstAmount": self.sgst_amount,
        }


@dataclass(frozen=True)
class StatutoryBreakdown:
    entries: List[GstBreakdownEntry]
    cgst_included: float
    sgst_included: float


@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    total_tax: float
    gst_included: float
    gst_separate: float
    computed_total: float
    final_total: float
    round_off: float
    gst_breakdown: List[GstBreakdownEntry] = field(default_factory=list)
    cgst_included: float = 0.0
    sgst_included: float = 0.0

    @property
    def show_round_off(self) -> bool:
        return abs(self.round_off) >= ROUND_OFF_THRESHOLD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subtotal": self.subtotal,
            "totalTax": self.total_tax,
            "gstIncluded": self.gst_included,
            "cgstIncluded": self.cgst_included,
            "sgstIncluded": self.sgst_included,
            "gstSeparate": self.gst_separate,
            "computedTotal": self.computed_total,
            "finalTotal": self.final_total,
            "roundOff": self.round_off,
            "showRoundOff": self.show_round_off,
            "gstBreakdown": [entry.to_dict() for entry in self.gst_breakdown],
        }
