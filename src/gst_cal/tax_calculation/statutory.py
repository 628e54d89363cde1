"""CGST/SGST split of aggregate GST for statutory display."""

from __future__ import annotations

from typing import Dict, List

from .models import GstBreakdownEntry, StatutoryBreakdown
from .money import round2


def split_exclusive_by_rate(gst_by_rate: Dict[float, float]) -> List[GstBreakdownEntry]:
    """One entry per distinct exclusive-mode rate, ascending by rate."""
    entries = []
    for rate in sorted(gst_by_rate):
        amount = gst_by_rate[rate]
        entries.append(
            GstBreakdownEntry(
                rate=round2(rate),
                amount=round2(amount),
                cgst_rate=round2(rate / 2),
                cgst_amount=round2(amount / 2),
                sgst_rate=round2(rate / 2),
                sgst_amount=round2(amount / 2),
            )
        )
    return entries


def build_statutory_breakdown(gst_by_rate: Dict[float, float], gst_included: float) -> StatutoryBreakdown:
    """Per-rate split of exclusive tax plus a single split of inclusive tax.

    Inclusive tax is blended across rates once summed, so it gets one
    ungrouped CGST/SGST pair.
    """
    return StatutoryBreakdown(
        entries=split_exclusive_by_rate(gst_by_rate),
        cgst_included=round2(gst_included / 2),
        sgst_included=round2(gst_included / 2),
    )
