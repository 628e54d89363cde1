"""
GST Cal - Restaurant Order GST Breakdown Engine

Resolves GST rate/mode for order line items, reconciles stored line
figures, aggregates order totals with a round-off against the charged
total, and splits tax into CGST/SGST for receipts and invoices.
"""

__version__ = "0.1.0"

from . import tax_calculation
from . import utils

__all__ = ["tax_calculation", "utils"]
