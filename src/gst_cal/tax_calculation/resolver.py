"""GST rate/mode resolution along the line item -> menu item -> category chain."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..utils.logging import get_logger
from .models import EXCLUDE, GST_MODES, TaxAttributes
from .money import parse_number, round2

if TYPE_CHECKING:
    from .catalog import Catalog

logger = get_logger(__name__)

MAX_GST_RATE = 100.0

# (level name, record) pairs, highest precedence first
TaxSources = Sequence[Tuple[str, Optional[Mapping[str, Any]]]]


def normalize_rate(value: Any) -> float:
    """Clamp a GST percentage into [0, 100]; non-finite or <= 0 becomes 0."""
    number = parse_number(value)
    if number is None or number <= 0:
        return 0.0
    return round2(min(number, MAX_GST_RATE))


def normalize_mode(value: Any) -> Optional[str]:
    """Return the mode when it is literally 'include' or 'exclude', else None."""
    if isinstance(value, str) and value in GST_MODES:
        return value
    return None


def resolve_tax_attributes(sources: TaxSources) -> TaxAttributes:
    """Resolve rate and mode independently from an ordered list of sources.

    A rate counts as present only when it normalizes to > 0. Missing
    records (None) are skipped, so a new configuration level is one more
    entry in ``sources``.
    """
    rate = 0.0
    rate_level = "default"
    for level, record in sources:
        if not record:
            continue
        candidate = normalize_rate(record.get("gstRate"))
        if candidate > 0:
            rate, rate_level = candidate, level
            break

    mode = EXCLUDE
    mode_level = "default"
    for level, record in sources:
        if not record:
            continue
        candidate_mode = normalize_mode(record.get("gstMode"))
        if candidate_mode is not None:
            mode, mode_level = candidate_mode, level
            break

    logger.debug("Resolved GST rate %s from %s, mode %s from %s", rate, rate_level, mode, mode_level)
    return TaxAttributes(rate=rate, mode=mode)


def tax_sources(
    line_item: Optional[Mapping[str, Any]],
    menu_item: Optional[Mapping[str, Any]] = None,
    category: Optional[Mapping[str, Any]] = None,
    vendor: Optional[Mapping[str, Any]] = None,
) -> List[Tuple[str, Optional[Mapping[str, Any]]]]:
    return [
        ("line item", line_item),
        ("menu item", menu_item),
        ("category", category),
        ("vendor", vendor),
    ]


def resolve_line_tax(line_item: Dict[str, Any], catalog: Optional["Catalog"] = None) -> TaxAttributes:
    """Resolve the effective tax attributes for a raw line item against a catalog."""
    if catalog is None:
        return resolve_tax_attributes(tax_sources(line_item))
    menu_item = catalog.menu_item_for_line(line_item)
    category = catalog.category_for(menu_item)
    return resolve_tax_attributes(tax_sources(line_item, menu_item, category, catalog.vendor))
