"""In-memory lookup over a vendor's menu items and categories."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from ..utils.logging import get_logger
from .money import parse_number

logger = get_logger(__name__)

# keys a persisted line item may use to reference its menu item
LINE_ITEM_ID_KEYS = ("itemId", "id", "productId", "menuItemId")


def to_int_id(value: Any) -> Optional[int]:
    """Coerce an id to int; non-integral or missing ids give None."""
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def line_item_ref(line_item: Dict[str, Any]) -> Optional[int]:
    """Return the catalog id referenced by a raw line item, if any."""
    for key in LINE_ITEM_ID_KEYS:
        value = line_item.get(key)
        if value is not None:
            return to_int_id(value)
    return None


class Catalog:
    """Synchronous id lookup for menu items, their categories and the vendor.

    Records are the raw dicts supplied by the catalog store; they are read,
    never mutated.
    """

    def __init__(
        self,
        menu_items: Optional[Iterable[Dict[str, Any]]] = None,
        categories: Optional[Iterable[Dict[str, Any]]] = None,
        vendor: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.vendor = vendor or None
        self._menu_items = self._index(menu_items or [], "menu item")
        self._categories = self._index(categories or [], "category")

    @staticmethod
    def _index(records: Iterable[Dict[str, Any]], kind: str) -> Dict[int, Dict[str, Any]]:
        indexed: Dict[int, Dict[str, Any]] = {}
        for record in records:
            if not isinstance(record, dict):
                continue
            record_id = to_int_id(record.get("id"))
            if record_id is None:
                logger.debug("Skipping %s without a usable id: %r", kind, record.get("id"))
                continue
            indexed[record_id] = record
        return indexed

    def __len__(self) -> int:
        return len(self._menu_items)

    def menu_item(self, item_id: Any) -> Optional[Dict[str, Any]]:
        key = to_int_id(item_id)
        if key is None:
            return None
        return self._menu_items.get(key)

    def category(self, category_id: Any) -> Optional[Dict[str, Any]]:
        key = to_int_id(category_id)
        if key is None:
            return None
        return self._categories.get(key)

    def menu_item_for_line(self, line_item: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        ref = line_item_ref(line_item)
        if ref is None:
            return None
        return self._menu_items.get(ref)

    def category_for(self, menu_item: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not menu_item:
            return None
        return self.category(menu_item.get("categoryId"))
