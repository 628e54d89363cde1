"""MongoDB repository for order and menu catalog documents."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pymongo import MongoClient

from ..utils.config import Config
from ..utils.logging import get_logger
from .catalog import to_int_id

logger = get_logger(__name__)


class OrderRepository:
    """Read-only access to orders, menu items, categories and vendors."""

    def __init__(
        self,
        url: Optional[str] = None,
        db_name: Optional[str] = None,
        config: Optional[Config] = None,
    ) -> None:
        config = config or Config(".env")
        self._url = url or config.get("mongo_url")
        self._db = db_name or config.get("mongo_db")
        self._collections = {
            "orders": config.get("orders_collection"),
            "menu_items": config.get("menu_items_collection"),
            "categories": config.get("categories_collection"),
            "vendors": config.get("vendors_collection"),
        }
        if not self._url:
            raise ValueError("DB_CONNECTION_URL is required")
        self._client: Optional[MongoClient] = None

    def __enter__(self) -> "OrderRepository":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    def connect(self) -> None:
        if self._client is None:
            logger.debug("Connecting to MongoDB database %s", self._db)
            self._client = MongoClient(self._url, serverSelectionTimeoutMS=5000)

    def disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _collection(self, name: str):
        if self._client is None:
            self.connect()
        return self._client[self._db][self._collections[name]]

    def get_order(self, order_id: Any) -> Optional[Dict[str, Any]]:
        key = to_int_id(order_id)
        if key is None:
            return None
        return self._collection("orders").find_one({"id": key})

    def get_menu_items(self, vendor_id: Any) -> List[Dict[str, Any]]:
        return list(self._collection("menu_items").find({"vendorId": to_int_id(vendor_id)}))

    def get_categories(self, vendor_id: Any) -> List[Dict[str, Any]]:
        return list(self._collection("categories").find({"vendorId": to_int_id(vendor_id)}))

    def get_vendor(self, vendor_id: Any) -> Optional[Dict[str, Any]]:
        key = to_int_id(vendor_id)
        if key is None:
            return None
        return self._collection("vendors").find_one({"id": key})
