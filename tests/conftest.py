"""
Pytest configuration and shared fixtures for GST Cal tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


@pytest.fixture
def menu_items():
    """Menu items as stored by the catalog store."""
    return [
        {"id": 1, "categoryId": 10, "name": "Paneer Tikka", "price": "100.00", "gstRate": "5.00", "gstMode": "exclude"},
        {"id": 2, "categoryId": 20, "name": "Masala Chai", "price": "105.00", "gstRate": "0", "gstMode": None},
        {"id": 3, "categoryId": 30, "name": "Mineral Water", "price": "20.00", "gstRate": "0.00"},
        {"id": 4, "categoryId": 10, "name": "Seasonal Special", "price": "250.00", "isAvailable": False},
    ]


@pytest.fixture
def categories():
    return [
        {"id": 10, "name": "Starters", "gstRate": "18.00", "gstMode": "exclude"},
        {"id": 20, "name": "Beverages", "gstRate": "5.00", "gstMode": "include"},
        {"id": 30, "name": "Packaged", "gstRate": "0.00", "gstMode": "exclude"},
    ]


@pytest.fixture
def sample_order():
    """Order document with items persisted as a JSON string."""
    return {
        "id": 1042,
        "vendorId": 7,
        "totalAmount": "315.00",
        "items": (
            '[{"itemId": 1, "name": "Paneer Tikka", "quantity": 2, "price": 100},'
            ' {"itemId": 2, "name": "Masala Chai", "quantity": 1, "price": 105}]'
        ),
    }
