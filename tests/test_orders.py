"""Tests for order adapters and the manual order helpers."""

import json

from gst_cal.tax_calculation.catalog import Catalog, line_item_ref, to_int_id
from gst_cal.tax_calculation.models import EXCLUDE, INCLUDE
from gst_cal.tax_calculation.orders import (
    build_submission_items,
    compute_order,
    parse_order_items,
    preview_manual_order,
)


class TestParseOrderItems:

    def test_list_passthrough_drops_non_dicts(self):
        assert parse_order_items([{"itemId": 1}, "x", None]) == [{"itemId": 1}]

    def test_json_string(self):
        assert parse_order_items('[{"itemId": 1, "quantity": 2}]') == [{"itemId": 1, "quantity": 2}]

    def test_malformed_payloads(self):
        assert parse_order_items("{not json") == []
        assert parse_order_items('{"itemId": 1}') == []
        assert parse_order_items(None) == []
        assert parse_order_items(42) == []


class TestCatalog:

    def test_id_coercion(self):
        assert to_int_id("7") == 7
        assert to_int_id(7.0) == 7
        assert to_int_id(7.5) is None
        assert to_int_id("seven") is None

    def test_line_item_reference_keys(self):
        assert line_item_ref({"itemId": 3, "id": 9}) == 3
        assert line_item_ref({"productId": "5"}) == 5
        assert line_item_ref({"name": "Loose item"}) is None

    def test_lookup(self, menu_items, categories):
        catalog = Catalog(menu_items + [{"name": "no id"}], categories, vendor={"id": 7})
        assert len(catalog) == 4
        assert catalog.menu_item(1)["name"] == "Paneer Tikka"
        assert catalog.category_for(catalog.menu_item("2"))["name"] == "Beverages"
        assert catalog.menu_item(None) is None
        assert catalog.category_for(None) is None
        assert catalog.vendor == {"id": 7}


class TestComputeOrder:

    def test_pipeline_on_persisted_order(self, sample_order, menu_items, categories):
        result = compute_order(sample_order, Catalog(menu_items, categories))
        paneer, chai = result.lines
        assert (paneer.base_subtotal, paneer.gst_amount, paneer.line_total) == (200.0, 10.0, 210.0)
        assert paneer.gst_mode == EXCLUDE
        assert (chai.base_subtotal, chai.gst_amount, chai.line_total) == (100.0, 5.0, 105.0)
        assert chai.gst_mode == INCLUDE
        assert result.totals.computed_total == 315.0
        assert result.totals.round_off == 0.0
        assert result.totals.gst_included == 5.0
        assert result.totals.gst_separate == 10.0

    def test_reprint_reproduces_same_numbers(self, sample_order, menu_items, categories):
        catalog = Catalog(menu_items, categories)
        first = compute_order(sample_order, catalog)
        reprint = dict(sample_order, items=json.dumps(
            [dict(raw, **line.supplied_fields()) for raw, line in zip(parse_order_items(sample_order["items"]), first.lines)]
        ))
        assert compute_order(reprint, catalog) == compute_order(reprint, catalog)
        assert compute_order(reprint, catalog).lines == first.lines

    def test_without_catalog(self):
        result = compute_order({"id": 1, "items": [{"price": 50, "quantity": 2}], "totalAmount": 100})
        assert result.totals.final_total == 100.0
        assert result.to_dict()["items"][0]["lineTotal"] == 100.0


class TestManualOrder:

    def test_preview_running_total(self, menu_items, categories):
        selections = [
            {"itemId": 1, "quantity": 2},
            {"itemId": "2", "quantity": 1},
            {"itemId": 4, "quantity": 1},
            {"itemId": 999, "quantity": 3},
        ]
        preview = preview_manual_order(selections, Catalog(menu_items, categories))
        assert [line.name for line in preview.lines] == ["Paneer Tikka", "Masala Chai"]
        assert preview.totals.final_total == 315.0

    def test_submission_items_carry_resolved_tax(self, menu_items, categories):
        items = build_submission_items(
            [{"itemId": 2, "quantity": 3}, {"itemId": 3, "quantity": "0"}],
            Catalog(menu_items, categories),
        )
        assert items == [
            {"itemId": 2, "name": "Masala Chai", "quantity": 3, "price": 105.0,
             "subtotal": 315.0, "gstRate": 5.0, "gstMode": "include"},
            {"itemId": 3, "name": "Mineral Water", "quantity": 1, "price": 20.0,
             "subtotal": 20.0, "gstRate": 0.0, "gstMode": "exclude"},
        ]

    def test_submitted_items_reconcile_on_reprint(self, menu_items, categories):
        catalog = Catalog(menu_items, categories)
        selections = [{"itemId": 1, "quantity": 2}, {"itemId": 2, "quantity": 1}]
        preview = preview_manual_order(selections, catalog)
        order = {"id": 5, "items": build_submission_items(selections, catalog), "totalAmount": preview.totals.final_total}
        reprint = compute_order(order, catalog)
        assert reprint.lines == preview.lines
        assert reprint.totals.round_off == 0.0
