import unittest
import sys
import os
from datetime import date, datetime

# Add the parent directory to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chat_insights.models import FilterSpec, Status
from chat_insights.processing import (
    apply_filters,
    clear_filters,
    filter_by_date_range,
    filter_by_date_preset,
    filter_by_status,
    filter_by_product,
    filter_by_client,
    filter_by_search_text,
    filter_chats_by_date_range,
    get_active_filters_description,
    has_active_filters,
)
from chat_insights.utils.clock import FixedClock

from fixtures import make_conversation, human, ai


class FilterTestCase(unittest.TestCase):

    def setUp(self):
        self.clock = FixedClock(datetime(2024, 3, 20, 12, 0))
        self.today = make_conversation(
            "today", datetime(2024, 3, 20, 8, 0), Status.GANADA, products=["Leviton"],
            client_name="Ana Rojas", client_phone="56911111111",
            messages=[human("Necesito enchufes"), ai("Tenemos Leviton")],
        )
        self.yesterday = make_conversation(
            "yesterday", datetime(2024, 3, 19, 23, 30), Status.ABIERTA, products=["ABB", "Schneider"],
            client_name="Beto Soto", client_phone="56922222222",
            messages=[human("Hola"), ai("Le ofrezco un tablero")],
        )
        self.last_week = make_conversation(
            "last_week", datetime(2024, 3, 14, 10, 0), Status.PERDIDA,
            client_name="Desconocido", client_phone="Sin teléfono",
        )
        self.old = make_conversation("old", datetime(2023, 12, 1, 10, 0), Status.PENDIENTE)
        self.conversations = [self.today, self.yesterday, self.last_week, self.old]


class TestApplyFilters(FilterTestCase):

    def test_neutral_filters_return_input(self):
        self.assertEqual(apply_filters(self.conversations, clear_filters()), self.conversations)
        self.assertEqual(apply_filters(self.conversations, None), self.conversations)
        self.assertEqual(apply_filters(self.conversations, {}), self.conversations)

    def test_returns_new_list(self):
        result = apply_filters(self.conversations, clear_filters())
        self.assertIsNot(result, self.conversations)

    def test_none_input(self):
        self.assertEqual(apply_filters(None, {"status": "GANADA"}), [])

    def test_combined_filters(self):
        filters = FilterSpec(date_preset="7days", status="ABIERTA", product="abb")
        self.assertEqual(apply_filters(self.conversations, filters, self.clock), [self.yesterday])

    def test_camel_case_dict(self):
        filters = {"datePreset": "7days", "status": "TODAS", "searchText": "leviton"}
        self.assertEqual(apply_filters(self.conversations, filters, self.clock), [self.today])

    def test_preset_and_range_both_apply(self):
        filters = FilterSpec(date_preset="today", start_date="2024-03-01", end_date="2024-03-19")
        self.assertEqual(apply_filters(self.conversations, filters, self.clock), [])

    def test_status_filter_is_idempotent(self):
        filters = FilterSpec(status="PERDIDA")
        once = apply_filters(self.conversations, filters)
        twice = apply_filters(once, filters)
        self.assertEqual(once, twice)
        self.assertEqual(once, [self.last_week])

    def test_unknown_keys_are_ignored(self):
        self.assertEqual(apply_filters(self.conversations, {"color": "red"}), self.conversations)


class TestPredicates(FilterTestCase):

    def test_date_range_includes_whole_days(self):
        result = filter_by_date_range(self.conversations, "2024-03-19", "2024-03-20")
        self.assertEqual(result, [self.today, self.yesterday])
        result = filter_by_date_range(self.conversations, date(2024, 3, 14), None)
        self.assertEqual(result, [self.today, self.yesterday, self.last_week])
        result = filter_by_date_range(self.conversations, None, "2024-03-14")
        self.assertEqual(result, [self.last_week, self.old])

    def test_presets(self):
        self.assertEqual(filter_by_date_preset(self.conversations, "today", self.clock), [self.today])
        self.assertEqual(filter_by_date_preset(self.conversations, "yesterday", self.clock), [self.yesterday])
        self.assertEqual(filter_by_date_preset(self.conversations, "7days", self.clock),
                         [self.today, self.yesterday, self.last_week])
        self.assertEqual(len(filter_by_date_preset(self.conversations, "90days", self.clock)), 3)

    def test_unknown_preset_is_noop(self):
        self.assertEqual(filter_by_date_preset(self.conversations, "decade", self.clock), self.conversations)

    def test_status(self):
        self.assertEqual(filter_by_status(self.conversations, "GANADA"), [self.today])
        self.assertEqual(filter_by_status(self.conversations, Status.ABIERTA), [self.yesterday])
        self.assertEqual(filter_by_status(self.conversations, "TODAS"), self.conversations)

    def test_product_substring(self):
        self.assertEqual(filter_by_product(self.conversations, "schnei"), [self.yesterday])
        self.assertEqual(filter_by_product(self.conversations, "Osram"), [])

    def test_client_name_or_phone(self):
        self.assertEqual(filter_by_client(self.conversations, "rojas"), [self.today])
        self.assertEqual(filter_by_client(self.conversations, "5692222"), [self.yesterday])

    def test_search_text_fields(self):
        self.assertEqual(filter_by_search_text(self.conversations, "ENCHUFES"), [self.today])
        self.assertEqual(filter_by_search_text(self.conversations, "tablero"), [self.yesterday])
        self.assertEqual(filter_by_search_text(self.conversations, "beto"), [self.yesterday])
        self.assertEqual(filter_by_search_text(self.conversations, "sin tel"), [self.last_week])
        self.assertEqual(filter_by_search_text(self.conversations, "xyz-no-match"), [])

    def test_exact_date_range(self):
        start = datetime(2024, 3, 19, 23, 30)
        end = datetime(2024, 3, 20, 8, 0)
        self.assertEqual(filter_chats_by_date_range(self.conversations, start, end), [self.today, self.yesterday])
        self.assertEqual(filter_chats_by_date_range(self.conversations, start, None), self.conversations)


class TestFilterHelpers(unittest.TestCase):

    def test_clear_filters(self):
        filters = clear_filters()
        self.assertEqual(filters.status, "TODAS")
        self.assertEqual(filters.date_preset, "")
        self.assertIsNone(filters.start_date)
        self.assertFalse(has_active_filters(filters))

    def test_active_filters_description(self):
        filters = FilterSpec(date_preset="7days", start_date="2024-03-01", end_date="2024-03-10",
                             status="GANADA", product="ABB", client="Ana", search_text="tablero")
        self.assertEqual(get_active_filters_description(filters), [
            "Últimos 7 días",
            "Rango: 2024-03-01 - 2024-03-10",
            "Estado: GANADA",
            "Producto: ABB",
            "Cliente: Ana",
            'Búsqueda: "tablero"',
        ])
        self.assertTrue(has_active_filters(filters))

    def test_single_bound_description(self):
        self.assertEqual(get_active_filters_description({"startDate": "2024-03-01"}), ["Desde: 2024-03-01"])
        self.assertEqual(get_active_filters_description({"endDate": "2024-03-01"}), ["Hasta: 2024-03-01"])

    def test_has_active_filters(self):
        self.assertFalse(has_active_filters(None))
        self.assertFalse(has_active_filters({"status": "TODAS"}))
        self.assertTrue(has_active_filters({"status": "PERDIDA"}))

    def test_filter_spec_round_trip_keys(self):
        spec = FilterSpec.from_dict({"searchText": "x", "status": None, "product": None})
        self.assertEqual(spec.search_text, "x")
        self.assertEqual(spec.status, "TODAS")
        self.assertEqual(spec.product, "")
        self.assertEqual(spec.to_dict()["searchText"], "x")

    def test_with_value(self):
        spec = FilterSpec().with_value("searchText", "abc").with_value("status", "GANADA")
        self.assertEqual((spec.search_text, spec.status), ("abc", "GANADA"))
        with self.assertRaises(ValueError):
            FilterSpec().with_value("color", "red")


if __name__ == "__main__":
    unittest.main()
