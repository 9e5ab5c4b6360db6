from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import patch

from django.db import DEFAULT_DB_ALIAS, OperationalError, connection, connections
from django.test import TestCase
from django.utils import timezone

from vehicles.exceptions import ConstraintViolation, DuplicateKey, StorageUnavailable
from vehicles.store import VehicleStore
from vehicles.tests.utils import VIN


def record(**overrides):
    values = {
        "make": "Toyota",
        "model": "Corolla",
        "year": 2023,
        "vin": VIN,
        "price": Decimal("15000"),
        "mileage": Decimal("50000"),
        "status": "Disponible",
        "transmission": "Manual",
        "entry_date": date(2024, 1, 15),
        "features": ["GPS", "Bluetooth"],
        "images": [],
    }
    values.update(overrides)
    return values


class VehicleStoreTests(TestCase):
    """
    Testes do motor de armazenamento (vehicles.store.VehicleStore).

    Cobrimos:
      - insert/get/update/delete e seus retornos booleanos,
      - mapeamento de IntegrityError -> DuplicateKey / ConstraintViolation,
      - atualização automática de updated_at,
      - open() idempotente e falha -> StorageUnavailable.
    """

    def setUp(self):
        self.store = VehicleStore()

    def test_insert_returns_id_and_round_trips_lists(self):
        vehicle_id = self.store.insert(record())
        v = self.store.get_by_id(vehicle_id)

        self.assertIsNotNone(v)
        self.assertEqual(v.features, ["GPS", "Bluetooth"])
        self.assertEqual(v.images, [])
        self.assertIsNone(v.cost)
        self.assertIsNotNone(v.created_at)
        self.assertIsNotNone(v.updated_at)

    def test_get_by_id_absent_is_none(self):
        self.assertIsNone(self.store.get_by_id(999))

    def test_get_all_most_recent_first(self):
        older = self.store.insert(record())
        newer = self.store.insert(record(vin="WVWZZZ1JZXW000001"))
        self.assertEqual([v.id for v in self.store.get_all()], [newer, older])

    def test_duplicate_vin_differing_only_in_case(self):
        """
        O VIN é normalizado para maiúsculas antes de gravar, então a variação
        em minúsculas colide com o existente -> DuplicateKey.
        """
        self.store.insert(record())
        with self.assertRaises(DuplicateKey) as ctx:
            self.store.insert(record(vin=VIN.lower(), make="Honda"))
        self.assertEqual(ctx.exception.field, "vin")
        self.assertEqual(len(self.store.get_all()), 1)

    def test_enum_outside_allowed_set_is_constraint_violation(self):
        with self.assertRaises(ConstraintViolation):
            self.store.insert(record(status="Robado"))
        self.assertEqual(self.store.get_all(), [])

    def test_update_applies_only_supplied_fields(self):
        vehicle_id = self.store.insert(record(color="Rojo"))
        self.assertTrue(self.store.update(vehicle_id, {"status": "Reservado", "features": ["Techo solar"]}))

        v = self.store.get_by_id(vehicle_id)
        self.assertEqual(v.status, "Reservado")
        self.assertEqual(v.features, ["Techo solar"])
        self.assertEqual(v.color, "Rojo")

    def test_update_missing_row_returns_false(self):
        self.assertFalse(self.store.update(12345, {"status": "Vendido"}))

    def test_update_with_nothing_returns_false(self):
        vehicle_id = self.store.insert(record())
        self.assertFalse(self.store.update(vehicle_id, {}))

    def test_update_refreshes_updated_at(self):
        vehicle_id = self.store.insert(record())
        before = self.store.get_by_id(vehicle_id).updated_at
        later = timezone.now() + timedelta(minutes=5)

        with patch("vehicles.store.timezone.now", return_value=later):
            self.store.update(vehicle_id, {"price": Decimal("14000")})

        self.assertEqual(self.store.get_by_id(vehicle_id).updated_at, later)
        self.assertGreater(later, before)

    def test_update_to_existing_vin_is_duplicate(self):
        self.store.insert(record())
        other = self.store.insert(record(vin="WVWZZZ1JZXW000001"))
        with self.assertRaises(DuplicateKey):
            self.store.update(other, {"vin": VIN})

    def test_update_bad_enum_is_constraint_violation(self):
        vehicle_id = self.store.insert(record())
        with self.assertRaises(ConstraintViolation):
            self.store.update(vehicle_id, {"transmission": "CVT"})

    def test_unknown_fields_are_rejected(self):
        with self.assertRaises(ValueError):
            self.store.insert(record(created_at=timezone.now()))

    def test_delete_reports_whether_a_row_was_removed(self):
        vehicle_id = self.store.insert(record())
        self.assertTrue(self.store.delete(vehicle_id))
        self.assertFalse(self.store.delete(vehicle_id))

    def test_open_is_idempotent(self):
        self.store.open()
        self.store.open()
        self.assertIn("vehicles_vehicle", connection.introspection.table_names())

    def test_open_failure_raises_storage_unavailable(self):
        with patch.object(connections[DEFAULT_DB_ALIAS], "ensure_connection", side_effect=OperationalError("unable to open database file")):
            with self.assertLogs("vehicles.store", level="ERROR"):
                with self.assertRaises(StorageUnavailable):
                    self.store.open()
