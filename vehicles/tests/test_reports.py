from datetime import date
from decimal import Decimal

from django.core.cache import cache
from django.test import TestCase

from vehicles.models import Vehicle
from vehicles.reports import compute_vehicle_report, get_vehicle_report_data


class VehicleReportTests(TestCase):
    """
    Agregados do inventário: total, contagem por status e médias apenas do
    que ainda está em estoque (Disponible, Reservado, En preparación).
    """

    def setUp(self):
        cache.clear()
        self.addCleanup(cache.clear)

    def _create(self, vin, status, price, mileage):
        return Vehicle.objects.create(
            make="Seat", model="León", year=2020, vin=vin, price=Decimal(price),
            mileage=Decimal(mileage), status=status, transmission="Manual",
            entry_date=date(2024, 1, 1),
        )

    def test_empty_inventory(self):
        report = compute_vehicle_report()
        self.assertEqual(report.total_vehicles, 0)
        self.assertEqual(report.vehicles_by_status, {})
        self.assertIsNone(report.average_price)
        self.assertIsNone(report.average_mileage)

    def test_aggregates_only_in_stock_for_averages(self):
        self._create("VSSZZZ5FZNR000001", "Disponible", "10000", "20000")
        self._create("VSSZZZ5FZNR000002", "Reservado", "20000", "40000")
        self._create("VSSZZZ5FZNR000003", "Vendido", "90000", "0")

        report = compute_vehicle_report()
        self.assertEqual(report.total_vehicles, 3)
        self.assertEqual(report.vehicles_by_status, {"Disponible": 1, "Reservado": 1, "Vendido": 1})
        self.assertEqual(report.average_price, 15000.0)
        self.assertEqual(report.average_mileage, 30000.0)

    def test_cached_until_invalidated(self):
        self.assertEqual(get_vehicle_report_data().total_vehicles, 0)
        self._create("VSSZZZ5FZNR000001", "Disponible", "10000", "20000")
        # ORM direto não invalida: continua o valor em cache
        self.assertEqual(get_vehicle_report_data().total_vehicles, 0)
        cache.delete("reports")
        self.assertEqual(get_vehicle_report_data().total_vehicles, 1)
