from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from vehicles.models import Vehicle
from vehicles.tests.utils import TempMediaMixin


class SeedVehiclesCommandTests(TempMediaMixin, TestCase):
    """
    O comando `seed_vehicles` cria N veículos válidos pelo VehicleService.
    """

    def test_creates_requested_amount(self):
        out = StringIO()
        call_command("seed_vehicles", "--n", "5", stdout=out)

        self.assertEqual(Vehicle.objects.count(), 5)
        self.assertIn("Vehículos creados: 5", out.getvalue())
        for v in Vehicle.objects.all():
            self.assertEqual(len(v.vin), 17)
            self.assertIsInstance(v.features, list)
