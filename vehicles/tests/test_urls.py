from django.test import SimpleTestCase
from django.urls import reverse, resolve
from vehicles.views import reports_view, vehicle_detail_view, vehicle_list_view


class VehiclesURLsTests(SimpleTestCase):
    """
    Testes unitários para o roteamento (URLs) do app `vehicles`.

    Como testamos apenas o roteamento (sem banco de dados), usamos
    `SimpleTestCase` em vez de `TestCase`.
    """

    def test_vehicle_list_named_url_resolves(self):
        url = reverse("vehicle_list")
        self.assertEqual(url, "/vehicles/")
        self.assertEqual(resolve(url).func, vehicle_list_view)

    def test_vehicle_detail_named_url_resolves(self):
        url = reverse("vehicle_detail", args=[7])
        resolver = resolve(url)
        self.assertEqual(resolver.func, vehicle_detail_view)
        self.assertEqual(resolver.kwargs, {"vehicle_id": 7})

    def test_reports_named_url_resolves(self):
        self.assertEqual(resolve(reverse("vehicle_reports")).func, reports_view)
