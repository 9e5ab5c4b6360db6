from datetime import date

from django.db import IntegrityError, connection, transaction
from django.test import TestCase
from vehicles.models import Vehicle


class VehicleModelTests(TestCase):
    """
    Testes unitários para o modelo Vehicle.

    Objetivo:
    - Garantir que o comportamento do modelo (campos, constraints e ordenação)
      está funcionando corretamente.
    - Cobrir __str__, unicidade do VIN, CHECK dos enums e a serialização
      das listas (features/images).
    """

    def setUp(self):
        """
        Cria um veículo base (Toyota Corolla 2021) para ser usado nos testes.
        """
        self.v1 = Vehicle.objects.create(
            make="Toyota",
            model="Corolla",
            year=2021,
            vin="9BWZZZ377VT004251",
            price="15000.00",
            mileage="30000",
            status="Disponible",
            transmission="Automática",
            features=["GPS", "Cuero", "GPS"],
            entry_date=date(2024, 3, 1),
        )

    def _create(self, **overrides):
        fields = dict(
            make="Seat",
            model="Ibiza",
            year=2019,
            vin="VSSZZZ6JZKR000001",
            price="9000.00",
            mileage="60000",
            status="Disponible",
            transmission="Manual",
            entry_date=date(2024, 5, 1),
        )
        fields.update(overrides)
        return Vehicle.objects.create(**fields)

    def test_str_representation(self):
        """
        O método __str__ deve retornar "<marca> <modelo> <ano>".
        """
        self.assertEqual(str(self.v1), "Toyota Corolla 2021")

    def test_created_at_ordering_desc(self):
        """
        Meta.ordering = ["-created_at", ...]: o mais recente vem primeiro.
        """
        v2 = self._create()
        first = Vehicle.objects.all().first()
        self.assertEqual(first.id, v2.id)

    def test_vin_unique_constraint(self):
        """
        O VIN é único no banco: repetir dispara IntegrityError.
        """
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                self._create(vin="9BWZZZ377VT004251")

    def test_status_check_constraint(self):
        """
        Status fora da enumeração é barrado pelo CHECK do banco.
        """
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                self._create(status="Robado")

    def test_transmission_check_constraint(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                self._create(transmission="CVT")

    def test_lists_round_trip_in_order_with_duplicates(self):
        """
        features volta como lista, na mesma ordem e sem deduplicar.
        """
        v = Vehicle.objects.get(pk=self.v1.pk)
        self.assertEqual(v.features, ["GPS", "Cuero", "GPS"])
        self.assertEqual(v.images, [])

    def test_empty_list_is_stored_as_json_not_null(self):
        """
        Lista vazia precisa ser gravada como "[]" (nunca NULL).
        """
        with connection.cursor() as cursor:
            cursor.execute("SELECT features, images FROM vehicles_vehicle WHERE id = %s", [self.v1.pk])
            features, images = cursor.fetchone()
        self.assertEqual(features, '["GPS", "Cuero", "GPS"]')
        self.assertEqual(images, "[]")

    def test_malformed_list_text_reads_as_empty(self):
        """
        Texto corrompido na coluna não quebra a leitura: vira [].
        """
        with connection.cursor() as cursor:
            cursor.execute("UPDATE vehicles_vehicle SET images = %s WHERE id = %s", ["not-json", self.v1.pk])
        v = Vehicle.objects.get(pk=self.v1.pk)
        self.assertEqual(v.images, [])

    def test_primary_image_prefers_sequence_then_fallback(self):
        self.assertIsNone(self.v1.primary_image)
        self.v1.image_url = "https://cdn.example.com/a.jpg"
        self.assertEqual(self.v1.primary_image, "https://cdn.example.com/a.jpg")
        self.v1.images = ["/uploads/vehicles/x.jpg", "/uploads/vehicles/y.jpg"]
        self.assertEqual(self.v1.primary_image, "/uploads/vehicles/x.jpg")

    def test_cost_absent_is_null(self):
        self.assertIsNone(Vehicle.objects.get(pk=self.v1.pk).cost)
