# vehicles/models.py
from django.db import models
from django.db.models import Q

from .fields import StringListField


class VehicleStatus(models.TextChoices):
    EN_PREPARACION = "En preparación", "En preparación"
    DISPONIBLE = "Disponible", "Disponible"
    RESERVADO = "Reservado", "Reservado"
    VENDIDO = "Vendido", "Vendido"
    COMPRADO = "Comprado", "Comprado"


class Transmission(models.TextChoices):
    MANUAL = "Manual", "Manual"
    AUTOMATICA = "Automática", "Automática"


# Status que ainda contam como estoque nos relatórios
IN_STOCK_STATUSES = (
    VehicleStatus.DISPONIBLE,
    VehicleStatus.RESERVADO,
    VehicleStatus.EN_PREPARACION,
)


class Vehicle(models.Model):
    make = models.CharField("Marca", max_length=80)
    model = models.CharField("Modelo", max_length=80)
    year = models.PositiveIntegerField("Año")
    vin = models.CharField("VIN", max_length=17, unique=True)
    price = models.DecimalField("Precio", max_digits=12, decimal_places=2)
    mileage = models.DecimalField("Kilometraje", max_digits=12, decimal_places=2)
    status = models.CharField("Estado", max_length=20, choices=VehicleStatus.choices)
    color = models.CharField("Color", max_length=40, blank=True, null=True)
    engine = models.CharField("Motor", max_length=60, blank=True, null=True)      # ex: 1.6 TDI
    transmission = models.CharField("Transmisión", max_length=20, choices=Transmission.choices)
    features = StringListField("Equipamiento")                                     # '["GPS", "Cuero"]'
    condition = models.TextField("Estado mecánico", blank=True, null=True)
    documentation = models.TextField("Documentación", blank=True, null=True)
    entry_date = models.DateField("Fecha de entrada")
    cost = models.DecimalField("Coste", max_digits=12, decimal_places=2, blank=True, null=True)
    image_url = models.CharField("Imagen (URL)", max_length=500, blank=True, null=True)
    images = StringListField("Imágenes")                                           # '["/uploads/vehicles/..."]'
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(status__in=VehicleStatus.values),
                name="vehicle_status_valid",
            ),
            models.CheckConstraint(
                condition=Q(transmission__in=Transmission.values),
                name="vehicle_transmission_valid",
            ),
        ]

    def __str__(self):
        return f"{self.make} {self.model} {self.year}"

    @property
    def primary_image(self):
        """Primeira imagem da sequência ou, na falta, a URL avulsa."""
        if self.images:
            return self.images[0]
        return self.image_url or None
