# leads/models.py
from django.db import models
from django.db.models import Q


class LeadStatus(models.TextChoices):
    NUEVO = "Nuevo", "Nuevo"
    CONTACTADO = "Contactado", "Contactado"
    SEGUIMIENTO = "Seguimiento", "Seguimiento"
    PERDIDO = "Perdido", "Perdido"
    CONVERTIDO = "Convertido", "Convertido"


class Lead(models.Model):
    name = models.CharField("Nombre", max_length=120)
    email = models.EmailField("Email", blank=True, null=True)
    phone = models.CharField("Teléfono", max_length=30, blank=True, null=True)
    source = models.CharField("Origen", max_length=60, blank=True, null=True)    # ex: Web, Coches.net
    status = models.CharField("Estado", max_length=20, choices=LeadStatus.choices, default=LeadStatus.NUEVO)
    assigned_to = models.CharField("Asignado a", max_length=80, blank=True, null=True)
    notes = models.TextField("Notas", blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(status__in=LeadStatus.values),
                name="lead_status_valid",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.status})"
