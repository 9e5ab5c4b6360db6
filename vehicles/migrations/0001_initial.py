from django.db import migrations, models

import vehicles.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Vehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("make", models.CharField(max_length=80, verbose_name="Marca")),
                ("model", models.CharField(max_length=80, verbose_name="Modelo")),
                ("year", models.PositiveIntegerField(verbose_name="Año")),
                ("vin", models.CharField(max_length=17, unique=True, verbose_name="VIN")),
                ("price", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Precio")),
                ("mileage", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="Kilometraje")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("En preparación", "En preparación"),
                            ("Disponible", "Disponible"),
                            ("Reservado", "Reservado"),
                            ("Vendido", "Vendido"),
                            ("Comprado", "Comprado"),
                        ],
                        max_length=20,
                        verbose_name="Estado",
                    ),
                ),
                ("color", models.CharField(blank=True, max_length=40, null=True, verbose_name="Color")),
                ("engine", models.CharField(blank=True, max_length=60, null=True, verbose_name="Motor")),
                (
                    "transmission",
                    models.CharField(
                        choices=[("Manual", "Manual"), ("Automática", "Automática")],
                        max_length=20,
                        verbose_name="Transmisión",
                    ),
                ),
                ("features", vehicles.fields.StringListField(verbose_name="Equipamiento")),
                ("condition", models.TextField(blank=True, null=True, verbose_name="Estado mecánico")),
                ("documentation", models.TextField(blank=True, null=True, verbose_name="Documentación")),
                ("entry_date", models.DateField(verbose_name="Fecha de entrada")),
                ("cost", models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Coste")),
                ("image_url", models.CharField(blank=True, max_length=500, null=True, verbose_name="Imagen (URL)")),
                ("images", vehicles.fields.StringListField(verbose_name="Imágenes")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("status__in", ["En preparación", "Disponible", "Reservado", "Vendido", "Comprado"])
                        ),
                        name="vehicle_status_valid",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("transmission__in", ["Manual", "Automática"])),
                        name="vehicle_transmission_valid",
                    ),
                ],
            },
        ),
    ]
