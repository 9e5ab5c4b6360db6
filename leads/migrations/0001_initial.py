from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Lead",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120, verbose_name="Nombre")),
                ("email", models.EmailField(blank=True, max_length=254, null=True, verbose_name="Email")),
                ("phone", models.CharField(blank=True, max_length=30, null=True, verbose_name="Teléfono")),
                ("source", models.CharField(blank=True, max_length=60, null=True, verbose_name="Origen")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Nuevo", "Nuevo"),
                            ("Contactado", "Contactado"),
                            ("Seguimiento", "Seguimiento"),
                            ("Perdido", "Perdido"),
                            ("Convertido", "Convertido"),
                        ],
                        default="Nuevo",
                        max_length=20,
                        verbose_name="Estado",
                    ),
                ),
                ("assigned_to", models.CharField(blank=True, max_length=80, null=True, verbose_name="Asignado a")),
                ("notes", models.TextField(blank=True, null=True, verbose_name="Notas")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("status__in", ["Nuevo", "Contactado", "Seguimiento", "Perdido", "Convertido"])
                        ),
                        name="lead_status_valid",
                    ),
                ],
            },
        ),
    ]
