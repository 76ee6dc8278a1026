# Generated manually for initial Vehiculos models
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("clientes", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Vehiculo",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("placa", models.CharField(max_length=20, unique=True)),
                ("marca", models.CharField(max_length=50)),
                ("modelo", models.CharField(max_length=50)),
                ("anio", models.PositiveIntegerField(blank=True, null=True)),
                ("color", models.CharField(blank=True, max_length=30, null=True)),
                (
                    "tipo_combustible",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("gasolina", "Gasolina"),
                            ("diesel", "Diésel"),
                            ("gas", "Gas"),
                            ("electrico", "Eléctrico"),
                            ("hibrido", "Híbrido"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "transmision",
                    models.CharField(
                        blank=True,
                        choices=[("manual", "Manual"), ("automatica", "Automática")],
                        max_length=20,
                        null=True,
                    ),
                ),
                ("numero_motor", models.CharField(blank=True, max_length=50, null=True)),
                ("numero_chasis", models.CharField(blank=True, max_length=50, null=True)),
                ("notas", models.TextField(blank=True, null=True)),
                ("creado", models.DateTimeField(auto_now_add=True)),
                ("actualizado", models.DateTimeField(auto_now=True)),
                (
                    "cliente",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="vehiculos",
                        to="clientes.cliente",
                    ),
                ),
            ],
            options={
                "verbose_name": "Vehículo",
                "verbose_name_plural": "Vehículos",
                "ordering": ["-creado"],
                "indexes": [models.Index(fields=["cliente"], name="vehiculo_cliente_idx")],
            },
        ),
    ]
