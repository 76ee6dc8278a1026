# Generated manually for initial Oportunidades models
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("clientes", "0001_initial"),
        ("vehiculos", "0001_initial"),
        ("sucursales", "0001_initial"),
        ("servicios", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Oportunidad",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("tipo", models.CharField(max_length=100)),
                ("descripcion", models.TextField()),
                ("fecha_seguimiento", models.DateField()),
                (
                    "estado",
                    models.CharField(
                        choices=[
                            ("pendiente", "Pendiente"),
                            ("contactada", "Contactada"),
                            ("interesada", "Interesada"),
                            ("rechazada", "Rechazada"),
                            ("convertida", "Convertida"),
                        ],
                        default="pendiente",
                        max_length=20,
                    ),
                ),
                ("notas", models.TextField(blank=True, null=True)),
                ("creado", models.DateTimeField(auto_now_add=True)),
                ("actualizado", models.DateTimeField(auto_now=True)),
                (
                    "cliente",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="oportunidades",
                        to="clientes.cliente",
                    ),
                ),
                (
                    "vehiculo",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="oportunidades",
                        to="vehiculos.vehiculo",
                    ),
                ),
                (
                    "servicio",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="oportunidades",
                        to="servicios.servicio",
                    ),
                ),
                (
                    "sucursal",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="oportunidades",
                        to="sucursales.sucursal",
                    ),
                ),
                (
                    "creado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="oportunidades_creadas",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Oportunidad",
                "verbose_name_plural": "Oportunidades",
                "ordering": ["fecha_seguimiento"],
                "indexes": [
                    models.Index(fields=["estado", "fecha_seguimiento"], name="oportunidad_seguimiento_idx"),
                    models.Index(fields=["cliente"], name="oportunidad_cliente_idx"),
                ],
            },
        ),
    ]
