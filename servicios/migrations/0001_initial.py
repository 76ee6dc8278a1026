# Generated manually for initial Servicios models
import decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _monto():
    return models.DecimalField(
        decimal_places=2,
        default=decimal.Decimal("0.00"),
        max_digits=12,
        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0"))],
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("clientes", "0001_initial"),
        ("vehiculos", "0001_initial"),
        ("mecanicos", "0001_initial"),
        ("sucursales", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="EstadoTrabajo",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nombre", models.CharField(max_length=50, unique=True)),
                (
                    "color",
                    models.CharField(
                        default="#6B7280",
                        max_length=7,
                        validators=[
                            django.core.validators.RegexValidator(
                                "^#[0-9A-Fa-f]{6}$", "El color debe tener formato hexadecimal #RRGGBB"
                            )
                        ],
                    ),
                ),
                ("orden", models.PositiveIntegerField(unique=True)),
                (
                    "tipo",
                    models.CharField(
                        choices=[
                            ("recibido", "Recibido"),
                            ("cotizado", "Cotizado"),
                            ("en_proceso", "En proceso"),
                            ("terminado", "Terminado"),
                            ("rechazado", "Rechazado"),
                            ("otro", "Otro"),
                        ],
                        default="otro",
                        max_length=20,
                    ),
                ),
                ("creado", models.DateTimeField(auto_now_add=True)),
                ("actualizado", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Estado de trabajo",
                "verbose_name_plural": "Estados de trabajo",
                "ordering": ["orden"],
            },
        ),
        migrations.CreateModel(
            name="Servicio",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("descripcion_problema", models.TextField(blank=True, null=True)),
                ("diagnostico", models.TextField(blank=True, null=True)),
                ("detalle_cotizacion", models.TextField(blank=True, null=True)),
                ("precio_mano_obra", _monto()),
                ("precio_repuestos", _monto()),
                ("costo_repuestos", _monto()),
                ("monto_total", _monto()),
                ("truput", _monto()),
                ("comision_mecanico", _monto()),
                ("kilometraje", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "nivel_combustible",
                    models.CharField(
                        blank=True,
                        choices=[("1/4", "1/4"), ("1/2", "1/2"), ("3/4", "3/4"), ("FULL", "Lleno")],
                        max_length=4,
                        null=True,
                    ),
                ),
                ("luces_ok", models.BooleanField(default=True)),
                ("llantas_ok", models.BooleanField(default=True)),
                ("cristales_ok", models.BooleanField(default=True)),
                ("carroceria_ok", models.BooleanField(default=True)),
                ("observaciones_recepcion", models.TextField(blank=True, null=True)),
                ("firma_cliente", models.TextField(blank=True, null=True)),
                ("fotos_recepcion", models.JSONField(blank=True, default=list)),
                ("fecha_recepcion", models.DateTimeField(blank=True, null=True)),
                ("fecha_inicio", models.DateTimeField(blank=True, null=True)),
                ("fecha_fin", models.DateTimeField(blank=True, null=True)),
                ("creado", models.DateTimeField(auto_now_add=True)),
                ("actualizado", models.DateTimeField(auto_now=True)),
                (
                    "cliente",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="servicios",
                        to="clientes.cliente",
                    ),
                ),
                (
                    "vehiculo",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="servicios",
                        to="vehiculos.vehiculo",
                    ),
                ),
                (
                    "mecanico",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="servicios",
                        to="mecanicos.mecanico",
                    ),
                ),
                (
                    "estado",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="servicios",
                        to="servicios.estadotrabajo",
                    ),
                ),
                (
                    "sucursal",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="servicios",
                        to="sucursales.sucursal",
                    ),
                ),
                (
                    "recibido_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="servicios_recibidos",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "creado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="servicios_creados",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-creado"],
                "indexes": [
                    models.Index(fields=["cliente"], name="servicio_cliente_idx"),
                    models.Index(fields=["vehiculo"], name="servicio_vehiculo_idx"),
                    models.Index(fields=["estado"], name="servicio_estado_idx"),
                    models.Index(fields=["sucursal", "creado"], name="servicio_sucursal_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="RegistroEstado",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("notas", models.TextField(blank=True, null=True)),
                ("creado", models.DateTimeField(auto_now_add=True)),
                (
                    "servicio",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="registros_estado",
                        to="servicios.servicio",
                    ),
                ),
                (
                    "estado_anterior",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registros_salida",
                        to="servicios.estadotrabajo",
                    ),
                ),
                (
                    "estado_nuevo",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="registros_entrada",
                        to="servicios.estadotrabajo",
                    ),
                ),
                (
                    "cambiado_por",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="cambios_estado",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Registro de estado",
                "verbose_name_plural": "Registros de estado",
                "ordering": ["-creado"],
            },
        ),
    ]
