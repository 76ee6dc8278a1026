from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Mecanico(models.Model):
    nombre = models.CharField(max_length=100)
    telefono = models.CharField(max_length=20, blank=True, null=True)
    porcentaje_comision = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))],
        help_text='Porcentaje del monto total del servicio que corresponde al mecánico',
    )
    activo = models.BooleanField(default=True)
    sucursal = models.ForeignKey(
        'sucursales.Sucursal',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='mecanicos'
    )
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['nombre']
        verbose_name = 'Mecánico'
        verbose_name_plural = 'Mecánicos'

    def __str__(self):
        return self.nombre

    def tiene_servicios_activos(self) -> bool:
        from servicios.models import EstadoTrabajo
        return self.servicios.exclude(estado__tipo__in=EstadoTrabajo.TIPOS_FINALES).exists()
