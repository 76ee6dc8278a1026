from django.conf import settings
from django.db import models

from clientes.models import Cliente
from vehiculos.models import Vehiculo


class Oportunidad(models.Model):
    """Trabajo sugerido a un cliente para hacerle seguimiento (venta futura)."""
    ESTADOS = [
        ('pendiente', 'Pendiente'),
        ('contactada', 'Contactada'),
        ('interesada', 'Interesada'),
        ('rechazada', 'Rechazada'),
        ('convertida', 'Convertida'),
    ]

    cliente = models.ForeignKey(Cliente, on_delete=models.PROTECT, related_name='oportunidades')
    vehiculo = models.ForeignKey(Vehiculo, on_delete=models.CASCADE, related_name='oportunidades')
    servicio = models.ForeignKey(
        'servicios.Servicio',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='oportunidades'
    )
    sucursal = models.ForeignKey(
        'sucursales.Sucursal',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='oportunidades'
    )
    tipo = models.CharField(max_length=100)
    descripcion = models.TextField()
    fecha_seguimiento = models.DateField()
    estado = models.CharField(max_length=20, choices=ESTADOS, default='pendiente')
    notas = models.TextField(blank=True, null=True)
    creado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='oportunidades_creadas'
    )
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['fecha_seguimiento']
        verbose_name = 'Oportunidad'
        verbose_name_plural = 'Oportunidades'
        indexes = [
            models.Index(fields=['estado', 'fecha_seguimiento'], name='oportunidad_seguimiento_idx'),
            models.Index(fields=['cliente'], name='oportunidad_cliente_idx'),
        ]

    def __str__(self):
        return f"{self.tipo} - {self.vehiculo.placa}"
