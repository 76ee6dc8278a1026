from django.conf import settings
from django.db import models
from django.utils import timezone

from clientes.models import Cliente
from vehiculos.models import Vehiculo


class Cita(models.Model):
    ESTADOS = [
        ('programada', 'Programada'),
        ('confirmada', 'Confirmada'),
        ('en_progreso', 'En progreso'),
        ('recibida', 'Vehículo recibido'),
        ('completada', 'Completada'),
        ('cancelada', 'Cancelada'),
    ]
    # Citas que bloquean la eliminación de clientes y vehículos
    ESTADOS_ACTIVOS = ['programada', 'confirmada', 'en_progreso']

    cliente = models.ForeignKey(Cliente, on_delete=models.PROTECT, related_name='citas')
    vehiculo = models.ForeignKey(Vehiculo, on_delete=models.CASCADE, related_name='citas')
    sucursal = models.ForeignKey(
        'sucursales.Sucursal',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='citas'
    )
    fecha_programada = models.DateTimeField()
    estado = models.CharField(max_length=20, choices=ESTADOS, default='programada')
    notas = models.TextField(blank=True, null=True)
    oportunidad = models.ForeignKey(
        'oportunidades.Oportunidad',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='citas'
    )
    desde_oportunidad = models.BooleanField(default=False)
    creado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='citas_creadas'
    )
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['fecha_programada']
        indexes = [
            models.Index(fields=['vehiculo', 'fecha_programada'], name='cita_vehiculo_fecha_idx'),
            models.Index(fields=['estado'], name='cita_estado_idx'),
        ]

    def __str__(self):
        return f"Cita {self.vehiculo.placa} - {timezone.localtime(self.fecha_programada):%Y-%m-%d %H:%M}"

    @classmethod
    def existe_conflicto(cls, vehiculo, fecha, excluir_pk=None) -> bool:
        """Indica si el vehículo ya tiene una cita no cancelada ese mismo día."""
        qs = cls.objects.filter(
            vehiculo=vehiculo,
            fecha_programada__date=timezone.localdate(fecha),
        ).exclude(estado='cancelada')
        if excluir_pk:
            qs = qs.exclude(pk=excluir_pk)
        return qs.exists()

    def tiene_servicios_en_curso(self) -> bool:
        from servicios.models import EstadoTrabajo
        return self.servicios.exclude(estado__tipo__in=EstadoTrabajo.TIPOS_FINALES).exists()
