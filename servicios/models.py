from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, RegexValidator
from django.db import models

from clientes.models import Cliente
from mecanicos.models import Mecanico
from vehiculos.models import Vehiculo

validar_color = RegexValidator(r'^#[0-9A-Fa-f]{6}$', 'El color debe tener formato hexadecimal #RRGGBB')


class EstadoTrabajo(models.Model):
    """Etapa del flujo de trabajo de una orden de servicio.

    ``tipo`` clasifica el estado para la lógica de negocio; el nombre es solo
    para mostrar.
    """
    TIPO_RECIBIDO = 'recibido'
    TIPO_COTIZADO = 'cotizado'
    TIPO_EN_PROCESO = 'en_proceso'
    TIPO_TERMINADO = 'terminado'
    TIPO_RECHAZADO = 'rechazado'
    TIPO_OTRO = 'otro'
    TIPOS = [
        (TIPO_RECIBIDO, 'Recibido'),
        (TIPO_COTIZADO, 'Cotizado'),
        (TIPO_EN_PROCESO, 'En proceso'),
        (TIPO_TERMINADO, 'Terminado'),
        (TIPO_RECHAZADO, 'Rechazado'),
        (TIPO_OTRO, 'Otro'),
    ]
    TIPOS_FINALES = [TIPO_TERMINADO, TIPO_RECHAZADO]

    nombre = models.CharField(max_length=50, unique=True)
    color = models.CharField(max_length=7, default='#6B7280', validators=[validar_color])
    orden = models.PositiveIntegerField(unique=True)
    tipo = models.CharField(max_length=20, choices=TIPOS, default=TIPO_OTRO)
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['orden']
        verbose_name = 'Estado de trabajo'
        verbose_name_plural = 'Estados de trabajo'

    def __str__(self):
        return self.nombre

    @property
    def es_final(self) -> bool:
        return self.tipo in self.TIPOS_FINALES

    @classmethod
    def inicial(cls):
        return cls.objects.order_by('orden').first()

    @classmethod
    def del_tipo(cls, tipo):
        return cls.objects.filter(tipo=tipo).order_by('orden').first()


def _monto(**kwargs):
    return models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
        **kwargs,
    )


class Servicio(models.Model):
    """Orden de trabajo: un trabajo de reparación desde la recepción hasta la entrega."""
    NIVELES_COMBUSTIBLE = [
        ('1/4', '1/4'),
        ('1/2', '1/2'),
        ('3/4', '3/4'),
        ('FULL', 'Lleno'),
    ]

    cita = models.ForeignKey(
        'citas.Cita',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='servicios'
    )
    cliente = models.ForeignKey(Cliente, on_delete=models.PROTECT, related_name='servicios')
    vehiculo = models.ForeignKey(Vehiculo, on_delete=models.PROTECT, related_name='servicios')
    mecanico = models.ForeignKey(
        Mecanico,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='servicios'
    )
    estado = models.ForeignKey(EstadoTrabajo, on_delete=models.PROTECT, related_name='servicios')
    sucursal = models.ForeignKey(
        'sucursales.Sucursal',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='servicios'
    )
    descripcion_problema = models.TextField(blank=True, null=True)
    diagnostico = models.TextField(blank=True, null=True)
    detalle_cotizacion = models.TextField(blank=True, null=True)
    precio_mano_obra = _monto()
    precio_repuestos = _monto()
    costo_repuestos = _monto()
    monto_total = _monto()
    truput = _monto()
    # Se guarda el valor enviado por el cliente; ver calcular_comision
    comision_mecanico = _monto()

    # Recepción del vehículo
    kilometraje = models.PositiveIntegerField(null=True, blank=True)
    nivel_combustible = models.CharField(max_length=4, choices=NIVELES_COMBUSTIBLE, blank=True, null=True)
    luces_ok = models.BooleanField(default=True)
    llantas_ok = models.BooleanField(default=True)
    cristales_ok = models.BooleanField(default=True)
    carroceria_ok = models.BooleanField(default=True)
    observaciones_recepcion = models.TextField(blank=True, null=True)
    firma_cliente = models.TextField(blank=True, null=True)
    fotos_recepcion = models.JSONField(default=list, blank=True)
    recibido_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='servicios_recibidos'
    )
    fecha_recepcion = models.DateTimeField(null=True, blank=True)

    creado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='servicios_creados'
    )
    fecha_inicio = models.DateTimeField(null=True, blank=True)
    fecha_fin = models.DateTimeField(null=True, blank=True)
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-creado']
        indexes = [
            models.Index(fields=['cliente'], name='servicio_cliente_idx'),
            models.Index(fields=['vehiculo'], name='servicio_vehiculo_idx'),
            models.Index(fields=['estado'], name='servicio_estado_idx'),
            models.Index(fields=['sucursal', 'creado'], name='servicio_sucursal_idx'),
        ]

    def __str__(self):
        return f"Servicio #{self.pk} - {self.vehiculo.placa}"

    @property
    def iniciado(self) -> bool:
        return self.fecha_inicio is not None

    @property
    def finalizado(self) -> bool:
        return self.estado.es_final

    @property
    def comision_calculada(self):
        """Comisión que corresponde según el porcentaje actual del mecánico."""
        if not self.mecanico:
            return None
        from .services import calcular_comision
        return calcular_comision(self.monto_total, self.mecanico.porcentaje_comision)


class RegistroEstado(models.Model):
    """Bitácora de cambios de estado de un servicio."""
    servicio = models.ForeignKey(Servicio, on_delete=models.CASCADE, related_name='registros_estado')
    estado_anterior = models.ForeignKey(
        EstadoTrabajo,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='registros_salida'
    )
    estado_nuevo = models.ForeignKey(EstadoTrabajo, on_delete=models.PROTECT, related_name='registros_entrada')
    notas = models.TextField(blank=True, null=True)
    cambiado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cambios_estado'
    )
    creado = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-creado']
        verbose_name = 'Registro de estado'
        verbose_name_plural = 'Registros de estado'

    def __str__(self):
        anterior = self.estado_anterior.nombre if self.estado_anterior else '-'
        return f"Servicio #{self.servicio_id}: {anterior} -> {self.estado_nuevo.nombre}"
