from django.db import models

from clientes.models import Cliente


class Vehiculo(models.Model):
    TIPOS_COMBUSTIBLE = [
        ('gasolina', 'Gasolina'),
        ('diesel', 'Diésel'),
        ('gas', 'Gas'),
        ('electrico', 'Eléctrico'),
        ('hibrido', 'Híbrido'),
    ]
    TRANSMISIONES = [
        ('manual', 'Manual'),
        ('automatica', 'Automática'),
    ]

    cliente = models.ForeignKey(Cliente, on_delete=models.PROTECT, related_name='vehiculos')
    placa = models.CharField(max_length=20, unique=True)
    marca = models.CharField(max_length=50)
    modelo = models.CharField(max_length=50)
    anio = models.PositiveIntegerField(null=True, blank=True)
    color = models.CharField(max_length=30, blank=True, null=True)
    tipo_combustible = models.CharField(max_length=20, choices=TIPOS_COMBUSTIBLE, blank=True, null=True)
    transmision = models.CharField(max_length=20, choices=TRANSMISIONES, blank=True, null=True)
    numero_motor = models.CharField(max_length=50, blank=True, null=True)
    numero_chasis = models.CharField(max_length=50, blank=True, null=True)
    notas = models.TextField(blank=True, null=True)
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-creado']
        indexes = [
            models.Index(fields=['cliente'], name='vehiculo_cliente_idx'),
        ]
        verbose_name = 'Vehículo'
        verbose_name_plural = 'Vehículos'

    def __str__(self):
        return f"{self.placa} - {self.marca} {self.modelo}"

    def save(self, *args, **kwargs):
        if self.placa:
            self.placa = self.placa.strip().upper()
        super().save(*args, **kwargs)

    def tiene_citas_activas(self) -> bool:
        from citas.models import Cita
        return self.citas.filter(estado__in=Cita.ESTADOS_ACTIVOS).exists()

    def tiene_servicios_activos(self) -> bool:
        from servicios.models import EstadoTrabajo
        return self.servicios.exclude(estado__tipo__in=EstadoTrabajo.TIPOS_FINALES).exists()
