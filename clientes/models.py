from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models


class Cliente(models.Model):
    nombre = models.CharField(max_length=100)
    telefono = models.CharField(max_length=20, blank=True, null=True)
    whatsapp = models.CharField(max_length=20, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    direccion = models.CharField(max_length=200, blank=True, null=True)
    activo = models.BooleanField(default=True)
    creador = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True)
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-creado']
        indexes = [
            models.Index(fields=['nombre'], name='cliente_nombre_idx'),
            models.Index(fields=['telefono'], name='cliente_telefono_idx'),
        ]

    def __str__(self):
        return self.nombre

    def clean(self):
        if not self.telefono and not self.whatsapp:
            raise ValidationError("Debe registrar al menos un teléfono o WhatsApp")

    def tiene_citas_activas(self) -> bool:
        from citas.models import Cita
        return self.citas.filter(estado__in=Cita.ESTADOS_ACTIVOS).exists()
