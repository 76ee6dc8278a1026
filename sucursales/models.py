from django.db import models


class Sucursal(models.Model):
    """Sede física del taller. Agrupa usuarios, mecánicos, citas y servicios."""
    nombre = models.CharField(max_length=100)
    codigo = models.CharField(max_length=20, unique=True)
    direccion = models.CharField(max_length=200, blank=True, null=True)
    telefono = models.CharField(max_length=20, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    ciudad = models.CharField(max_length=100, blank=True, null=True)
    activo = models.BooleanField(default=True)
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['nombre']
        verbose_name = 'Sucursal'
        verbose_name_plural = 'Sucursales'

    def __str__(self):
        return f"{self.nombre} [{self.codigo}]"

    def tiene_registros_relacionados(self) -> bool:
        return (
            self.usuarios.exists()
            or self.mecanicos.exists()
            or self.servicios.exists()
            or self.citas.exists()
        )
