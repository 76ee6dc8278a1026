from django.db import models
from django.contrib.auth.models import AbstractUser


class Rol(models.Model):
    """Rol con mapa de permisos ``recurso -> [acciones]``.

    ``{"todo": true}`` concede todas las acciones sobre todos los recursos.
    """
    ACCIONES = ['create', 'read', 'update', 'delete']

    nombre = models.CharField(max_length=50, unique=True)
    descripcion = models.TextField(blank=True, null=True)
    permisos = models.JSONField(default=dict, blank=True)
    creado = models.DateTimeField(auto_now_add=True)
    actualizado = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['nombre']
        verbose_name = 'Rol'
        verbose_name_plural = 'Roles'

    def __str__(self):
        return self.nombre

    @property
    def es_administrador(self) -> bool:
        return bool((self.permisos or {}).get('todo'))

    def permite(self, recurso: str, accion: str) -> bool:
        if self.es_administrador:
            return True
        acciones = (self.permisos or {}).get(recurso) or []
        return accion in acciones


class CustomUser(AbstractUser):
    nombre = models.CharField(max_length=150, blank=True, null=True)
    email = models.EmailField(unique=True, blank=False, null=False)
    sucursal = models.ForeignKey(
        'sucursales.Sucursal',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='usuarios'
    )
    rol = models.ForeignKey(
        Rol,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='usuarios'
    )

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    def __str__(self):
        return f"{self.get_full_name()} <{self.email}>"

    def get_full_name(self):
        """Retorna el nombre completo del usuario"""
        return self.nombre or self.username or self.email.split('@')[0]

    @property
    def es_administrador(self) -> bool:
        return self.is_superuser or bool(self.rol and self.rol.es_administrador)

    def tiene_permiso(self, recurso: str, accion: str) -> bool:
        if self.is_superuser:
            return True
        return bool(self.rol and self.rol.permite(recurso, accion))

    def permisos_efectivos(self):
        if self.es_administrador:
            return {'todo': True}
        return dict(self.rol.permisos) if self.rol else {}
