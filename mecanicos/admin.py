from django.contrib import admin
from .models import Mecanico


@admin.register(Mecanico)
class MecanicoAdmin(admin.ModelAdmin):
    list_display = ("nombre", "telefono", "porcentaje_comision", "sucursal", "activo")
    list_filter = ("activo", "sucursal")
    search_fields = ("nombre", "telefono")
