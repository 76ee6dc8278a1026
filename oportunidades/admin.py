from django.contrib import admin
from .models import Oportunidad


@admin.register(Oportunidad)
class OportunidadAdmin(admin.ModelAdmin):
    list_display = ("tipo", "cliente", "vehiculo", "estado", "fecha_seguimiento", "sucursal")
    list_filter = ("estado", "sucursal")
    search_fields = ("tipo", "descripcion", "cliente__nombre", "vehiculo__placa")
