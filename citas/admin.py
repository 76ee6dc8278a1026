from django.contrib import admin
from .models import Cita


@admin.register(Cita)
class CitaAdmin(admin.ModelAdmin):
    list_display = ("fecha_programada", "cliente", "vehiculo", "estado", "sucursal", "desde_oportunidad")
    list_filter = ("estado", "sucursal", "desde_oportunidad")
    search_fields = ("cliente__nombre", "vehiculo__placa", "notas")
