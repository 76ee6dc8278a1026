from django.contrib import admin
from .models import Vehiculo


@admin.register(Vehiculo)
class VehiculoAdmin(admin.ModelAdmin):
    list_display = ("placa", "marca", "modelo", "anio", "cliente", "creado")
    list_filter = ("marca", "tipo_combustible", "transmision")
    search_fields = ("placa", "marca", "modelo", "cliente__nombre")
