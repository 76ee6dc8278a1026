from django.contrib import admin
from .models import EstadoTrabajo, RegistroEstado, Servicio


@admin.register(EstadoTrabajo)
class EstadoTrabajoAdmin(admin.ModelAdmin):
    list_display = ("orden", "nombre", "tipo", "color")
    ordering = ("orden",)


class RegistroEstadoInline(admin.TabularInline):
    model = RegistroEstado
    extra = 0
    readonly_fields = ("estado_anterior", "estado_nuevo", "notas", "cambiado_por", "creado")


@admin.register(Servicio)
class ServicioAdmin(admin.ModelAdmin):
    list_display = ("id", "vehiculo", "cliente", "mecanico", "estado", "monto_total", "comision_mecanico", "creado")
    list_filter = ("estado", "sucursal", "mecanico")
    search_fields = ("vehiculo__placa", "cliente__nombre", "descripcion_problema")
    inlines = [RegistroEstadoInline]


@admin.register(RegistroEstado)
class RegistroEstadoAdmin(admin.ModelAdmin):
    list_display = ("servicio", "estado_anterior", "estado_nuevo", "cambiado_por", "creado")
    list_filter = ("estado_nuevo",)
