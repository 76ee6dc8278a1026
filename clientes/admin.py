from django.contrib import admin
from .models import Cliente


@admin.register(Cliente)
class ClienteAdmin(admin.ModelAdmin):
    list_display = ("nombre", "telefono", "whatsapp", "email", "activo", "creado")
    list_filter = ("activo",)
    search_fields = ("nombre", "telefono", "whatsapp", "email")
