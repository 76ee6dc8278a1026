from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import CustomUser, Rol


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    model = CustomUser
    list_display = ("username", "email", "nombre", "rol", "sucursal", "is_active")
    list_filter = ("is_staff", "is_active", "rol", "sucursal")
    search_fields = ("username", "email", "nombre")
    ordering = ("username",)

    fieldsets = (
        (None, {"fields": ("username", "email", "nombre", "password")}),
        ("Taller", {"fields": ("rol", "sucursal")}),
        ("Permissions", {"fields": ("is_staff", "is_superuser", "is_active")}),
    )
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("username", "email", "nombre", "password1", "password2", "rol", "sucursal", "is_active"),
        }),
    )


@admin.register(Rol)
class RolAdmin(admin.ModelAdmin):
    list_display = ("nombre", "descripcion")
    search_fields = ("nombre",)
