from django.apps import AppConfig


class SucursalesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "sucursales"
    verbose_name = "Sucursales"
