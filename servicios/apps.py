from django.apps import AppConfig


class ServiciosConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'servicios'
    verbose_name = 'Órdenes de servicio'

    def ready(self):
        """Registrar signals cuando la app esté lista"""
        import servicios.signals  # noqa: F401
