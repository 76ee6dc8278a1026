from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'users'
    verbose_name = 'Usuarios y roles'

    def ready(self):
        """Registrar signals cuando la app esté lista"""
        import users.signals  # noqa: F401
