import logging
import os

from django.contrib.auth import get_user_model
from django.db.models.signals import post_migrate
from django.dispatch import receiver

from .roles import crear_roles_base

logger = logging.getLogger(__name__)


@receiver(post_migrate)
def crear_roles_y_usuario_base(sender, **kwargs):
    # Solo cuando corren las migraciones de la app 'users'
    if getattr(sender, 'name', None) != 'users':
        return

    crear_roles_base()

    # Usuario administrador inicial, únicamente si la BD no tiene usuarios
    User = get_user_model()
    if User.objects.exists():
        return

    from .models import Rol

    email = os.environ.get('BASE_USER_EMAIL', 'admin@taller.local')
    password = os.environ.get('BASE_USER_PASSWORD', 'Admin123!')
    nombre = os.environ.get('BASE_USER_NAME', 'Administrador')

    User.objects.create_user(
        email=email,
        username=email.split('@')[0],
        nombre=nombre,
        is_active=True,
        password=password,
        rol=Rol.objects.get(nombre='ADMIN'),
    )
    logger.info(f"Usuario base {email} creado con rol ADMIN")
