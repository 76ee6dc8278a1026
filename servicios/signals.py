import logging

from django.db.models.signals import post_migrate
from django.dispatch import receiver

from .services import crear_estados_base

logger = logging.getLogger(__name__)


@receiver(post_migrate)
def crear_estados_trabajo(sender, **kwargs):
    # Solo cuando corren las migraciones de la app 'servicios'
    if getattr(sender, 'name', None) != 'servicios':
        return
    creados = crear_estados_base()
    if creados:
        logger.info(f"Se crearon {creados} estados de trabajo iniciales")
