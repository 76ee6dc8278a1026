"""Roles base del taller y su mapa de permisos."""
import logging

logger = logging.getLogger(__name__)

CRUD = ['create', 'read', 'update', 'delete']
CRU = ['create', 'read', 'update']

ROLES_BASE = {
    'ADMIN': {
        'descripcion': 'Acceso total al sistema',
        'permisos': {'todo': True},
    },
    'ENCARGADO': {
        'descripcion': 'Encargado de sucursal',
        'permisos': {
            'clientes': CRUD,
            'vehiculos': CRUD,
            'citas': CRUD,
            'servicios': CRUD,
            'oportunidades': CRUD,
            'mecanicos': CRUD,
            'estados_trabajo': CRUD,
            'recepcion': CRU,
            'sucursales': ['read'],
            'reportes': ['read'],
        },
    },
    'RECEPCIONISTA': {
        'descripcion': 'Recepción de vehículos y agenda',
        'permisos': {
            'clientes': CRU,
            'vehiculos': CRU,
            'citas': CRUD,
            'servicios': CRU,
            'oportunidades': ['read'],
            'mecanicos': ['read'],
            'estados_trabajo': ['read'],
            'recepcion': CRU,
        },
    },
}


def crear_roles_base(actualizar=False):
    """Crea los roles base si no existen. Retorna la cantidad creada."""
    from .models import Rol

    creados = 0
    for nombre, definicion in ROLES_BASE.items():
        rol, created = Rol.objects.get_or_create(
            nombre=nombre,
            defaults={
                'descripcion': definicion['descripcion'],
                'permisos': definicion['permisos'],
            },
        )
        if created:
            creados += 1
            logger.info(f"Rol {nombre} creado")
        elif actualizar:
            rol.descripcion = definicion['descripcion']
            rol.permisos = definicion['permisos']
            rol.save(update_fields=['descripcion', 'permisos', 'actualizado'])
            logger.info(f"Rol {nombre} actualizado")
    return creados
