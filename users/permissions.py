from rest_framework.permissions import BasePermission

ACCIONES_POR_METODO = {
    'GET': 'read',
    'HEAD': 'read',
    'OPTIONS': 'read',
    'POST': 'create',
    'PUT': 'update',
    'PATCH': 'update',
    'DELETE': 'delete',
}


class TienePermisoRecurso(BasePermission):
    """Valida el permiso del rol sobre un recurso.

    El recurso sale de ``view.recurso`` (o del atributo de clase en las
    subclases creadas con ``requiere``). La acción se deduce del método HTTP;
    una vista puede fijarla con ``accion_recurso`` (texto, o dict por acción
    del viewset o por método).
    """
    message = 'Acceso denegado - Permisos insuficientes'
    recurso = None
    accion = None

    def accion_requerida(self, request, view):
        accion = self.accion or getattr(view, 'accion_recurso', None)
        if isinstance(accion, dict):
            accion = accion.get(getattr(view, 'action', None)) or accion.get(request.method)
        return accion or ACCIONES_POR_METODO.get(request.method, 'read')

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        recurso = self.recurso or getattr(view, 'recurso', None)
        if not recurso:
            return False
        return request.user.tiene_permiso(recurso, self.accion_requerida(request, view))


def requiere(recurso, accion=None):
    """Permiso para vistas de función: ``@permission_classes([requiere('citas', 'update')])``."""
    return type(
        f"Requiere_{recurso}_{accion or 'metodo'}",
        (TienePermisoRecurso,),
        {'recurso': recurso, 'accion': accion},
    )


def limitar_a_sucursal(queryset, user, campo='sucursal'):
    """Restringe el queryset a la sucursal del usuario (los administradores ven todo)."""
    if user.es_administrador or not user.sucursal_id:
        return queryset
    return queryset.filter(**{campo: user.sucursal_id})
