import logging

from rest_framework import filters, generics
from rest_framework.decorators import api_view
from rest_framework.permissions import IsAuthenticated

from taller_backend.respuestas import RespuestaEstandarMixin, respuesta
from users.permissions import TienePermisoRecurso

from .models import Sucursal
from .serializers import SucursalBasicSerializer, SucursalSerializer

logger = logging.getLogger(__name__)


class SucursalMixin(RespuestaEstandarMixin):
    serializer_class = SucursalSerializer
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'sucursales'
    clave_objeto = 'sucursal'
    clave_listado = 'sucursales'
    mensaje_no_encontrado = 'Sucursal no encontrada'
    mensajes = {
        'create': 'Sucursal creada exitosamente',
        'update': 'Sucursal actualizada exitosamente',
    }


class SucursalListCreateView(SucursalMixin, generics.ListCreateAPIView):
    queryset = Sucursal.objects.all()
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['nombre', 'codigo', 'ciudad']
    ordering_fields = ['nombre', 'codigo', 'creado']
    ordering = ['nombre']

    def get_queryset(self):
        qs = super().get_queryset()
        activo = self.request.query_params.get('activo')
        if activo in ('true', 'false'):
            qs = qs.filter(activo=activo == 'true')
        return qs


class SucursalDetailView(SucursalMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Sucursal.objects.all()

    def destroy(self, request, *args, **kwargs):  # type: ignore[override]
        sucursal = self.get_object()
        # Con registros asociados solo se desactiva
        if sucursal.tiene_registros_relacionados():
            sucursal.activo = False
            sucursal.save(update_fields=['activo', 'actualizado'])
            logger.info(f"Sucursal {sucursal.codigo} desactivada por tener registros asociados")
            return respuesta(None, 'Sucursal desactivada porque tiene registros asociados')
        sucursal.delete()
        return respuesta(None, 'Sucursal eliminada exitosamente')


@api_view(['GET'])
def sucursales_activas(request):
    """Listado simple de sucursales activas para selectores."""
    sucursales = Sucursal.objects.filter(activo=True).order_by('nombre')
    return respuesta({'sucursales': SucursalBasicSerializer(sucursales, many=True).data})
