from django.db.models import Count
from rest_framework import filters, generics
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated

from taller_backend.respuestas import RespuestaEstandarMixin, respuesta
from users.permissions import TienePermisoRecurso, limitar_a_sucursal, requiere

from .models import Mecanico
from .serializers import MecanicoSerializer, RangoFechasSerializer
from .services import reporte_comisiones


class MecanicoMixin(RespuestaEstandarMixin):
    serializer_class = MecanicoSerializer
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'mecanicos'
    clave_objeto = 'mecanico'
    clave_listado = 'mecanicos'
    mensaje_no_encontrado = 'Mecánico no encontrado'
    mensajes = {
        'create': 'Mecánico creado exitosamente',
        'update': 'Mecánico actualizado exitosamente',
        'destroy': 'Mecánico desactivado exitosamente',
    }

    def get_queryset(self):
        queryset = Mecanico.objects.select_related('sucursal').annotate(servicios_count=Count('servicios'))
        return limitar_a_sucursal(queryset, self.request.user)


class MecanicoListCreateView(MecanicoMixin, generics.ListCreateAPIView):
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['nombre', 'telefono']
    ordering_fields = ['nombre', 'porcentaje_comision', 'creado']
    ordering = ['nombre']

    def get_queryset(self):
        queryset = super().get_queryset()
        activo = self.request.query_params.get('activo')
        if activo in ('true', 'false'):
            queryset = queryset.filter(activo=activo == 'true')
        return queryset

    def perform_create(self, serializer):
        # Sin sucursal explícita, el mecánico queda en la sucursal del usuario
        if not serializer.validated_data.get('sucursal') and self.request.user.sucursal_id:
            serializer.save(sucursal=self.request.user.sucursal)
        else:
            serializer.save()


class MecanicoDetailView(MecanicoMixin, generics.RetrieveUpdateDestroyAPIView):

    def perform_destroy(self, instance):
        if instance.tiene_servicios_activos():
            raise ValidationError({
                'detail': 'No se puede desactivar el mecánico porque tiene servicios activos'
            })
        instance.activo = False
        instance.save(update_fields=['activo', 'actualizado'])


class MecanicoActivarView(MecanicoMixin, generics.GenericAPIView):
    accion_recurso = 'update'

    def post(self, request, pk):
        mecanico = self.get_object()
        if mecanico.activo:
            raise ValidationError({'detail': 'El mecánico ya está activo'})
        mecanico.activo = True
        mecanico.save(update_fields=['activo', 'actualizado'])
        return respuesta({'mecanico': self.get_serializer(mecanico).data}, 'Mecánico activado exitosamente')


@api_view(['GET'])
@permission_classes([IsAuthenticated, requiere('reportes', 'read')])
def reporte_mecanicos(request):
    """Rendimiento y comisiones por mecánico en un rango de fechas opcional."""
    serializer = RangoFechasSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return respuesta(reporte_comisiones(request.user, **serializer.validated_data))
