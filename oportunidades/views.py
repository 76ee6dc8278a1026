from rest_framework import filters, generics
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated

from citas.serializers import CitaSerializer
from clientes.models import Cliente
from taller_backend.respuestas import RespuestaEstandarMixin, respuesta
from users.permissions import TienePermisoRecurso, limitar_a_sucursal, requiere

from .models import Oportunidad
from .serializers import ConvertirACitaSerializer, OportunidadSerializer
from .services import convertir_a_cita, convertir_oportunidad, filtrar_oportunidades


class OportunidadMixin(RespuestaEstandarMixin):
    serializer_class = OportunidadSerializer
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'oportunidades'
    clave_objeto = 'oportunidad'
    clave_listado = 'oportunidades'
    mensaje_no_encontrado = 'Oportunidad no encontrada'
    mensajes = {
        'create': 'Oportunidad creada exitosamente',
        'update': 'Oportunidad actualizada exitosamente',
        'destroy': 'Oportunidad eliminada exitosamente',
    }

    def get_queryset(self):
        return filtrar_oportunidades(self.request.user, self.request.query_params)


class OportunidadListCreateView(OportunidadMixin, generics.ListCreateAPIView):
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['tipo', 'descripcion', 'cliente__nombre', 'vehiculo__placa']
    ordering_fields = ['fecha_seguimiento', 'creado']
    ordering = ['fecha_seguimiento']

    def perform_create(self, serializer):
        sucursal = serializer.validated_data.get('sucursal') or self.request.user.sucursal
        serializer.save(creado_por=self.request.user, sucursal=sucursal)


class OportunidadDetailView(OportunidadMixin, generics.RetrieveUpdateDestroyAPIView):

    def get_queryset(self):
        queryset = Oportunidad.objects.select_related('cliente', 'vehiculo', 'servicio', 'sucursal')
        return limitar_a_sucursal(queryset, self.request.user)

    def perform_destroy(self, instance):
        if instance.estado == 'convertida':
            raise ValidationError({'detail': 'No se puede eliminar una oportunidad convertida'})
        instance.delete()


class ConvertirOportunidadView(OportunidadDetailView):
    http_method_names = ['post']
    accion_recurso = 'update'

    def post(self, request, pk):
        oportunidad = convertir_oportunidad(self.get_object())
        return respuesta(
            {'oportunidad': OportunidadSerializer(oportunidad).data},
            'Oportunidad convertida exitosamente',
        )


class ConvertirACitaView(OportunidadDetailView):
    serializer_class = ConvertirACitaSerializer
    http_method_names = ['post']
    accion_recurso = 'update'

    def post(self, request, pk):
        oportunidad = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cita = convertir_a_cita(
            oportunidad,
            request.user,
            serializer.validated_data['fecha_programada'],
            serializer.validated_data.get('notas'),
        )
        oportunidad.refresh_from_db()
        return respuesta({
            'cita': CitaSerializer(cita).data,
            'oportunidad': OportunidadSerializer(oportunidad).data,
        }, 'Cita creada desde la oportunidad', 201)


@api_view(['GET'])
@permission_classes([IsAuthenticated, requiere('oportunidades', 'read')])
def oportunidades_por_cliente(request, cliente_id):
    if not Cliente.objects.filter(pk=cliente_id).exists():
        raise NotFound('Cliente no encontrado')
    queryset = limitar_a_sucursal(
        Oportunidad.objects.select_related('cliente', 'vehiculo').filter(cliente_id=cliente_id),
        request.user,
    ).order_by('fecha_seguimiento')
    return respuesta({'oportunidades': OportunidadSerializer(queryset, many=True).data})
