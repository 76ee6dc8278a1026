from django.db.models import ProtectedError
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated

from clientes.models import Cliente
from taller_backend.respuestas import RespuestaEstandarMixin, respuesta
from users.permissions import TienePermisoRecurso, requiere

from .models import Vehiculo
from .serializers import VehiculoDetailSerializer, VehiculoSerializer


class VehiculoMixin(RespuestaEstandarMixin):
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'vehiculos'
    clave_objeto = 'vehiculo'
    clave_listado = 'vehiculos'
    mensaje_no_encontrado = 'Vehículo no encontrado'
    serializer_salida = VehiculoDetailSerializer
    mensajes = {
        'create': 'Vehículo creado exitosamente',
        'update': 'Vehículo actualizado exitosamente',
        'destroy': 'Vehículo eliminado exitosamente',
    }


class VehiculoListCreateView(VehiculoMixin, generics.ListCreateAPIView):
    """Vista para listar y crear vehículos"""
    serializer_class = VehiculoSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['cliente']
    search_fields = ['placa', 'marca', 'modelo', 'cliente__nombre']
    ordering_fields = ['placa', 'marca', 'anio', 'creado']
    ordering = ['-creado']

    def get_queryset(self):
        queryset = Vehiculo.objects.select_related('cliente')
        marca = self.request.query_params.get('marca')
        if marca:
            queryset = queryset.filter(marca__icontains=marca.strip())
        return queryset


class VehiculoDetailView(VehiculoMixin, generics.RetrieveUpdateDestroyAPIView):
    """Vista para ver, actualizar y eliminar vehículos"""
    queryset = Vehiculo.objects.select_related('cliente')

    def get_serializer_class(self):
        if self.request.method in ['PUT', 'PATCH']:
            return VehiculoSerializer
        return VehiculoDetailSerializer

    def perform_destroy(self, instance):
        if instance.tiene_citas_activas():
            raise ValidationError({
                'detail': 'No se puede eliminar el vehículo porque tiene citas activas'
            })
        if instance.tiene_servicios_activos():
            raise ValidationError({
                'detail': 'No se puede eliminar el vehículo porque tiene servicios activos'
            })
        try:
            instance.delete()
        except ProtectedError:
            raise ValidationError({
                'detail': 'No se puede eliminar el vehículo porque tiene historial de servicios'
            })


@api_view(['GET'])
@permission_classes([IsAuthenticated, requiere('vehiculos', 'read')])
def vehiculos_por_cliente(request, cliente_id: int):
    """Vehículos registrados de un cliente."""
    cliente = Cliente.objects.filter(pk=cliente_id).first()
    if cliente is None:
        raise NotFound('Cliente no encontrado')
    vehiculos = cliente.vehiculos.order_by('placa')
    return respuesta({
        'cliente': {'id': cliente.pk, 'nombre': cliente.nombre},
        'vehiculos': VehiculoSerializer(vehiculos, many=True).data,
    })
