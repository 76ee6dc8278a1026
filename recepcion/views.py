from rest_framework import generics
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from servicios.models import Servicio
from taller_backend.respuestas import RespuestaEstandarMixin, respuesta
from users.permissions import TienePermisoRecurso, limitar_a_sucursal, requiere

from .serializers import CitaRecepcionSerializer, RecepcionVehiculoSerializer, ServicioRecepcionSerializer
from .services import citas_del_dia, recibir_vehiculo


class RecibirVehiculoView(generics.GenericAPIView):
    serializer_class = RecepcionVehiculoSerializer
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'recepcion'

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        servicio = recibir_vehiculo(request.user, serializer.validated_data)
        return respuesta(
            {'servicio': ServicioRecepcionSerializer(servicio).data},
            'Vehículo recibido exitosamente',
            201,
        )


@api_view(['GET'])
@permission_classes([IsAuthenticated, requiere('recepcion', 'read')])
def recepciones_hoy(request):
    citas = citas_del_dia(request.user)
    return respuesta({'citas': CitaRecepcionSerializer(citas, many=True).data})


class ServicioRecepcionView(RespuestaEstandarMixin, generics.RetrieveAPIView):
    serializer_class = ServicioRecepcionSerializer
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'recepcion'
    clave_objeto = 'servicio'
    mensaje_no_encontrado = 'Servicio no encontrado'

    def get_queryset(self):
        queryset = Servicio.objects.select_related('cliente', 'vehiculo', 'estado', 'recibido_por')
        return limitar_a_sucursal(queryset, self.request.user)
