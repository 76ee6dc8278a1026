from typing import Type, cast

from django.db.models import QuerySet
from rest_framework import filters, generics
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.serializers import Serializer

from taller_backend.respuestas import RespuestaEstandarMixin, respuesta
from users.permissions import TienePermisoRecurso, limitar_a_sucursal

from .models import Cita
from .serializers import CitaCreateUpdateSerializer, CitaSerializer, CitaTelefonicaSerializer
from .services import (
    cancelar_cita,
    completar_cita,
    confirmar_cita,
    crear_cita_telefonica,
    filtrar_citas,
)


class CitaMixin(RespuestaEstandarMixin):
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'citas'
    clave_objeto = 'cita'
    clave_listado = 'citas'
    mensaje_no_encontrado = 'Cita no encontrada'
    serializer_salida = CitaSerializer
    mensajes = {
        'create': 'Cita creada exitosamente',
        'update': 'Cita actualizada exitosamente',
        'destroy': 'Cita cancelada exitosamente',
    }

    def get_queryset(self) -> QuerySet[Cita]:  # type: ignore[override]
        queryset = Cita.objects.select_related('cliente', 'vehiculo', 'sucursal')
        return limitar_a_sucursal(queryset, self.request.user)


class CitaListCreateView(CitaMixin, generics.ListCreateAPIView):
    """Vista para listar y agendar citas"""
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['cliente__nombre', 'vehiculo__placa', 'notas']
    ordering_fields = ['fecha_programada', 'creado']
    ordering = ['fecha_programada']

    def get_serializer_class(self) -> Type[Serializer]:  # type: ignore[override]
        if self.request.method == 'POST':
            return CitaCreateUpdateSerializer
        return CitaSerializer

    def get_queryset(self) -> QuerySet[Cita]:  # type: ignore[override]
        request = cast(Request, self.request)
        return filtrar_citas(request.user, request.query_params)

    def perform_create(self, serializer):
        sucursal = serializer.validated_data.get('sucursal') or self.request.user.sucursal
        serializer.save(creado_por=self.request.user, sucursal=sucursal)


class CitaDetailView(CitaMixin, generics.RetrieveUpdateDestroyAPIView):
    """Ver, reprogramar y cancelar citas. DELETE cancela la cita."""

    def get_serializer_class(self) -> Type[Serializer]:  # type: ignore[override]
        if self.request.method in ['PUT', 'PATCH']:
            return CitaCreateUpdateSerializer
        return CitaSerializer

    def perform_destroy(self, instance):
        cancelar_cita(instance)


class CitaAccionView(CitaMixin, generics.GenericAPIView):
    serializer_class = CitaSerializer
    accion_recurso = 'update'

    def responder(self, cita, mensaje):
        cita.refresh_from_db()
        return respuesta({'cita': CitaSerializer(cita).data}, mensaje)


class ConfirmarCitaView(CitaAccionView):

    def post(self, request, pk):
        cita = confirmar_cita(self.get_object())
        return self.responder(cita, 'Cita confirmada exitosamente')


class CompletarCitaView(CitaAccionView):

    def post(self, request, pk):
        cita = completar_cita(self.get_object(), request.user)
        return self.responder(cita, 'Cita completada exitosamente')


class CitaTelefonicaView(CitaMixin, generics.GenericAPIView):
    serializer_class = CitaTelefonicaSerializer
    accion_recurso = 'create'

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cita = crear_cita_telefonica(request.user, serializer.validated_data)
        return respuesta({'cita': CitaSerializer(cita).data}, 'Cita telefónica creada exitosamente', 201)
