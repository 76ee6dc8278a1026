from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import permissions, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.filters import OrderingFilter, SearchFilter

from taller_backend.respuestas import RespuestaEstandarMixin, respuesta
from users.permissions import TienePermisoRecurso

from .models import Cliente
from .serializers import (
    ClienteCreateUpdateSerializer,
    ClienteDetailSerializer,
    ClienteListSerializer,
)


class ClienteViewSet(RespuestaEstandarMixin, viewsets.ModelViewSet):
    queryset = Cliente.objects.select_related('creador')
    permission_classes = [permissions.IsAuthenticated, TienePermisoRecurso]
    recurso = 'clientes'
    accion_recurso = {'activar': 'update'}
    lookup_value_regex = r'\d+'
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    search_fields = ['nombre', 'email', 'telefono', 'whatsapp']
    ordering_fields = ['nombre', 'creado', 'actualizado']
    ordering = ['-creado']
    clave_objeto = 'cliente'
    clave_listado = 'clientes'
    serializer_salida = ClienteDetailSerializer
    mensaje_no_encontrado = 'Cliente no encontrado'
    mensajes = {
        'create': 'Cliente creado exitosamente',
        'update': 'Cliente actualizado exitosamente',
        'destroy': 'Cliente eliminado exitosamente',
    }

    def get_serializer_class(self):
        if self.action == 'list':
            return ClienteListSerializer
        elif self.action in ['create', 'update', 'partial_update']:
            return ClienteCreateUpdateSerializer
        else:
            return ClienteDetailSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        if self.action != 'list':
            return qs

        qs = qs.annotate(vehiculos_count=Count('vehiculos'))
        # Por defecto solo clientes activos
        activo = self.request.query_params.get('activo', 'true')
        if activo in ('true', 'false'):
            qs = qs.filter(activo=activo == 'true')
        return qs

    def perform_create(self, serializer):
        """Asignar creador al crear cliente"""
        serializer.save(creador=self.request.user)

    def perform_destroy(self, instance):
        # No se elimina un cliente con citas activas
        if instance.tiene_citas_activas():
            raise ValidationError({
                'detail': 'No se puede eliminar el cliente porque tiene citas activas'
            })
        instance.activo = False
        instance.save(update_fields=['activo', 'actualizado'])

    @action(detail=True, methods=['post'])
    def activar(self, request, pk=None):
        cliente = self.get_object()
        if cliente.activo:
            raise ValidationError({'detail': 'El cliente ya está activo'})
        cliente.activo = True
        cliente.save(update_fields=['activo', 'actualizado'])
        return respuesta({'cliente': ClienteDetailSerializer(cliente).data}, 'Cliente activado exitosamente')
