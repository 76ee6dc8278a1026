import csv
from decimal import Decimal
from typing import Type, cast

from django.db import transaction
from django.db.models import Count, QuerySet, Sum
from django.http import HttpResponse, StreamingHttpResponse
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, generics, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.serializers import Serializer

from mecanicos.models import Mecanico
from taller_backend.filtros import aplicar_filtros
from taller_backend.paginacion import PaginacionEstandar
from taller_backend.respuestas import RespuestaEstandarMixin, respuesta
from users.permissions import TienePermisoRecurso, limitar_a_sucursal, requiere

from .filters import RegistroEstadoFilter
from .models import EstadoTrabajo, RegistroEstado, Servicio
from .serializers import (
    CalculoComisionSerializer,
    CambioEstadoSerializer,
    EstadoTrabajoSerializer,
    RegistroEstadoSerializer,
    ReordenarItemSerializer,
    ServicioCreateSerializer,
    ServicioDetailSerializer,
    ServicioListSerializer,
    ServicioUpdateSerializer,
)
from .services import (
    COLUMNAS_EXPORTACION,
    calcular_comision,
    cambiar_estado_servicio,
    completar_servicio,
    construir_excel_servicios,
    crear_servicio,
    eliminar_servicio,
    filtrar_servicios,
    generar_filas_exportacion,
    historial_servicios,
    iniciar_servicio,
)


class ServicioMixin(RespuestaEstandarMixin):
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'servicios'
    clave_objeto = 'servicio'
    clave_listado = 'servicios'
    mensaje_no_encontrado = 'Servicio no encontrado'
    serializer_salida = ServicioDetailSerializer
    mensajes = {
        'create': 'Servicio creado exitosamente',
        'update': 'Servicio actualizado exitosamente',
        'destroy': 'Servicio eliminado exitosamente',
    }


class ServicioListCreateView(ServicioMixin, generics.ListCreateAPIView):
    """Vista para listar y crear órdenes de servicio"""
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['descripcion_problema', 'diagnostico', 'cliente__nombre', 'vehiculo__placa']
    ordering_fields = ['creado', 'monto_total', 'fecha_inicio', 'fecha_fin']
    ordering = ['-creado']

    def get_serializer_class(self) -> Type[Serializer]:  # type: ignore[override]
        if self.request.method == 'POST':
            return ServicioCreateSerializer
        return ServicioListSerializer

    def get_queryset(self) -> QuerySet[Servicio]:  # type: ignore[override]
        request = cast(Request, self.request)
        return filtrar_servicios(request.user, request.query_params)

    def perform_create(self, serializer):
        serializer.instance = crear_servicio(self.request.user, serializer.validated_data)


class ServicioDetailView(ServicioMixin, generics.RetrieveUpdateDestroyAPIView):
    """Vista para ver, actualizar y eliminar órdenes de servicio"""

    def get_serializer_class(self) -> Type[Serializer]:  # type: ignore[override]
        if self.request.method in ['PUT', 'PATCH']:
            return ServicioUpdateSerializer
        return ServicioDetailSerializer

    def get_queryset(self) -> QuerySet[Servicio]:  # type: ignore[override]
        queryset = Servicio.objects.select_related(
            'cliente', 'vehiculo', 'mecanico', 'estado', 'sucursal', 'recibido_por'
        )
        return limitar_a_sucursal(queryset, self.request.user)

    def perform_destroy(self, instance):
        eliminar_servicio(instance)


class ServicioAccionView(ServicioMixin, generics.GenericAPIView):
    """Base para acciones sobre un servicio existente."""
    accion_recurso = 'update'

    def get_queryset(self) -> QuerySet[Servicio]:  # type: ignore[override]
        return limitar_a_sucursal(Servicio.objects.select_related('estado'), self.request.user)

    def responder(self, servicio, mensaje):
        servicio.refresh_from_db()
        return respuesta({'servicio': ServicioDetailSerializer(servicio).data}, mensaje)


class CambiarEstadoServicioView(ServicioAccionView):
    serializer_class = CambioEstadoSerializer

    def put(self, request, pk):
        servicio = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        nuevo_estado = EstadoTrabajo.objects.filter(pk=serializer.validated_data['estado']).first()
        if nuevo_estado is None:
            raise NotFound('Estado de trabajo no encontrado')

        registro = cambiar_estado_servicio(
            servicio, nuevo_estado, request.user, serializer.validated_data.get('notas')
        )
        servicio.refresh_from_db()
        return respuesta({
            'servicio': ServicioDetailSerializer(servicio).data,
            'registro': RegistroEstadoSerializer(registro).data,
        }, 'Estado del servicio actualizado exitosamente')

    patch = put


class IniciarServicioView(ServicioAccionView):

    def post(self, request, pk):
        servicio = iniciar_servicio(self.get_object(), request.user)
        return self.responder(servicio, 'Servicio iniciado exitosamente')


class CompletarServicioView(ServicioAccionView):

    def post(self, request, pk):
        servicio = completar_servicio(self.get_object(), request.user, request.data.get('notas'))
        return self.responder(servicio, 'Servicio completado exitosamente')


@api_view(['GET'])
@permission_classes([IsAuthenticated, requiere('servicios', 'read')])
def historial(request, tipo: str, objeto_id: int):
    """Historial paginado de servicios de un cliente o vehículo, con resumen."""
    queryset = historial_servicios(request.user, tipo, objeto_id)
    resumen = queryset.aggregate(total_servicios=Count('id'), monto_total=Sum('monto_total'))

    paginador = PaginacionEstandar()
    pagina = paginador.paginate_queryset(queryset, request)
    return respuesta({
        'servicios': ServicioListSerializer(pagina, many=True).data,
        'pagination': paginador.datos_paginacion(),
        'resumen': {
            'total_servicios': resumen['total_servicios'] or 0,
            'monto_total': resumen['monto_total'] or Decimal('0.00'),
        },
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, requiere('servicios', 'read')])
def calcular_comision_view(request):
    """Calcula la comisión de un mecánico para un monto total dado."""
    serializer = CalculoComisionSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    mecanico = Mecanico.objects.filter(pk=serializer.validated_data['mecanico']).first()
    if mecanico is None:
        raise NotFound('Mecánico no encontrado')
    monto_total = serializer.validated_data['monto_total']

    return respuesta({
        'mecanico': mecanico.pk,
        'porcentaje_comision': mecanico.porcentaje_comision,
        'monto_total': monto_total,
        'comision': calcular_comision(monto_total, mecanico.porcentaje_comision),
    })


class Echo:
    """Helper para StreamingHttpResponse con csv.writer."""

    @staticmethod
    def write(value):
        return value


@api_view(['GET'])
@permission_classes([IsAuthenticated, requiere('servicios', 'read')])
def exportar_servicios(request):
    """Exporta los servicios según filtros aplicados."""
    formato = request.query_params.get('formato', 'excel').lower()
    if formato not in {'excel', 'csv'}:
        raise ValidationError({'formato': 'Formato no soportado'})

    drf_request = cast(Request, request)
    queryset = filtrar_servicios(drf_request.user, drf_request.query_params).order_by('-creado')
    filas = generar_filas_exportacion(queryset)
    timestamp = timezone.now().strftime('%Y%m%d_%H%M%S')

    if formato == 'excel':
        response = HttpResponse(
            construir_excel_servicios(filas),
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        )
        response['Content-Disposition'] = f'attachment; filename="servicios_{timestamp}.xlsx"'
        return response

    pseudo_buffer = Echo()
    writer = csv.writer(pseudo_buffer)
    response = StreamingHttpResponse(
        (writer.writerow(fila) for fila in [COLUMNAS_EXPORTACION, *filas]),
        content_type='text/csv',
    )
    response['Content-Disposition'] = f'attachment; filename="servicios_{timestamp}.csv"'
    return response


# Estados de trabajo

class EstadoTrabajoMixin(RespuestaEstandarMixin):
    serializer_class = EstadoTrabajoSerializer
    queryset = EstadoTrabajo.objects.all()
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'estados_trabajo'
    clave_objeto = 'estado'
    clave_listado = 'estados'
    mensaje_no_encontrado = 'Estado de trabajo no encontrado'
    mensajes = {
        'create': 'Estado creado exitosamente',
        'update': 'Estado actualizado exitosamente',
        'destroy': 'Estado eliminado exitosamente',
    }


class EstadoTrabajoListCreateView(EstadoTrabajoMixin, generics.ListCreateAPIView):
    pagination_class = None


class EstadoTrabajoDetailView(EstadoTrabajoMixin, generics.RetrieveUpdateDestroyAPIView):

    def perform_destroy(self, instance):
        en_uso = (
            instance.servicios.exists()
            or instance.registros_salida.exists()
            or instance.registros_entrada.exists()
        )
        if en_uso:
            raise ValidationError({
                'detail': 'No se puede eliminar el estado porque está siendo usado por servicios'
            })
        instance.delete()


@api_view(['POST'])
@permission_classes([IsAuthenticated, requiere('estados_trabajo', 'update')])
def reordenar_estados(request):
    """Aplica un nuevo orden a los estados en una sola transacción."""
    datos = request.data.get('estados', []) if isinstance(request.data, dict) else request.data
    serializer = ReordenarItemSerializer(data=datos, many=True)
    serializer.is_valid(raise_exception=True)
    items = serializer.validated_data
    if not items:
        raise ValidationError({'detail': 'Debe enviar al menos un estado'})

    nuevos = {item['id']: item['orden'] for item in items}
    if len(set(nuevos.values())) != len(nuevos):
        raise ValidationError({'detail': 'Los valores de orden no pueden repetirse'})

    estados = {e.pk: e for e in EstadoTrabajo.objects.filter(pk__in=nuevos.keys())}
    faltantes = set(nuevos) - set(estados)
    if faltantes:
        raise NotFound(f"Estados no encontrados: {', '.join(str(pk) for pk in sorted(faltantes))}")

    ocupados = EstadoTrabajo.objects.exclude(pk__in=nuevos.keys()).filter(orden__in=nuevos.values())
    if ocupados.exists():
        raise ValidationError({'detail': 'El orden indicado ya está asignado a otro estado'})

    with transaction.atomic():
        # Valores temporales para no chocar con la restricción de unicidad
        base = (EstadoTrabajo.objects.order_by('-orden').values_list('orden', flat=True).first() or 0) + 1
        for i, estado in enumerate(estados.values()):
            estado.orden = base + i
            estado.save(update_fields=['orden'])
        for pk, orden in nuevos.items():
            estado = estados[pk]
            estado.orden = orden
            estado.save(update_fields=['orden', 'actualizado'])

    return respuesta(
        {'estados': EstadoTrabajoSerializer(EstadoTrabajo.objects.all(), many=True).data},
        'Estados reordenados exitosamente',
        status.HTTP_200_OK,
    )


# Bitácora de cambios de estado

class RegistroEstadoMixin(RespuestaEstandarMixin):
    serializer_class = RegistroEstadoSerializer
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'servicios'
    clave_objeto = 'registro'
    clave_listado = 'registros'
    mensaje_no_encontrado = 'Registro de estado no encontrado'

    def get_queryset(self):
        queryset = RegistroEstado.objects.select_related(
            'servicio', 'estado_anterior', 'estado_nuevo', 'cambiado_por'
        )
        return limitar_a_sucursal(queryset, self.request.user, campo='servicio__sucursal')


class RegistroEstadoListView(RegistroEstadoMixin, generics.ListAPIView):
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = RegistroEstadoFilter
    ordering = ['-creado']


class RegistroEstadoDetailView(RegistroEstadoMixin, generics.RetrieveAPIView):
    pass


class RegistrosPorServicioView(RegistroEstadoMixin, generics.ListAPIView):
    pagination_class = None

    def get_queryset(self):
        servicio_id = self.kwargs['servicio_id']
        if not Servicio.objects.filter(pk=servicio_id).exists():
            raise NotFound('Servicio no encontrado')
        return super().get_queryset().filter(servicio_id=servicio_id).order_by('creado')


@api_view(['GET'])
@permission_classes([IsAuthenticated, requiere('servicios', 'read')])
def estadisticas_registros(request):
    """Conteo de cambios de estado por estado destino y por usuario."""
    queryset = limitar_a_sucursal(RegistroEstado.objects.all(), request.user, campo='servicio__sucursal')
    queryset, _ = aplicar_filtros(RegistroEstadoFilter, request.query_params, queryset)

    por_estado = (
        queryset.values('estado_nuevo__id', 'estado_nuevo__nombre', 'estado_nuevo__color')
        .annotate(total=Count('id'))
        .order_by('estado_nuevo__orden')
    )
    por_usuario = (
        queryset.exclude(cambiado_por__isnull=True)
        .values('cambiado_por__id', 'cambiado_por__nombre', 'cambiado_por__email')
        .annotate(total=Count('id'))
        .order_by('-total')
    )
    hoy = timezone.localdate()
    return respuesta({
        'total_cambios': queryset.count(),
        'cambios_hoy': queryset.filter(creado__date=hoy).count(),
        'por_estado': [
            {
                'estado': fila['estado_nuevo__id'],
                'nombre': fila['estado_nuevo__nombre'],
                'color': fila['estado_nuevo__color'],
                'total': fila['total'],
            }
            for fila in por_estado
        ],
        'por_usuario': [
            {
                'usuario': fila['cambiado_por__id'],
                'nombre': fila['cambiado_por__nombre'] or fila['cambiado_por__email'],
                'total': fila['total'],
            }
            for fila in por_usuario
        ],
    })
