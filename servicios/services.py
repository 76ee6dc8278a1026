from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd
from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from taller_backend.filtros import aplicar_filtros
from users.permissions import limitar_a_sucursal

from .filters import ServicioFilter
from .models import EstadoTrabajo, RegistroEstado, Servicio

logger = logging.getLogger(__name__)

CENTAVOS = Decimal("0.01")

ESTADOS_BASE: List[Dict[str, Any]] = [
    {"nombre": "Recibido", "orden": 1, "color": "#EF4444", "tipo": EstadoTrabajo.TIPO_RECIBIDO},
    {"nombre": "Cotizado", "orden": 2, "color": "#F59E0B", "tipo": EstadoTrabajo.TIPO_COTIZADO},
    {"nombre": "En Proceso", "orden": 3, "color": "#8B5CF6", "tipo": EstadoTrabajo.TIPO_EN_PROCESO},
    {"nombre": "Terminado", "orden": 4, "color": "#10B981", "tipo": EstadoTrabajo.TIPO_TERMINADO},
    {"nombre": "Rechazado", "orden": 5, "color": "#6B7280", "tipo": EstadoTrabajo.TIPO_RECHAZADO},
]

COLUMNAS_EXPORTACION = [
    "ID",
    "Fecha",
    "Cliente",
    "Placa",
    "Vehículo",
    "Mecánico",
    "Estado",
    "Mano de obra",
    "Repuestos",
    "Monto total",
    "Comisión mecánico",
    "Inicio",
    "Fin",
]


def calcular_comision(monto_total, porcentaje) -> Decimal:
    """Comisión del mecánico: monto_total * porcentaje / 100, redondeado a 2 decimales."""
    monto = Decimal(str(monto_total or 0))
    pct = Decimal(str(porcentaje or 0))
    return (monto * pct / Decimal("100")).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def crear_estados_base() -> int:
    """Crea los estados de trabajo del flujo estándar si la tabla está vacía."""
    if EstadoTrabajo.objects.exists():
        return 0
    for datos in ESTADOS_BASE:
        EstadoTrabajo.objects.create(**datos)
    logger.info(f"Estados de trabajo base creados: {len(ESTADOS_BASE)}")
    return len(ESTADOS_BASE)


def validar_relaciones_servicio(attrs: Dict[str, Any], instancia: Optional[Servicio] = None) -> Dict[str, Any]:
    """Verifica que cliente, vehículo, mecánico y cita sean coherentes entre sí."""
    cliente = attrs.get("cliente", getattr(instancia, "cliente", None))
    vehiculo = attrs.get("vehiculo", getattr(instancia, "vehiculo", None))

    if vehiculo is not None and cliente is not None and vehiculo.cliente_id != cliente.pk:
        raise NotFound("Vehículo no encontrado o no pertenece al cliente")

    mecanico = attrs.get("mecanico")
    if mecanico is not None and not mecanico.activo:
        if instancia is None or instancia.mecanico_id != mecanico.pk:
            raise ValidationError({"mecanico": "El mecánico seleccionado no está activo"})

    cita = attrs.get("cita")
    if cita is not None:
        if cita.cliente_id != getattr(cliente, "pk", None) or cita.vehiculo_id != getattr(vehiculo, "pk", None):
            raise ValidationError({"cita": "La cita no corresponde al cliente y vehículo indicados"})

    return attrs


def obtener_estado_inicial() -> EstadoTrabajo:
    estado = EstadoTrabajo.inicial()
    if estado is None:
        raise ValidationError({"estado": "No hay estados de trabajo configurados"})
    return estado


def crear_servicio(user, validated_data: Dict[str, Any]) -> Servicio:
    """Crea la orden de servicio. La comisión se guarda tal como llega."""
    datos = dict(validated_data)
    if not datos.get("estado"):
        datos["estado"] = obtener_estado_inicial()
    if not datos.get("sucursal"):
        datos["sucursal"] = user.sucursal
    servicio = Servicio.objects.create(creado_por=user, **datos)
    logger.info(f"Servicio #{servicio.pk} creado para vehículo {servicio.vehiculo.placa}")
    return servicio


def filtrar_servicios(user, params) -> QuerySet[Servicio]:
    """Construye el queryset de servicios según sucursal y filtros enviados."""
    queryset = Servicio.objects.select_related(
        "cliente", "vehiculo", "mecanico", "estado", "sucursal"
    )
    queryset = limitar_a_sucursal(queryset, user)
    queryset, filtros = aplicar_filtros(ServicioFilter, params, queryset)
    fecha_desde = filtros.get("fecha_desde")
    fecha_hasta = filtros.get("fecha_hasta")

    # Sin rango de fechas, los servicios finalizados solo aparecen el día en que se cerraron
    if not fecha_desde and not fecha_hasta:
        hoy = timezone.localdate()
        queryset = queryset.filter(
            ~Q(estado__tipo__in=EstadoTrabajo.TIPOS_FINALES)
            | Q(fecha_fin__date=hoy)
            | Q(actualizado__date=hoy)
        )

    return queryset


@transaction.atomic
def cambiar_estado_servicio(servicio: Servicio, nuevo_estado: EstadoTrabajo, user, notas: Optional[str] = None) -> RegistroEstado:
    """Mueve el servicio al nuevo estado y deja el registro en la bitácora.

    No hay grafo de transiciones: cualquier estado puede pasar a cualquier otro.
    """
    if servicio.estado_id == nuevo_estado.pk:
        raise ValidationError({"detail": "El servicio ya tiene este estado"})

    estado_anterior = servicio.estado
    ahora = timezone.now()
    campos = ["estado", "actualizado"]

    servicio.estado = nuevo_estado
    if nuevo_estado.tipo == EstadoTrabajo.TIPO_EN_PROCESO and servicio.fecha_inicio is None:
        servicio.fecha_inicio = ahora
        campos.append("fecha_inicio")
    if nuevo_estado.es_final:
        servicio.fecha_fin = ahora
        campos.append("fecha_fin")
    elif servicio.fecha_fin is not None:
        # Reabierto: vuelve a contar como trabajo en curso
        servicio.fecha_fin = None
        campos.append("fecha_fin")
    servicio.save(update_fields=campos)

    registro = RegistroEstado.objects.create(
        servicio=servicio,
        estado_anterior=estado_anterior,
        estado_nuevo=nuevo_estado,
        notas=notas or None,
        cambiado_por=user,
    )
    logger.info(
        f"Servicio #{servicio.pk}: {estado_anterior.nombre} -> {nuevo_estado.nombre} "
        f"(usuario {getattr(user, 'email', None)})"
    )
    return registro


def iniciar_servicio(servicio: Servicio, user) -> Servicio:
    if servicio.iniciado:
        raise ValidationError({"detail": "El servicio ya fue iniciado"})
    if servicio.finalizado:
        raise ValidationError({"detail": "El servicio ya fue finalizado"})

    estado_proceso = EstadoTrabajo.del_tipo(EstadoTrabajo.TIPO_EN_PROCESO)
    if estado_proceso is not None and servicio.estado_id != estado_proceso.pk:
        cambiar_estado_servicio(servicio, estado_proceso, user, "Servicio iniciado")
    else:
        servicio.fecha_inicio = timezone.now()
        servicio.save(update_fields=["fecha_inicio", "actualizado"])
    return servicio


def completar_servicio(servicio: Servicio, user, notas: Optional[str] = None) -> Servicio:
    if not servicio.iniciado:
        raise ValidationError({"detail": "El servicio debe iniciarse antes de completarse"})
    if servicio.estado.tipo == EstadoTrabajo.TIPO_TERMINADO:
        raise ValidationError({"detail": "El servicio ya está completado"})

    estado_terminado = EstadoTrabajo.del_tipo(EstadoTrabajo.TIPO_TERMINADO)
    if estado_terminado is None:
        raise NotFound("No existe un estado de trabajo de tipo terminado")
    cambiar_estado_servicio(servicio, estado_terminado, user, notas or "Servicio completado")
    return servicio


@transaction.atomic
def eliminar_servicio(servicio: Servicio) -> None:
    """Elimina un servicio que aún no ha avanzado en el flujo, con su bitácora y oportunidades."""
    if servicio.iniciado or servicio.estado.orden > 1:
        raise ValidationError({
            "detail": "No se puede eliminar un servicio que ya fue iniciado o avanzó de estado"
        })
    servicio.registros_estado.all().delete()
    servicio.oportunidades.all().delete()
    servicio.delete()


def historial_servicios(user, tipo: str, objeto_id: int) -> QuerySet[Servicio]:
    """Servicios de un cliente o de un vehículo, limitados a la sucursal del usuario."""
    from clientes.models import Cliente
    from vehiculos.models import Vehiculo

    if tipo == "cliente":
        if not Cliente.objects.filter(pk=objeto_id).exists():
            raise NotFound("Cliente no encontrado")
        filtro = {"cliente_id": objeto_id}
    elif tipo == "vehiculo":
        if not Vehiculo.objects.filter(pk=objeto_id).exists():
            raise NotFound("Vehículo no encontrado")
        filtro = {"vehiculo_id": objeto_id}
    else:
        raise ValidationError({"tipo": "El tipo de historial debe ser 'cliente' o 'vehiculo'"})

    queryset = Servicio.objects.select_related(
        "cliente", "vehiculo", "mecanico", "estado", "sucursal"
    ).filter(**filtro)
    return limitar_a_sucursal(queryset, user).order_by("-creado")


def servicios_con_comision_inconsistente(queryset: Optional[QuerySet[Servicio]] = None) -> List[Dict[str, Any]]:
    """Servicios cuya comisión guardada difiere de la calculada con el porcentaje del mecánico."""
    if queryset is None:
        queryset = Servicio.objects.select_related("mecanico").filter(mecanico__isnull=False)
    inconsistentes: List[Dict[str, Any]] = []
    for servicio in queryset:
        calculada = calcular_comision(servicio.monto_total, servicio.mecanico.porcentaje_comision)
        if servicio.comision_mecanico != calculada:
            inconsistentes.append({
                "servicio": servicio.pk,
                "mecanico": servicio.mecanico.nombre,
                "monto_total": servicio.monto_total,
                "comision_guardada": servicio.comision_mecanico,
                "comision_calculada": calculada,
            })
    return inconsistentes


def _fecha(valor) -> str:
    if not valor:
        return ""
    return timezone.localtime(valor).strftime("%Y-%m-%d %H:%M")


def generar_filas_exportacion(queryset: Iterable[Servicio]) -> List[List[Any]]:
    filas: List[List[Any]] = []
    for servicio in queryset:
        filas.append([
            servicio.pk,
            _fecha(servicio.creado),
            servicio.cliente.nombre,
            servicio.vehiculo.placa,
            f"{servicio.vehiculo.marca} {servicio.vehiculo.modelo}",
            servicio.mecanico.nombre if servicio.mecanico else "",
            servicio.estado.nombre,
            float(servicio.precio_mano_obra),
            float(servicio.precio_repuestos),
            float(servicio.monto_total),
            float(servicio.comision_mecanico),
            _fecha(servicio.fecha_inicio),
            _fecha(servicio.fecha_fin),
        ])
    return filas


def construir_excel_servicios(filas: List[List[Any]]) -> bytes:
    df = pd.DataFrame(filas, columns=COLUMNAS_EXPORTACION)
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Servicios")
    return buffer.getvalue()
