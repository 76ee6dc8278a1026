from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.db import transaction
from django.db.models import QuerySet
from rest_framework.exceptions import NotFound, ValidationError

from citas.models import Cita
from citas.services import MENSAJE_CONFLICTO
from taller_backend.filtros import aplicar_filtros
from users.permissions import limitar_a_sucursal

from .filters import OportunidadFilter
from .models import Oportunidad

logger = logging.getLogger(__name__)


def validar_relaciones_oportunidad(attrs: Dict[str, Any], instancia: Optional[Oportunidad] = None) -> Dict[str, Any]:
    cliente = attrs.get("cliente", getattr(instancia, "cliente", None))
    vehiculo = attrs.get("vehiculo", getattr(instancia, "vehiculo", None))

    if vehiculo is not None and cliente is not None and vehiculo.cliente_id != cliente.pk:
        raise NotFound("Vehículo no encontrado o no pertenece al cliente")

    servicio = attrs.get("servicio")
    if servicio is not None:
        if servicio.cliente_id != cliente.pk or servicio.vehiculo_id != vehiculo.pk:
            raise ValidationError({"servicio": "El servicio no corresponde al cliente y vehículo indicados"})
    return attrs


def filtrar_oportunidades(user, params) -> QuerySet[Oportunidad]:
    queryset = Oportunidad.objects.select_related("cliente", "vehiculo", "servicio", "sucursal")
    queryset = limitar_a_sucursal(queryset, user)
    queryset, _ = aplicar_filtros(OportunidadFilter, params, queryset)
    return queryset


def _verificar_abierta(oportunidad: Oportunidad) -> None:
    if oportunidad.estado == "convertida":
        raise ValidationError({"detail": "La oportunidad ya fue convertida"})
    if oportunidad.estado == "rechazada":
        raise ValidationError({"detail": "No se puede convertir una oportunidad rechazada"})


def convertir_oportunidad(oportunidad: Oportunidad) -> Oportunidad:
    _verificar_abierta(oportunidad)
    oportunidad.estado = "convertida"
    oportunidad.save(update_fields=["estado", "actualizado"])
    return oportunidad


@transaction.atomic
def convertir_a_cita(oportunidad: Oportunidad, user, fecha_programada, notas: Optional[str] = None) -> Cita:
    """Marca la oportunidad como convertida y agenda la cita correspondiente."""
    _verificar_abierta(oportunidad)
    if Cita.existe_conflicto(oportunidad.vehiculo, fecha_programada):
        raise ValidationError({"fecha_programada": MENSAJE_CONFLICTO})

    oportunidad.estado = "convertida"
    oportunidad.save(update_fields=["estado", "actualizado"])

    cita = Cita.objects.create(
        cliente=oportunidad.cliente,
        vehiculo=oportunidad.vehiculo,
        sucursal=oportunidad.sucursal or user.sucursal,
        fecha_programada=fecha_programada,
        notas=notas or f"Cita generada desde oportunidad: {oportunidad.descripcion}",
        oportunidad=oportunidad,
        desde_oportunidad=True,
        creado_por=user,
    )
    logger.info(f"Oportunidad #{oportunidad.pk} convertida en la cita #{cita.pk}")
    return cita
