from __future__ import annotations

import logging
from typing import Any, Dict

from django.db import transaction
from django.db.models import Prefetch, QuerySet
from django.utils import timezone
from rest_framework.exceptions import NotFound

from citas.models import Cita
from servicios.models import Servicio
from servicios.services import obtener_estado_inicial
from users.permissions import limitar_a_sucursal

logger = logging.getLogger(__name__)


@transaction.atomic
def recibir_vehiculo(user, datos: Dict[str, Any]) -> Servicio:
    """Registra la entrada del vehículo al taller como un servicio nuevo.

    Los montos quedan en cero hasta la cotización. Si viene de una cita, la
    cita pasa a ``recibida``.
    """
    cliente = datos["cliente"]
    vehiculo = datos["vehiculo"]
    if vehiculo.cliente_id != cliente.pk:
        raise NotFound("Vehículo no encontrado o no pertenece al cliente")

    cita = datos.get("cita")
    servicio = Servicio.objects.create(
        cita=cita,
        cliente=cliente,
        vehiculo=vehiculo,
        sucursal=user.sucursal,
        estado=obtener_estado_inicial(),
        descripcion_problema=datos.get("descripcion_problema") or (cita.notas if cita else None),
        kilometraje=datos["kilometraje"],
        nivel_combustible=datos["nivel_combustible"],
        luces_ok=datos.get("luces_ok", True),
        llantas_ok=datos.get("llantas_ok", True),
        cristales_ok=datos.get("cristales_ok", True),
        carroceria_ok=datos.get("carroceria_ok", True),
        observaciones_recepcion=datos.get("observaciones_recepcion") or None,
        firma_cliente=datos["firma_cliente"],
        fotos_recepcion=datos.get("fotos_recepcion") or [],
        recibido_por=user,
        fecha_recepcion=timezone.now(),
        creado_por=user,
    )

    if cita is not None:
        cita.estado = "recibida"
        cita.save(update_fields=["estado", "actualizado"])

    logger.info(f"Vehículo {vehiculo.placa} recibido (servicio #{servicio.pk}) por {user.email}")
    return servicio


def citas_del_dia(user) -> QuerySet[Cita]:
    hoy = timezone.localdate()
    servicios = Servicio.objects.select_related("cliente", "vehiculo", "estado", "recibido_por")
    queryset = (
        Cita.objects.select_related("cliente", "vehiculo")
        .prefetch_related(Prefetch("servicios", queryset=servicios))
        .filter(fecha_programada__date=hoy)
        .exclude(estado="cancelada")
        .order_by("fecha_programada")
    )
    return limitar_a_sucursal(queryset, user)
