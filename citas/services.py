from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from clientes.models import Cliente
from taller_backend.filtros import aplicar_filtros
from users.permissions import limitar_a_sucursal
from vehiculos.models import Vehiculo

from .filters import CitaFilter
from .models import Cita

logger = logging.getLogger(__name__)

MENSAJE_CONFLICTO = "Ya existe una cita para este vehículo en la fecha seleccionada"


def validar_cita(cliente, vehiculo, fecha, excluir_pk: Optional[int] = None) -> None:
    """El vehículo debe ser del cliente y no tener otra cita ese día."""
    if vehiculo.cliente_id != cliente.pk:
        raise NotFound("Vehículo no encontrado o no pertenece al cliente")
    if Cita.existe_conflicto(vehiculo, fecha, excluir_pk):
        raise ValidationError({"fecha_programada": MENSAJE_CONFLICTO})


def filtrar_citas(user, params) -> QuerySet[Cita]:
    queryset = Cita.objects.select_related("cliente", "vehiculo", "sucursal", "oportunidad")
    queryset = limitar_a_sucursal(queryset, user)
    queryset, _ = aplicar_filtros(CitaFilter, params, queryset)
    return queryset


def cancelar_cita(cita: Cita) -> Cita:
    if cita.estado == "cancelada":
        raise ValidationError({"detail": "La cita ya está cancelada"})
    if cita.tiene_servicios_en_curso():
        raise ValidationError({"detail": "No se puede cancelar la cita porque tiene servicios en proceso"})
    cita.estado = "cancelada"
    cita.save(update_fields=["estado", "actualizado"])
    return cita


def confirmar_cita(cita: Cita) -> Cita:
    if cita.estado != "programada":
        raise ValidationError({"detail": "Solo se pueden confirmar citas programadas"})
    cita.estado = "confirmada"
    cita.save(update_fields=["estado", "actualizado"])
    return cita


@transaction.atomic
def completar_cita(cita: Cita, user) -> Cita:
    """Completa la cita; si no generó servicio, se crea uno en el estado inicial."""
    from servicios.services import obtener_estado_inicial
    from servicios.models import Servicio

    if cita.estado in ("completada", "cancelada"):
        raise ValidationError({"detail": f"No se puede completar una cita {cita.get_estado_display().lower()}"})

    cita.estado = "completada"
    cita.save(update_fields=["estado", "actualizado"])

    if not cita.servicios.exists():
        servicio = Servicio.objects.create(
            cita=cita,
            cliente=cita.cliente,
            vehiculo=cita.vehiculo,
            sucursal=cita.sucursal,
            estado=obtener_estado_inicial(),
            descripcion_problema=cita.notas or "Servicio generado desde cita",
            creado_por=user,
        )
        logger.info(f"Servicio #{servicio.pk} generado al completar la cita #{cita.pk}")
    return cita


def interpretar_descripcion_vehiculo(descripcion: str) -> Tuple[str, str]:
    """Separa marca y modelo de una descripción libre ("Mazda 3 2015")."""
    partes = (descripcion or "").split()
    if not partes:
        return "Por definir", "Por definir"
    marca = partes[0].capitalize()
    modelo = " ".join(partes[1:]) or "Por definir"
    return marca[:50], modelo[:50]


def generar_placa_temporal() -> str:
    base = f"TEMP-{int(timezone.now().timestamp() * 1000) % 10**13}"
    placa = base
    i = 1
    while Vehiculo.objects.filter(placa=placa).exists():
        placa = f"{base}-{i}"
        i += 1
    return placa


@transaction.atomic
def crear_cita_telefonica(user, datos: Dict[str, Any]) -> Cita:
    """Agenda una cita tomada por teléfono creando cliente y vehículo provisionales."""
    nombre = datos["nombre_cliente"].strip()
    telefono = datos["telefono_cliente"].strip()

    cliente = Cliente.objects.filter(Q(telefono=telefono) | Q(whatsapp=telefono)).first()
    if cliente is None:
        cliente = Cliente.objects.create(nombre=nombre, telefono=telefono, whatsapp=telefono, creador=user)
    elif len(nombre) > len(cliente.nombre):
        cliente.nombre = nombre
        cliente.save(update_fields=["nombre", "actualizado"])

    marca, modelo = interpretar_descripcion_vehiculo(datos["descripcion_vehiculo"])
    vehiculo = Vehiculo.objects.create(
        cliente=cliente,
        placa=generar_placa_temporal(),
        marca=marca,
        modelo=modelo,
        anio=timezone.localdate().year,
        notas=f"Vehículo registrado desde cita telefónica: {datos['descripcion_vehiculo']}",
    )

    cita = Cita.objects.create(
        cliente=cliente,
        vehiculo=vehiculo,
        sucursal=user.sucursal,
        fecha_programada=datos["fecha_programada"],
        notas=datos.get("notas") or None,
        creado_por=user,
    )
    logger.info(f"Cita telefónica #{cita.pk} creada para {cliente.nombre} ({vehiculo.placa})")
    return cita
