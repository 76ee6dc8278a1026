from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List

from django.db.models import Count, Q, Sum

from users.permissions import limitar_a_sucursal

from .models import Mecanico

CENTAVOS = Decimal("0.01")


def reporte_comisiones(user, fecha_desde=None, fecha_hasta=None) -> Dict[str, Any]:
    """Servicios, ingresos y comisiones por mecánico, ordenado por ingresos."""
    from servicios.models import EstadoTrabajo

    filtro = Q()
    if fecha_desde:
        filtro &= Q(servicios__creado__date__gte=fecha_desde)
    if fecha_hasta:
        filtro &= Q(servicios__creado__date__lte=fecha_hasta)

    mecanicos = limitar_a_sucursal(Mecanico.objects.all(), user).annotate(
        total_servicios=Count("servicios", filter=filtro),
        servicios_completados=Count(
            "servicios", filter=filtro & Q(servicios__estado__tipo=EstadoTrabajo.TIPO_TERMINADO)
        ),
        ingresos=Sum("servicios__monto_total", filter=filtro),
        comisiones=Sum("servicios__comision_mecanico", filter=filtro),
    )

    filas: List[Dict[str, Any]] = []
    for mecanico in mecanicos:
        total = mecanico.total_servicios
        ingresos = mecanico.ingresos or Decimal("0.00")
        filas.append({
            "id": mecanico.pk,
            "nombre": mecanico.nombre,
            "porcentaje_comision": mecanico.porcentaje_comision,
            "activo": mecanico.activo,
            "rendimiento": {
                "total_servicios": total,
                "servicios_completados": mecanico.servicios_completados,
                "tasa_completados": (
                    (Decimal(mecanico.servicios_completados) * 100 / total).quantize(CENTAVOS, ROUND_HALF_UP)
                    if total else Decimal("0.00")
                ),
                "ingresos": ingresos,
                "comisiones": mecanico.comisiones or Decimal("0.00"),
                "promedio_servicio": (ingresos / total).quantize(CENTAVOS, ROUND_HALF_UP) if total else Decimal("0.00"),
            },
        })
    filas.sort(key=lambda fila: (-fila["rendimiento"]["ingresos"], fila["nombre"]))

    return {
        "mecanicos": filas,
        "resumen": {
            "total_mecanicos": len(filas),
            "mecanicos_activos": sum(1 for fila in filas if fila["activo"]),
            "ingresos": sum((fila["rendimiento"]["ingresos"] for fila in filas), Decimal("0.00")),
            "comisiones": sum((fila["rendimiento"]["comisiones"] for fila in filas), Decimal("0.00")),
        },
    }
