"""Sobre estándar de respuestas de la API: ``{success, message, data}``.

Incluye el manejador de excepciones configurado en ``REST_FRAMEWORK`` y el
mixin que envuelven las respuestas de las vistas genéricas y viewsets.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)

MENSAJE_ERROR_INTERNO = "Error interno del servidor"


def respuesta(data: Any = None, message: str = "", status_code: int = status.HTTP_200_OK) -> Response:
    return Response(
        {"success": status_code < 400, "message": message, "data": data},
        status=status_code,
    )


def _primer_mensaje(detalle: Any) -> str:
    """Extrae el primer texto legible de un detalle de error de DRF."""
    if isinstance(detalle, dict):
        if "detail" in detalle:
            return _primer_mensaje(detalle["detail"])
        for valor in detalle.values():
            mensaje = _primer_mensaje(valor)
            if mensaje:
                return mensaje
        return ""
    if isinstance(detalle, (list, tuple)):
        for valor in detalle:
            mensaje = _primer_mensaje(valor)
            if mensaje:
                return mensaje
        return ""
    return str(detalle) if detalle is not None else ""


def manejador_excepciones(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        vista = context.get("view")
        logger.exception(
            f"Error no controlado en {vista.__class__.__name__ if vista else 'vista desconocida'}",
            exc_info=exc,
        )
        set_rollback()
        return Response(
            {"success": False, "message": MENSAJE_ERROR_INTERNO, "data": None},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    cuerpo: Dict[str, Any] = {
        "success": False,
        "message": _primer_mensaje(response.data) or "Error en la solicitud",
        "data": None,
    }
    if isinstance(exc, exceptions.ValidationError):
        cuerpo["errors"] = response.data
    response.data = cuerpo
    return response


class RespuestaEstandarMixin:
    """Envuelve list/retrieve/create/update/destroy en el sobre estándar.

    - ``clave_objeto``: clave bajo ``data`` para un único registro (``cliente``).
    - ``clave_listado``: clave bajo ``data`` para listados (``clientes``).
    - ``serializer_salida``: serializer usado para responder tras escribir.
    - ``mensajes``: mensajes por acción (``create``, ``update``, ``destroy``...).
    """
    clave_objeto = "item"
    clave_listado = "items"
    serializer_salida: Optional[type] = None
    mensaje_no_encontrado = "Registro no encontrado"
    mensajes: Dict[str, str] = {}

    def _mensaje(self, accion: str) -> str:
        return self.mensajes.get(accion, "")

    def get_object(self):
        try:
            return super().get_object()
        except Http404:
            raise exceptions.NotFound(self.mensaje_no_encontrado)

    def serializar_salida(self, instancia):
        if self.serializer_salida is None:
            return self.get_serializer(instancia).data
        return self.serializer_salida(instancia, context=self.get_serializer_context()).data

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        serializer = self.get_serializer(queryset, many=True)
        return respuesta({self.clave_listado: serializer.data}, self._mensaje("list"))

    def retrieve(self, request, *args, **kwargs):
        instancia = self.get_object()
        return respuesta({self.clave_objeto: self.serializar_salida(instancia)}, self._mensaje("retrieve"))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        return respuesta(
            {self.clave_objeto: self.serializar_salida(serializer.instance)},
            self._mensaje("create"),
            status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instancia = self.get_object()
        serializer = self.get_serializer(instancia, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return respuesta({self.clave_objeto: self.serializar_salida(serializer.instance)}, self._mensaje("update"))

    def destroy(self, request, *args, **kwargs):
        instancia = self.get_object()
        self.perform_destroy(instancia)
        return respuesta(None, self._mensaje("destroy"))
