from datetime import timedelta

import pytest
from django.utils import timezone

from citas.models import Cita
from clientes.models import Cliente
from servicios.models import Servicio
from vehiculos.models import Vehiculo

pytestmark = pytest.mark.django_db

FIRMA = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk"


def _datos(cliente, vehiculo, **extra):
    datos = {
        "cliente": cliente.pk,
        "vehiculo": vehiculo.pk,
        "kilometraje": 85400,
        "nivel_combustible": "1/2",
        "llantas_ok": False,
        "observaciones_recepcion": "Rayón en la puerta trasera",
        "firma_cliente": FIRMA,
        "fotos_recepcion": ["https://fotos.taller.com/1.jpg"],
    }
    datos.update(extra)
    return datos


def test_recibir_vehiculo_con_cita(recepcion_client, recepcionista, cliente, vehiculo, sucursal, estados):
    cita = Cita.objects.create(cliente=cliente, vehiculo=vehiculo, sucursal=sucursal, fecha_programada=timezone.now())

    response = recepcion_client.post(
        "/api/recepcion/recibir-vehiculo/", _datos(cliente, vehiculo, cita=cita.pk), format="json"
    )

    assert response.status_code == 201
    servicio = Servicio.objects.get(pk=response.json()["data"]["servicio"]["id"])
    assert servicio.estado == estados["recibido"]
    assert servicio.monto_total == 0
    assert servicio.comision_mecanico == 0
    assert servicio.sucursal == sucursal
    assert servicio.recibido_por == recepcionista
    assert servicio.fecha_recepcion is not None
    assert servicio.firma_cliente == FIRMA
    assert servicio.llantas_ok is False and servicio.luces_ok is True
    cita.refresh_from_db()
    assert cita.estado == "recibida"


def test_firma_invalida(recepcion_client, cliente, vehiculo, estados):
    response = recepcion_client.post(
        "/api/recepcion/recibir-vehiculo/", _datos(cliente, vehiculo, firma_cliente="firma"), format="json"
    )

    assert response.status_code == 400
    assert response.json()["message"] == "La firma del cliente debe ser una imagen válida"


def test_kilometraje_negativo(recepcion_client, cliente, vehiculo, estados):
    response = recepcion_client.post(
        "/api/recepcion/recibir-vehiculo/", _datos(cliente, vehiculo, kilometraje=-5), format="json"
    )

    assert response.status_code == 400
    assert not Servicio.objects.exists()


def test_vehiculo_de_otro_cliente(recepcion_client, vehiculo, estados):
    otro = Cliente.objects.create(nombre="María López", telefono="3157778899")

    response = recepcion_client.post("/api/recepcion/recibir-vehiculo/", _datos(otro, vehiculo), format="json")

    assert response.status_code == 404


def test_citas_de_hoy_de_la_sucursal(recepcion_client, cliente, vehiculo, sucursal, otra_sucursal):
    hoy = Cita.objects.create(cliente=cliente, vehiculo=vehiculo, sucursal=sucursal, fecha_programada=timezone.now())
    otro_vehiculo = Vehiculo.objects.create(cliente=cliente, placa="RTY321", marca="Kia", modelo="Picanto", anio=2019)
    Cita.objects.create(cliente=cliente, vehiculo=otro_vehiculo, sucursal=otra_sucursal, fecha_programada=timezone.now())
    Cita.objects.create(cliente=cliente, vehiculo=vehiculo, sucursal=sucursal,
                        fecha_programada=timezone.now() + timedelta(days=3))

    response = recepcion_client.get("/api/recepcion/hoy/")

    assert response.status_code == 200
    assert [c["id"] for c in response.json()["data"]["citas"]] == [hoy.pk]


def test_detalle_de_recepcion(recepcion_client, crear_servicio):
    servicio = crear_servicio(kilometraje=1200, nivel_combustible="FULL")

    response = recepcion_client.get(f"/api/recepcion/servicio/{servicio.pk}/")

    assert response.status_code == 200
    assert response.json()["data"]["servicio"]["nivel_combustible"] == "FULL"


def test_recibir_vehiculo_sin_cita(recepcion_client, cliente, vehiculo, estados):
    response = recepcion_client.post(
        "/api/recepcion/recibir-vehiculo/",
        _datos(cliente, vehiculo, descripcion_problema="Falla en el arranque"),
        format="json",
    )

    assert response.status_code == 201
    servicio = Servicio.objects.get(pk=response.json()["data"]["servicio"]["id"])
    assert servicio.cita is None
    assert servicio.estado == estados["recibido"]
    assert servicio.descripcion_problema == "Falla en el arranque"
    assert servicio.kilometraje == 85400


def test_cita_inexistente(recepcion_client, cliente, vehiculo, estados):
    response = recepcion_client.post(
        "/api/recepcion/recibir-vehiculo/", _datos(cliente, vehiculo, cita=99999), format="json"
    )

    assert response.status_code == 404
    assert not Servicio.objects.exists()
