from datetime import timedelta

import pytest
from django.utils import timezone

from citas.models import Cita
from clientes.models import Cliente

pytestmark = pytest.mark.django_db


def test_whatsapp_se_copia_al_telefono(recepcion_client):
    response = recepcion_client.post("/api/clientes/", {
        "nombre": "Juan Pérez",
        "whatsapp": "3001234567",
    }, format="json")

    assert response.status_code == 201
    cliente = response.json()["data"]["cliente"]
    assert cliente["telefono"] == "3001234567"


def test_cliente_sin_telefono_ni_whatsapp(recepcion_client):
    response = recepcion_client.post("/api/clientes/", {"nombre": "Ana Ruiz"}, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Debe registrar al menos un teléfono o WhatsApp"


def test_telefono_corto_invalido(recepcion_client):
    response = recepcion_client.post("/api/clientes/", {"nombre": "Ana Ruiz", "telefono": "12345"}, format="json")

    assert response.status_code == 400
    assert "telefono" in response.json()["errors"]


def test_email_unico(recepcion_client, cliente):
    cliente.email = "carlos@correo.com"
    cliente.save()

    response = recepcion_client.post("/api/clientes/", {
        "nombre": "Otro Carlos",
        "telefono": "3109876543",
        "email": "CARLOS@correo.com",
    }, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Ya existe un cliente con este email"


def test_listado_solo_activos_por_defecto(recepcion_client, cliente):
    Cliente.objects.create(nombre="Inactivo", telefono="3000000000", activo=False)

    response = recepcion_client.get("/api/clientes/")

    data = response.json()["data"]
    assert [c["nombre"] for c in data["clientes"]] == ["Carlos Pérez"]
    assert data["pagination"]["total"] == 1


def test_eliminar_cliente_es_logico(encargado_client, cliente):
    response = encargado_client.delete(f"/api/clientes/{cliente.pk}/")

    assert response.status_code == 200
    cliente.refresh_from_db()
    assert cliente.activo is False


def test_no_se_elimina_cliente_con_citas_activas(encargado_client, cliente, vehiculo, sucursal):
    Cita.objects.create(cliente=cliente, vehiculo=vehiculo, sucursal=sucursal, fecha_programada=timezone.now() + timedelta(days=1))

    response = encargado_client.delete(f"/api/clientes/{cliente.pk}/")

    assert response.status_code == 400
    assert response.json()["message"] == "No se puede eliminar el cliente porque tiene citas activas"
    cliente.refresh_from_db()
    assert cliente.activo is True


def test_recepcionista_no_puede_eliminar(recepcion_client, cliente):
    response = recepcion_client.delete(f"/api/clientes/{cliente.pk}/")

    assert response.status_code == 403


def test_activar_cliente(encargado_client, cliente):
    cliente.activo = False
    cliente.save()

    response = encargado_client.post(f"/api/clientes/{cliente.pk}/activar/")

    assert response.status_code == 200
    assert response.json()["data"]["cliente"]["activo"] is True


def test_cliente_inexistente(recepcion_client):
    response = recepcion_client.get("/api/clientes/999999/")

    assert response.status_code == 404
    assert response.json()["message"] == "Cliente no encontrado"
