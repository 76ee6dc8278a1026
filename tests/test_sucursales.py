import pytest

from sucursales.models import Sucursal

pytestmark = pytest.mark.django_db


def test_crear_sucursal_normaliza_codigo(admin_client):
    response = admin_client.post("/api/sucursales/", {"nombre": "Centro", "codigo": " cen "}, format="json")

    assert response.status_code == 201
    assert response.json()["data"]["sucursal"]["codigo"] == "CEN"


def test_codigo_duplicado(admin_client, sucursal):
    response = admin_client.post("/api/sucursales/", {"nombre": "Otra", "codigo": "nte"}, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Ya existe una sucursal con este código"


def test_eliminar_sucursal_con_registros_la_desactiva(admin_client, sucursal, recepcionista):
    response = admin_client.delete(f"/api/sucursales/{sucursal.pk}/")

    assert response.status_code == 200
    sucursal.refresh_from_db()
    assert sucursal.activo is False


def test_eliminar_sucursal_vacia(admin_client, otra_sucursal):
    response = admin_client.delete(f"/api/sucursales/{otra_sucursal.pk}/")

    assert response.status_code == 200
    assert not Sucursal.objects.filter(pk=otra_sucursal.pk).exists()


def test_activas_excluye_inactivas(admin_client, sucursal, otra_sucursal):
    otra_sucursal.activo = False
    otra_sucursal.save()

    response = admin_client.get("/api/sucursales/activas/")

    codigos = [s["codigo"] for s in response.json()["data"]["sucursales"]]
    assert codigos == ["NTE"]
