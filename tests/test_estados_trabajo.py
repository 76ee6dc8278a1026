import pytest

from servicios.models import EstadoTrabajo

pytestmark = pytest.mark.django_db


def test_estados_base_ordenados(recepcion_client, estados):
    response = recepcion_client.get("/api/estados-trabajo/")

    nombres = [e["nombre"] for e in response.json()["data"]["estados"]]
    assert nombres == ["Recibido", "Cotizado", "En Proceso", "Terminado", "Rechazado"]


def test_crear_estado_normaliza_color(encargado_client, estados):
    response = encargado_client.post("/api/estados-trabajo/", {
        "nombre": "Esperando repuestos", "orden": 6, "color": "#abcdef",
    }, format="json")

    assert response.status_code == 201
    assert response.json()["data"]["estado"]["color"] == "#ABCDEF"


@pytest.mark.parametrize("datos,mensaje", [
    ({"nombre": "Nuevo", "orden": 1}, "Ya existe un estado con este orden"),
    ({"nombre": "recibido", "orden": 9}, "Ya existe un estado con este nombre"),
    ({"nombre": "Nuevo", "orden": 9, "color": "rojo"}, "El color debe tener formato hexadecimal #RRGGBB"),
])
def test_validaciones_de_estado(encargado_client, estados, datos, mensaje):
    response = encargado_client.post("/api/estados-trabajo/", datos, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == mensaje


def test_recepcionista_no_crea_estados(recepcion_client, estados):
    response = recepcion_client.post("/api/estados-trabajo/", {"nombre": "Nuevo", "orden": 9}, format="json")

    assert response.status_code == 403


def test_reordenar_estados(encargado_client, estados):
    recibido, cotizado = estados["recibido"], estados["cotizado"]

    response = encargado_client.post("/api/estados-trabajo/reordenar/", {"estados": [
        {"id": recibido.pk, "orden": 2},
        {"id": cotizado.pk, "orden": 1},
    ]}, format="json")

    assert response.status_code == 200
    recibido.refresh_from_db()
    cotizado.refresh_from_db()
    assert (recibido.orden, cotizado.orden) == (2, 1)
    assert EstadoTrabajo.inicial() == cotizado


def test_reordenar_con_orden_ocupado(encargado_client, estados):
    response = encargado_client.post("/api/estados-trabajo/reordenar/", {"estados": [
        {"id": estados["recibido"].pk, "orden": 3},
    ]}, format="json")

    assert response.status_code == 400


def test_no_se_elimina_estado_en_uso(encargado_client, crear_servicio, estados):
    crear_servicio()

    response = encargado_client.delete(f"/api/estados-trabajo/{estados['recibido'].pk}/")

    assert response.status_code == 400
    assert EstadoTrabajo.objects.filter(pk=estados["recibido"].pk).exists()
