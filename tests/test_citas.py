from datetime import timedelta

import pytest
from django.utils import timezone

from citas.models import Cita
from clientes.models import Cliente
from servicios.models import Servicio

pytestmark = pytest.mark.django_db

CONFLICTO = "Ya existe una cita para este vehículo en la fecha seleccionada"


def _manana(horas=9):
    base = timezone.localtime() + timedelta(days=1)
    return base.replace(hour=horas, minute=0, second=0, microsecond=0)


@pytest.fixture
def cita(cliente, vehiculo, sucursal):
    return Cita.objects.create(cliente=cliente, vehiculo=vehiculo, sucursal=sucursal, fecha_programada=_manana())


def test_agendar_cita(recepcion_client, cliente, vehiculo, sucursal, recepcionista):
    response = recepcion_client.post("/api/citas/", {
        "cliente": cliente.pk,
        "vehiculo": vehiculo.pk,
        "fecha_programada": _manana().isoformat(),
        "notas": "Revisión de frenos",
    }, format="json")

    assert response.status_code == 201
    data = response.json()["data"]["cita"]
    assert data["estado"] == "programada"
    assert data["sucursal"] == sucursal.pk
    assert Cita.objects.get(pk=data["id"]).creado_por == recepcionista


def test_conflicto_mismo_vehiculo_mismo_dia(recepcion_client, cita, cliente, vehiculo):
    response = recepcion_client.post("/api/citas/", {
        "cliente": cliente.pk,
        "vehiculo": vehiculo.pk,
        "fecha_programada": _manana(15).isoformat(),
    }, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == CONFLICTO


def test_cita_cancelada_no_genera_conflicto(recepcion_client, cita, cliente, vehiculo):
    cita.estado = "cancelada"
    cita.save()

    response = recepcion_client.post("/api/citas/", {
        "cliente": cliente.pk,
        "vehiculo": vehiculo.pk,
        "fecha_programada": _manana(15).isoformat(),
    }, format="json")

    assert response.status_code == 201


def test_reprogramar_misma_cita_no_choca_consigo_misma(recepcion_client, cita):
    response = recepcion_client.patch(
        f"/api/citas/{cita.pk}/", {"fecha_programada": _manana(16).isoformat()}, format="json"
    )

    assert response.status_code == 200


def test_vehiculo_de_otro_cliente(recepcion_client, vehiculo):
    otro = Cliente.objects.create(nombre="María López", telefono="3157778899")

    response = recepcion_client.post("/api/citas/", {
        "cliente": otro.pk,
        "vehiculo": vehiculo.pk,
        "fecha_programada": _manana().isoformat(),
    }, format="json")

    assert response.status_code == 404


def test_listado_ordenado_por_fecha(recepcion_client, cliente, vehiculo, sucursal):
    tarde = Cita.objects.create(cliente=cliente, vehiculo=vehiculo, sucursal=sucursal,
                                fecha_programada=_manana() + timedelta(days=3))
    temprano = Cita.objects.create(cliente=cliente, vehiculo=vehiculo, sucursal=sucursal,
                                   fecha_programada=_manana())

    response = recepcion_client.get("/api/citas/")

    assert [c["id"] for c in response.json()["data"]["citas"]] == [temprano.pk, tarde.pk]


def test_cancelar_cita(recepcion_client, cita):
    response = recepcion_client.delete(f"/api/citas/{cita.pk}/")

    assert response.status_code == 200
    cita.refresh_from_db()
    assert cita.estado == "cancelada"

    response = recepcion_client.delete(f"/api/citas/{cita.pk}/")
    assert response.status_code == 400
    assert response.json()["message"] == "La cita ya está cancelada"


def test_no_se_cancela_con_servicio_en_curso(recepcion_client, cita, crear_servicio):
    crear_servicio(cita=cita)

    response = recepcion_client.delete(f"/api/citas/{cita.pk}/")

    assert response.status_code == 400
    cita.refresh_from_db()
    assert cita.estado == "programada"


def test_confirmar_solo_programadas(recepcion_client, cita):
    response = recepcion_client.post(f"/api/citas/{cita.pk}/confirmar/")
    assert response.status_code == 200
    assert response.json()["data"]["cita"]["estado"] == "confirmada"

    response = recepcion_client.post(f"/api/citas/{cita.pk}/confirmar/")
    assert response.status_code == 400


def test_completar_genera_servicio(recepcion_client, cita, estados):
    response = recepcion_client.post(f"/api/citas/{cita.pk}/completar/")

    assert response.status_code == 200
    cita.refresh_from_db()
    assert cita.estado == "completada"
    servicio = Servicio.objects.get(cita=cita)
    assert servicio.estado == estados["recibido"]

    assert recepcion_client.post(f"/api/citas/{cita.pk}/completar/").status_code == 400


def test_cita_telefonica_crea_cliente_y_vehiculo(recepcion_client, estados):
    response = recepcion_client.post("/api/citas/telefonica/", {
        "nombre_cliente": "Jorge",
        "telefono_cliente": "3114445566",
        "descripcion_vehiculo": "toyota Corolla 2010",
        "fecha_programada": _manana().isoformat(),
    }, format="json")

    assert response.status_code == 201
    cita = Cita.objects.select_related("cliente", "vehiculo").get(pk=response.json()["data"]["cita"]["id"])
    assert cita.cliente.nombre == "Jorge"
    assert cita.vehiculo.placa.startswith("TEMP-")
    assert (cita.vehiculo.marca, cita.vehiculo.modelo) == ("Toyota", "Corolla 2010")


def test_cita_telefonica_reutiliza_cliente_por_telefono(recepcion_client, cliente):
    response = recepcion_client.post("/api/citas/telefonica/", {
        "nombre_cliente": "Carlos Andrés Pérez",
        "telefono_cliente": "3001234567",
        "descripcion_vehiculo": "Nissan March",
        "fecha_programada": _manana().isoformat(),
    }, format="json")

    assert response.status_code == 201
    cliente.refresh_from_db()
    assert cliente.nombre == "Carlos Andrés Pérez"
    assert Cliente.objects.count() == 1


def test_cita_telefonica_telefono_invalido(recepcion_client):
    response = recepcion_client.post("/api/citas/telefonica/", {
        "nombre_cliente": "Jorge",
        "telefono_cliente": "12ab",
        "descripcion_vehiculo": "Nissan March",
        "fecha_programada": _manana().isoformat(),
    }, format="json")

    assert response.status_code == 400


def test_no_se_completa_una_cita_cancelada(recepcion_client, cita):
    recepcion_client.delete(f"/api/citas/{cita.pk}/")

    response = recepcion_client.post(f"/api/citas/{cita.pk}/completar/")

    assert response.status_code == 400
    assert response.json()["message"] == "No se puede completar una cita cancelada"
    cita.refresh_from_db()
    assert cita.estado == "cancelada"
    assert not Servicio.objects.filter(cita=cita).exists()


def test_se_cancela_si_el_servicio_termino(recepcion_client, cita, crear_servicio, estados):
    crear_servicio(cita=cita, estado=estados["terminado"], fecha_fin=timezone.now())

    response = recepcion_client.delete(f"/api/citas/{cita.pk}/")

    assert response.status_code == 200


def test_servicio_reabierto_bloquea_la_cancelacion(recepcion_client, cita, crear_servicio, estados):
    servicio = crear_servicio(cita=cita)
    for estado in ("terminado", "cotizado"):
        recepcion_client.put(f"/api/servicios/{servicio.pk}/estado/", {"estado": estados[estado].pk}, format="json")

    response = recepcion_client.delete(f"/api/citas/{cita.pk}/")

    assert response.status_code == 400
    assert response.json()["message"] == "No se puede cancelar la cita porque tiene servicios en proceso"


def test_filtrar_por_estado(recepcion_client, cita, cliente, sucursal):
    otro_vehiculo = cliente.vehiculos.create(placa="JKL258", marca="Ford", modelo="Fiesta", anio=2016)
    confirmada = Cita.objects.create(cliente=cliente, vehiculo=otro_vehiculo, sucursal=sucursal,
                                     fecha_programada=_manana(), estado="confirmada")

    response = recepcion_client.get("/api/citas/?estado=confirmada")

    assert [c["id"] for c in response.json()["data"]["citas"]] == [confirmada.pk]


@pytest.mark.parametrize("consulta", ["cliente=abc", "estado=perdida", "fecha_desde=ayer"])
def test_filtros_invalidos_responden_400(recepcion_client, cita, consulta):
    response = recepcion_client.get(f"/api/citas/?{consulta}")

    assert response.status_code == 400


def test_cliente_inexistente(recepcion_client, vehiculo):
    response = recepcion_client.post("/api/citas/", {
        "cliente": 99999,
        "vehiculo": vehiculo.pk,
        "fecha_programada": _manana().isoformat(),
    }, format="json")

    assert response.status_code == 404
    assert response.json()["message"] == "Cliente no encontrado"
