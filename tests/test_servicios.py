from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from clientes.models import Cliente
from servicios.models import RegistroEstado, Servicio
from servicios.services import calcular_comision, servicios_con_comision_inconsistente
from vehiculos.models import Vehiculo

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize("monto,porcentaje,esperado", [
    ("123.45", "10", "12.35"),
    ("100", "12.5", "12.50"),
    ("0", "30", "0.00"),
    (None, "10", "0.00"),
])
def test_calcular_comision_redondea_a_dos_decimales(monto, porcentaje, esperado):
    assert calcular_comision(monto, porcentaje) == Decimal(esperado)


def test_crear_servicio_en_estado_inicial(recepcion_client, cliente, vehiculo, mecanico, sucursal, estados):
    response = recepcion_client.post("/api/servicios/", {
        "cliente": cliente.pk,
        "vehiculo": vehiculo.pk,
        "mecanico": mecanico.pk,
        "descripcion_problema": "Cambio de pastillas de freno",
        "monto_total": "100.00",
        "comision_mecanico": "7.00",
    }, format="json")

    assert response.status_code == 201
    servicio = response.json()["data"]["servicio"]
    assert servicio["estado"]["id"] == estados["recibido"].pk
    assert servicio["sucursal"] == sucursal.pk
    # La comisión enviada se guarda sin recalcular
    assert servicio["comision_mecanico"] == 7.0
    assert servicio["comision_calculada"] == 10.0


def test_vehiculo_de_otro_cliente(recepcion_client, cliente, estados):
    otro = Cliente.objects.create(nombre="María López", telefono="3157778899")
    ajeno = Vehiculo.objects.create(cliente=otro, placa="QWE456", marca="Chevrolet", modelo="Spark", anio=2012)

    response = recepcion_client.post("/api/servicios/", {
        "cliente": cliente.pk,
        "vehiculo": ajeno.pk,
    }, format="json")

    assert response.status_code == 404
    assert response.json()["message"] == "Vehículo no encontrado o no pertenece al cliente"


def test_actualizar_no_cambia_el_estado(recepcion_client, crear_servicio, estados):
    servicio = crear_servicio()

    response = recepcion_client.patch(f"/api/servicios/{servicio.pk}/", {
        "estado": estados["terminado"].pk,
        "diagnostico": "Pastillas gastadas",
    }, format="json")

    assert response.status_code == 200
    servicio.refresh_from_db()
    assert servicio.estado == estados["recibido"]
    assert servicio.diagnostico == "Pastillas gastadas"


def test_cambio_de_estado_registra_bitacora(recepcion_client, recepcionista, crear_servicio, estados):
    servicio = crear_servicio()

    response = recepcion_client.put(
        f"/api/servicios/{servicio.pk}/estado/",
        {"estado": estados["en_proceso"].pk, "notas": "Se inicia el desarme"},
        format="json",
    )

    assert response.status_code == 200
    servicio.refresh_from_db()
    assert servicio.fecha_inicio is not None
    assert servicio.fecha_fin is None
    registros = RegistroEstado.objects.filter(servicio=servicio)
    assert registros.count() == 1
    registro = registros.get()
    assert registro.estado_anterior == estados["recibido"]
    assert registro.estado_nuevo == estados["en_proceso"]
    assert registro.cambiado_por == recepcionista


def test_estado_final_fija_fecha_fin(recepcion_client, crear_servicio, estados):
    servicio = crear_servicio()

    recepcion_client.put(f"/api/servicios/{servicio.pk}/estado/", {"estado": estados["rechazado"].pk}, format="json")

    servicio.refresh_from_db()
    assert servicio.fecha_fin is not None
    assert servicio.fecha_inicio is None


def test_cualquier_estado_puede_pasar_a_otro(recepcion_client, crear_servicio, estados):
    servicio = crear_servicio(estado=estados["terminado"])

    response = recepcion_client.put(
        f"/api/servicios/{servicio.pk}/estado/", {"estado": estados["cotizado"].pk}, format="json"
    )

    assert response.status_code == 200


def test_mismo_estado_rechazado(recepcion_client, crear_servicio, estados):
    servicio = crear_servicio()

    response = recepcion_client.patch(
        f"/api/servicios/{servicio.pk}/estado/", {"estado": estados["recibido"].pk}, format="json"
    )

    assert response.status_code == 400
    assert response.json()["message"] == "El servicio ya tiene este estado"
    assert not RegistroEstado.objects.filter(servicio=servicio).exists()


def test_estado_inexistente(recepcion_client, crear_servicio):
    servicio = crear_servicio()

    response = recepcion_client.put(f"/api/servicios/{servicio.pk}/estado/", {"estado": 99999}, format="json")

    assert response.status_code == 404


def test_iniciar_y_completar(recepcion_client, crear_servicio, estados):
    servicio = crear_servicio()

    assert recepcion_client.post(f"/api/servicios/{servicio.pk}/completar/").status_code == 400
    assert recepcion_client.post(f"/api/servicios/{servicio.pk}/iniciar/").status_code == 200
    assert recepcion_client.post(f"/api/servicios/{servicio.pk}/iniciar/").status_code == 400

    response = recepcion_client.post(f"/api/servicios/{servicio.pk}/completar/")

    assert response.status_code == 200
    servicio.refresh_from_db()
    assert servicio.estado == estados["terminado"]
    assert servicio.fecha_fin is not None
    assert RegistroEstado.objects.filter(servicio=servicio).count() == 2


def test_listado_oculta_finalizados_de_dias_anteriores(recepcion_client, crear_servicio, estados):
    abierto = crear_servicio()
    cerrado_hoy = crear_servicio(estado=estados["terminado"], fecha_fin=timezone.now())
    cerrado_ayer = crear_servicio(estado=estados["terminado"])
    ayer = timezone.now() - timedelta(days=1)
    Servicio.objects.filter(pk=cerrado_ayer.pk).update(fecha_fin=ayer, actualizado=ayer)

    response = recepcion_client.get("/api/servicios/")

    ids = {s["id"] for s in response.json()["data"]["servicios"]}
    assert ids == {abierto.pk, cerrado_hoy.pk}

    hoy = timezone.localdate().isoformat()
    response = recepcion_client.get(f"/api/servicios/?fecha_desde={hoy}")
    ids = {s["id"] for s in response.json()["data"]["servicios"]}
    assert cerrado_ayer.pk in ids


def test_servicios_limitados_a_la_sucursal(recepcion_client, admin_client, crear_servicio, otra_sucursal):
    propio = crear_servicio()
    ajeno = crear_servicio(sucursal=otra_sucursal)

    ids = {s["id"] for s in recepcion_client.get("/api/servicios/").json()["data"]["servicios"]}
    assert ids == {propio.pk}
    assert recepcion_client.get(f"/api/servicios/{ajeno.pk}/").status_code == 404

    ids = {s["id"] for s in admin_client.get("/api/servicios/").json()["data"]["servicios"]}
    assert ids == {propio.pk, ajeno.pk}


def test_eliminar_servicio(encargado_client, crear_servicio, estados):
    iniciado = crear_servicio(fecha_inicio=timezone.now())
    nuevo = crear_servicio()

    assert encargado_client.delete(f"/api/servicios/{iniciado.pk}/").status_code == 400
    assert encargado_client.delete(f"/api/servicios/{nuevo.pk}/").status_code == 200
    assert not Servicio.objects.filter(pk=nuevo.pk).exists()


def test_historial_por_cliente_con_resumen(recepcion_client, crear_servicio, cliente):
    crear_servicio(monto_total=Decimal("150.00"))
    crear_servicio(monto_total=Decimal("50.50"))

    response = recepcion_client.get(f"/api/servicios/historial/cliente/{cliente.pk}/")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["resumen"] == {"total_servicios": 2, "monto_total": 200.5}
    assert data["pagination"]["total"] == 2


def test_historial_tipo_invalido(recepcion_client, cliente):
    response = recepcion_client.get(f"/api/servicios/historial/mecanico/{cliente.pk}/")

    assert response.status_code == 400


def test_calcular_comision_endpoint(recepcion_client, mecanico):
    response = recepcion_client.get(
        f"/api/servicios/calcular-comision/?mecanico={mecanico.pk}&monto_total=123.45"
    )

    assert response.status_code == 200
    assert response.json()["data"]["comision"] == 12.35


def test_exportar_csv(recepcion_client, crear_servicio):
    crear_servicio()

    response = recepcion_client.get("/api/servicios/exportar/?formato=csv")

    assert response.status_code == 200
    contenido = b"".join(response.streaming_content).decode()
    assert contenido.splitlines()[0].startswith("ID,Fecha,Cliente,Placa")
    assert "ABC123" in contenido


def test_exportar_excel(recepcion_client, crear_servicio):
    crear_servicio()

    response = recepcion_client.get("/api/servicios/exportar/")

    assert response.status_code == 200
    assert response["Content-Type"].startswith("application/vnd.openxmlformats")
    assert response.content[:2] == b"PK"


def test_auditoria_de_comisiones(crear_servicio, mecanico):
    correcto = crear_servicio(mecanico=mecanico, monto_total=Decimal("200"), comision_mecanico=Decimal("20"))
    inconsistente = crear_servicio(mecanico=mecanico, monto_total=Decimal("200"), comision_mecanico=Decimal("15"))

    resultado = servicios_con_comision_inconsistente()

    assert [fila["servicio"] for fila in resultado] == [inconsistente.pk]
    assert correcto.pk not in [fila["servicio"] for fila in resultado]


def test_registros_por_servicio(recepcion_client, crear_servicio, estados):
    servicio = crear_servicio()
    recepcion_client.put(f"/api/servicios/{servicio.pk}/estado/", {"estado": estados["cotizado"].pk}, format="json")

    response = recepcion_client.get(f"/api/registros-estado/por-servicio/{servicio.pk}/")

    registros = response.json()["data"]["registros"]
    assert len(registros) == 1
    assert registros[0]["estado_nuevo"]["nombre"] == "Cotizado"


def test_comando_auditar_comisiones(crear_servicio, mecanico):
    from io import StringIO

    from django.core.management import call_command

    crear_servicio(mecanico=mecanico, monto_total=Decimal("80"), comision_mecanico=Decimal("5"))
    salida = StringIO()

    call_command("auditar_comisiones", verbose=True, stdout=salida)

    assert "Se encontraron 1 servicios" in salida.getvalue()
    assert "calculada=8.00" in salida.getvalue()


def test_reabrir_servicio_limpia_fecha_fin(recepcion_client, crear_servicio, estados):
    servicio = crear_servicio()
    recepcion_client.put(f"/api/servicios/{servicio.pk}/estado/", {"estado": estados["terminado"].pk}, format="json")
    servicio.refresh_from_db()
    assert servicio.fecha_fin is not None

    response = recepcion_client.put(
        f"/api/servicios/{servicio.pk}/estado/", {"estado": estados["cotizado"].pk}, format="json"
    )

    assert response.status_code == 200
    servicio.refresh_from_db()
    assert servicio.fecha_fin is None
    assert servicio.finalizado is False

    response = recepcion_client.post(f"/api/servicios/{servicio.pk}/iniciar/")
    assert response.status_code == 200
    servicio.refresh_from_db()
    assert servicio.estado == estados["en_proceso"]


@pytest.mark.parametrize("monto", ["NaN", "Infinity", "-Infinity", "abc", "-1"])
def test_calcular_comision_monto_invalido(recepcion_client, mecanico, monto):
    response = recepcion_client.get(
        f"/api/servicios/calcular-comision/?mecanico={mecanico.pk}&monto_total={monto}"
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_calcular_comision_sin_mecanico(recepcion_client, db):
    response = recepcion_client.get("/api/servicios/calcular-comision/?monto_total=100")

    assert response.status_code == 400
    assert response.json()["message"] == "El mecánico es requerido"


def test_calcular_comision_mecanico_inexistente(recepcion_client, db):
    response = recepcion_client.get("/api/servicios/calcular-comision/?mecanico=99999&monto_total=100")

    assert response.status_code == 404


@pytest.mark.parametrize("consulta", ["cliente=abc", "estado=x", "fecha_desde=ayer", "fecha_hasta=2024-13-40"])
def test_filtros_invalidos_responden_400(recepcion_client, crear_servicio, consulta):
    crear_servicio()

    response = recepcion_client.get(f"/api/servicios/?{consulta}")

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_filtrar_por_mecanico(recepcion_client, crear_servicio, mecanico):
    asignado = crear_servicio(mecanico=mecanico)
    crear_servicio()

    response = recepcion_client.get(f"/api/servicios/?mecanico={mecanico.pk}")

    assert [s["id"] for s in response.json()["data"]["servicios"]] == [asignado.pk]


def test_exportar_con_filtro_invalido(recepcion_client, crear_servicio):
    crear_servicio()

    response = recepcion_client.get("/api/servicios/exportar/?formato=csv&vehiculo=placa")

    assert response.status_code == 400


def test_servicio_con_cliente_inexistente(recepcion_client, vehiculo, estados):
    response = recepcion_client.post("/api/servicios/", {
        "cliente": 99999,
        "vehiculo": vehiculo.pk,
    }, format="json")

    assert response.status_code == 404
    assert response.json()["message"] == "Cliente no encontrado"


def test_listado_de_registros_con_filtros(recepcion_client, recepcionista, crear_servicio, estados):
    primero = crear_servicio()
    segundo = crear_servicio()
    recepcion_client.put(f"/api/servicios/{primero.pk}/estado/", {"estado": estados["cotizado"].pk}, format="json")
    recepcion_client.put(f"/api/servicios/{primero.pk}/estado/", {"estado": estados["en_proceso"].pk}, format="json")
    recepcion_client.put(f"/api/servicios/{segundo.pk}/estado/", {"estado": estados["cotizado"].pk}, format="json")

    response = recepcion_client.get("/api/registros-estado/")
    assert response.status_code == 200
    assert response.json()["data"]["pagination"]["total"] == 3

    response = recepcion_client.get(f"/api/registros-estado/?servicio={primero.pk}")
    assert len(response.json()["data"]["registros"]) == 2

    response = recepcion_client.get(f"/api/registros-estado/?estado_nuevo={estados['cotizado'].pk}")
    assert {r["servicio"] for r in response.json()["data"]["registros"]} == {primero.pk, segundo.pk}

    response = recepcion_client.get(f"/api/registros-estado/?cambiado_por={recepcionista.pk}")
    assert response.json()["data"]["pagination"]["total"] == 3

    manana = (timezone.localdate() + timedelta(days=1)).isoformat()
    response = recepcion_client.get(f"/api/registros-estado/?fecha_desde={manana}")
    assert response.json()["data"]["registros"] == []


def test_listado_de_registros_filtro_invalido(recepcion_client, db):
    response = recepcion_client.get("/api/registros-estado/?servicio=uno")

    assert response.status_code == 400


def test_detalle_de_registro(recepcion_client, crear_servicio, estados):
    servicio = crear_servicio()
    recepcion_client.put(f"/api/servicios/{servicio.pk}/estado/", {"estado": estados["cotizado"].pk}, format="json")
    registro = RegistroEstado.objects.get(servicio=servicio)

    response = recepcion_client.get(f"/api/registros-estado/{registro.pk}/")

    assert response.status_code == 200
    assert response.json()["data"]["registro"]["estado_anterior"]["nombre"] == "Recibido"
    assert recepcion_client.get("/api/registros-estado/99999/").status_code == 404


def test_estadisticas_de_registros(recepcion_client, recepcionista, crear_servicio, estados):
    primero = crear_servicio()
    segundo = crear_servicio()
    recepcion_client.put(f"/api/servicios/{primero.pk}/estado/", {"estado": estados["cotizado"].pk}, format="json")
    recepcion_client.put(f"/api/servicios/{segundo.pk}/estado/", {"estado": estados["cotizado"].pk}, format="json")
    recepcion_client.put(f"/api/servicios/{segundo.pk}/estado/", {"estado": estados["terminado"].pk}, format="json")

    response = recepcion_client.get("/api/registros-estado/estadisticas/")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_cambios"] == 3
    assert data["cambios_hoy"] == 3
    assert [(fila["nombre"], fila["total"]) for fila in data["por_estado"]] == [("Cotizado", 2), ("Terminado", 1)]
    assert data["por_usuario"] == [{"usuario": recepcionista.pk, "nombre": recepcionista.nombre, "total": 3}]

    response = recepcion_client.get("/api/registros-estado/estadisticas/?fecha_hasta=no-es-fecha")
    assert response.status_code == 400
