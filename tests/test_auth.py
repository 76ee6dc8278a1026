import pytest

PASSWORD = "Taller.2024!"

pytestmark = pytest.mark.django_db


def test_login_devuelve_token_y_perfil(recepcionista, cliente_api):
    response = cliente_api().post(
        "/api/auth/login/", {"email": "RECEPCION@taller.com", "password": PASSWORD}, format="json"
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["token"]
    assert body["data"]["user"]["email"] == "recepcion@taller.com"
    assert body["data"]["user"]["rol"]["nombre"] == "RECEPCIONISTA"


def test_login_con_clave_incorrecta(recepcionista, cliente_api):
    response = cliente_api().post(
        "/api/auth/login/", {"email": "recepcion@taller.com", "password": "otra"}, format="json"
    )

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Credenciales inválidas", "data": None}


def test_sin_token_no_autorizado(cliente_api, db):
    response = cliente_api().get("/api/clientes/")

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_me_incluye_permisos_efectivos(admin_client):
    response = admin_client.get("/api/auth/me/")

    assert response.status_code == 200
    assert response.json()["data"]["user"]["permisos"] == {"todo": True}


def test_logout_invalida_token(recepcion_client):
    assert recepcion_client.post("/api/auth/logout/").status_code == 200
    assert recepcion_client.get("/api/auth/me/").status_code == 401


def test_cambiar_password_valida_la_actual(recepcion_client):
    response = recepcion_client.post(
        "/api/auth/cambiar-password/",
        {"password_actual": "incorrecta", "password_nueva": "Nueva.Clave.2024"},
        format="json",
    )

    assert response.status_code == 400
    assert response.json()["message"] == "La contraseña actual es incorrecta"


def test_rol_sin_permiso_recibe_403(recepcion_client):
    response = recepcion_client.post("/api/sucursales/", {"nombre": "Centro", "codigo": "cen"}, format="json")

    assert response.status_code == 403
    assert response.json()["message"] == "Acceso denegado - Permisos insuficientes"


def test_usuario_no_administrador_requiere_sucursal(admin_client, roles):
    response = admin_client.post("/api/usuarios/", {
        "email": "nuevo@taller.com",
        "nombre": "Nuevo",
        "password": "Clave.Segura.2024",
        "rol": roles["RECEPCIONISTA"].pk,
    }, format="json")

    assert response.status_code == 400
    assert response.json()["message"] == "Debe asignar una sucursal al usuario"


def test_administrador_no_puede_eliminarse(admin_client, admin_user):
    response = admin_client.delete(f"/api/usuarios/{admin_user.pk}/")

    assert response.status_code == 400


def test_comando_crear_roles_actualiza_permisos(roles):
    from io import StringIO

    from django.core.management import call_command

    rol = roles["RECEPCIONISTA"]
    rol.permisos = {}
    rol.save()

    call_command("crear_roles", actualizar=True, stdout=StringIO())

    rol.refresh_from_db()
    assert rol.permite("citas", "delete")
