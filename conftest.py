"""
Pytest Configuration
Fixtures compartidos: roles, sucursales, usuarios autenticados y datos del taller.
"""
from decimal import Decimal

import pytest
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

PASSWORD = "Taller.2024!"


@pytest.fixture
def roles(db):
    from users.models import Rol
    from users.roles import crear_roles_base

    crear_roles_base()
    return {rol.nombre: rol for rol in Rol.objects.all()}


@pytest.fixture
def sucursal(db):
    from sucursales.models import Sucursal
    return Sucursal.objects.create(nombre="Sede Norte", codigo="NTE", ciudad="Bogotá")


@pytest.fixture
def otra_sucursal(db):
    from sucursales.models import Sucursal
    return Sucursal.objects.create(nombre="Sede Sur", codigo="SUR", ciudad="Bogotá")


@pytest.fixture
def crear_usuario(roles):
    from users.models import CustomUser

    def _crear(email, rol="RECEPCIONISTA", sucursal=None, **extra):
        return CustomUser.objects.create_user(
            email=email,
            username=email.split("@")[0],
            password=PASSWORD,
            nombre=extra.pop("nombre", email.split("@")[0].title()),
            rol=roles[rol],
            sucursal=sucursal,
            **extra,
        )

    return _crear


@pytest.fixture
def admin_user(crear_usuario):
    return crear_usuario("jefe@taller.com", rol="ADMIN")


@pytest.fixture
def recepcionista(crear_usuario, sucursal):
    return crear_usuario("recepcion@taller.com", rol="RECEPCIONISTA", sucursal=sucursal)


@pytest.fixture
def encargado(crear_usuario, sucursal):
    return crear_usuario("encargado@taller.com", rol="ENCARGADO", sucursal=sucursal)


@pytest.fixture
def cliente_api():
    """Construye un APIClient autenticado con ``Authorization: Bearer <token>``."""

    def _cliente(user=None):
        client = APIClient()
        if user is not None:
            token, _ = Token.objects.get_or_create(user=user)
            client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
        return client

    return _cliente


@pytest.fixture
def admin_client(cliente_api, admin_user):
    return cliente_api(admin_user)


@pytest.fixture
def recepcion_client(cliente_api, recepcionista):
    return cliente_api(recepcionista)


@pytest.fixture
def encargado_client(cliente_api, encargado):
    return cliente_api(encargado)


@pytest.fixture
def estados(db):
    from servicios.models import EstadoTrabajo
    from servicios.services import crear_estados_base

    crear_estados_base()
    return {estado.tipo: estado for estado in EstadoTrabajo.objects.all()}


@pytest.fixture
def cliente(db):
    from clientes.models import Cliente
    return Cliente.objects.create(nombre="Carlos Pérez", telefono="3001234567", whatsapp="3001234567")


@pytest.fixture
def vehiculo(cliente):
    from vehiculos.models import Vehiculo
    return Vehiculo.objects.create(cliente=cliente, placa="ABC123", marca="Mazda", modelo="3", anio=2018)


@pytest.fixture
def mecanico(sucursal):
    from mecanicos.models import Mecanico
    return Mecanico.objects.create(nombre="Luis Gómez", porcentaje_comision=Decimal("10.00"), sucursal=sucursal)


@pytest.fixture
def crear_servicio(estados, cliente, vehiculo, sucursal):
    from servicios.models import Servicio

    def _crear(**extra):
        datos = {
            "cliente": cliente,
            "vehiculo": vehiculo,
            "sucursal": sucursal,
            "estado": estados["recibido"],
            "descripcion_problema": "Ruido en la suspensión",
        }
        datos.update(extra)
        return Servicio.objects.create(**datos)

    return _crear
