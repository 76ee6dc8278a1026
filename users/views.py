from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.generics import ListAPIView, ListCreateAPIView, RetrieveUpdateDestroyAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from taller_backend.respuestas import RespuestaEstandarMixin, respuesta

from .models import CustomUser, Rol
from .permissions import TienePermisoRecurso
from .serializers import (
    ChangePasswordSerializer,
    CustomUserSerializer,
    PerfilSerializer,
    RolSerializer,
)


class UsuarioMixin(RespuestaEstandarMixin):
    serializer_class = CustomUserSerializer
    queryset = CustomUser.objects.select_related('rol', 'sucursal')
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'usuarios'
    clave_objeto = 'usuario'
    clave_listado = 'usuarios'
    mensaje_no_encontrado = 'Usuario no encontrado'
    mensajes = {
        'create': 'Usuario creado exitosamente',
        'update': 'Usuario actualizado exitosamente',
        'destroy': 'Usuario eliminado exitosamente',
    }


class CustomUserListView(UsuarioMixin, ListCreateAPIView):

    def get_queryset(self):
        qs = super().get_queryset().order_by('nombre', 'email')
        params = self.request.query_params

        # Buscar por texto en nombre, username y email
        buscar = params.get('search')
        if buscar:
            buscar = buscar.strip()
            qs = qs.filter(
                Q(nombre__icontains=buscar) |
                Q(username__icontains=buscar) |
                Q(email__icontains=buscar)
            )

        is_active = params.get('is_active')
        if is_active in ('true', 'false', 'True', 'False', '1', '0'):
            qs = qs.filter(is_active=is_active.lower() in ('true', '1'))

        rol = params.get('rol')
        if rol:
            qs = qs.filter(rol_id=rol) if rol.isdigit() else qs.filter(rol__nombre__iexact=rol)

        sucursal = params.get('sucursal')
        if sucursal:
            if not sucursal.isdigit():
                raise ValidationError({'sucursal': 'La sucursal debe ser un identificador numérico'})
            qs = qs.filter(sucursal_id=sucursal)

        return qs


class CustomUserRetrieveUpdateDestroyView(UsuarioMixin, RetrieveUpdateDestroyAPIView):

    def perform_destroy(self, instance):
        # Evitar que un usuario se elimine a sí mismo
        if self.request.user.pk == instance.pk:
            raise ValidationError({'detail': 'No puede eliminar su propio usuario.'})
        instance.delete()


class ResetUserPasswordView(APIView):
    permission_classes = [IsAuthenticated, TienePermisoRecurso]
    recurso = 'usuarios'
    accion_recurso = 'update'

    def post(self, request, pk):
        user = CustomUser.objects.filter(pk=pk).first()
        if user is None:
            raise NotFound("Usuario no encontrado")
        password = request.data.get('password', '')
        if not password:
            raise ValidationError({'password': 'La contraseña es requerida'})
        try:
            validate_password(password, user)
        except DjangoValidationError as e:
            raise ValidationError({'password': e.messages})
        user.set_password(password)
        user.save()
        return respuesta(None, "Contraseña restablecida correctamente")


class RolListView(RespuestaEstandarMixin, ListAPIView):
    serializer_class = RolSerializer
    queryset = Rol.objects.all()
    pagination_class = None
    clave_listado = 'roles'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user_view(request):
    """Información del usuario autenticado, con rol y permisos."""
    return respuesta({'user': PerfilSerializer(request.user).data})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Cierra la sesión eliminando el token del usuario."""
    if hasattr(request.user, 'auth_token'):
        request.user.auth_token.delete()
    return respuesta(None, "Sesión cerrada exitosamente")


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def cambiar_password_view(request):
    serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
    serializer.is_valid(raise_exception=True)
    request.user.set_password(serializer.validated_data['password_nueva'])
    request.user.save()
    return respuesta(None, "Contraseña actualizada correctamente", status.HTTP_200_OK)
