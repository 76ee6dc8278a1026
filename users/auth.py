import logging

from django.contrib.auth import authenticate
from django.utils import timezone
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import AllowAny

from taller_backend.respuestas import respuesta

from .serializers import CustomUserLoginSerializer, PerfilSerializer

logger = logging.getLogger(__name__)


class CustomUserLoginView(GenericAPIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    serializer_class = CustomUserLoginSerializer

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"].strip().lower()
        password = serializer.validated_data["password"]
        user = authenticate(request, username=email, password=password)
        if user is None:
            logger.info(f"Intento de inicio de sesión fallido para {email}")
            return respuesta(None, "Credenciales inválidas", status.HTTP_401_UNAUTHORIZED)

        token, _ = Token.objects.get_or_create(user=user)
        user.last_login = timezone.now()
        user.save(update_fields=["last_login"])
        return respuesta({
            "token": token.key,
            "user": PerfilSerializer(user).data,
        }, "Inicio de sesión exitoso")
