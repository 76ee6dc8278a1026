from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from sucursales.models import Sucursal

from .models import CustomUser, Rol


class RolSerializer(serializers.ModelSerializer):
    class Meta:
        model = Rol
        fields = ('id', 'nombre', 'descripcion', 'permisos')


class CustomUserSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=False, min_length=6)
    username = serializers.CharField(required=False, allow_blank=True)
    nombre = serializers.CharField(min_length=2, max_length=150)
    sucursal = serializers.PrimaryKeyRelatedField(
        queryset=Sucursal.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Sucursal no encontrada'},
    )
    rol = serializers.PrimaryKeyRelatedField(
        queryset=Rol.objects.all(),
        error_messages={'does_not_exist': 'Rol no encontrado'},
    )
    sucursal_nombre = serializers.CharField(source='sucursal.nombre', read_only=True, default=None)
    rol_nombre = serializers.CharField(source='rol.nombre', read_only=True, default=None)

    class Meta:
        model = CustomUser
        fields = (
            "id",
            "username",
            "email",
            "nombre",
            "password",
            "is_active",
            "sucursal",
            "sucursal_nombre",
            "rol",
            "rol_nombre",
            "last_login",
            "date_joined",
        )
        read_only_fields = ("last_login", "date_joined")

    def validate_email(self, value):
        value = value.strip().lower()
        qs = CustomUser.objects.filter(email__iexact=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("El email ya está en uso")
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get("password"):
            raise serializers.ValidationError({"password": "La contraseña es requerida"})

        # No permitir que un usuario se desactive a sí mismo
        request = self.context.get('request')
        if self.instance is not None and request is not None:
            if attrs.get('is_active') is False and request.user.pk == self.instance.pk:
                raise serializers.ValidationError({
                    'is_active': 'No puede desactivarse a sí mismo.'
                })

        # Todo usuario que no sea administrador opera sobre una sucursal
        rol = attrs.get('rol', getattr(self.instance, 'rol', None))
        sucursal = attrs.get('sucursal', getattr(self.instance, 'sucursal', None))
        if rol and not rol.es_administrador and sucursal is None:
            raise serializers.ValidationError({'sucursal': 'Debe asignar una sucursal al usuario'})
        return attrs

    def _username_disponible(self, email):
        base = email.split('@')[0]
        username = base
        i = 1
        while CustomUser.objects.filter(username=username).exists():
            username = f"{base}{i}"
            i += 1
        return username

    def create(self, validated_data):
        password = validated_data.pop("password")
        if not validated_data.get("username"):
            validated_data["username"] = self._username_disponible(validated_data["email"])
        user = CustomUser(**validated_data)
        user.set_password(password)
        user.save()
        return user

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        if "username" in validated_data and not validated_data["username"]:
            validated_data.pop("username")
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save(update_fields=["password"])
        return user


class PerfilSerializer(serializers.ModelSerializer):
    """Usuario autenticado con su rol, sucursal y permisos efectivos."""
    full_name = serializers.CharField(source='get_full_name', read_only=True)
    rol = RolSerializer(read_only=True)
    sucursal = serializers.SerializerMethodField()
    permisos = serializers.SerializerMethodField()
    es_administrador = serializers.BooleanField(read_only=True)

    class Meta:
        model = CustomUser
        fields = ('id', 'email', 'username', 'nombre', 'full_name', 'rol', 'sucursal', 'permisos', 'es_administrador')

    def get_sucursal(self, obj):
        if obj.sucursal:
            return {'id': obj.sucursal.pk, 'nombre': obj.sucursal.nombre, 'codigo': obj.sucursal.codigo}
        return None

    def get_permisos(self, obj):
        return obj.permisos_efectivos()


class CustomUserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class ChangePasswordSerializer(serializers.Serializer):
    password_actual = serializers.CharField(write_only=True)
    password_nueva = serializers.CharField(write_only=True)

    def validate_password_actual(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError("La contraseña actual es incorrecta")
        return value

    def validate_password_nueva(self, value):
        validate_password(value, self.context['request'].user)
        return value

