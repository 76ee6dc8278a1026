from rest_framework import serializers
from .models import Sucursal


class SucursalSerializer(serializers.ModelSerializer):
    nombre = serializers.CharField(min_length=2, max_length=100)
    usuarios_count = serializers.SerializerMethodField()
    mecanicos_count = serializers.SerializerMethodField()

    class Meta:
        model = Sucursal
        fields = [
            'id', 'nombre', 'codigo', 'direccion', 'telefono', 'email', 'ciudad',
            'activo', 'usuarios_count', 'mecanicos_count', 'creado', 'actualizado'
        ]
        read_only_fields = ['creado', 'actualizado']

    def get_usuarios_count(self, obj):
        return obj.usuarios.count()

    def get_mecanicos_count(self, obj):
        return obj.mecanicos.count()

    def validate_codigo(self, value):
        """Código único, normalizado en mayúsculas."""
        value = value.strip().upper()
        qs = Sucursal.objects.filter(codigo=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('Ya existe una sucursal con este código')
        return value


class SucursalBasicSerializer(serializers.ModelSerializer):
    class Meta:
        model = Sucursal
        fields = ['id', 'nombre', 'codigo', 'ciudad']
