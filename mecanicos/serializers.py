from rest_framework import serializers

from clientes.validators import validar_telefono

from .models import Mecanico


class MecanicoSerializer(serializers.ModelSerializer):
    nombre = serializers.CharField(min_length=2, max_length=100)
    telefono = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    sucursal_nombre = serializers.CharField(source='sucursal.nombre', read_only=True, default=None)
    servicios_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Mecanico
        fields = [
            'id', 'nombre', 'telefono', 'porcentaje_comision', 'activo', 'sucursal',
            'sucursal_nombre', 'servicios_count', 'creado', 'actualizado'
        ]
        read_only_fields = ['creado', 'actualizado']

    def validate_telefono(self, value):
        if not value:
            return None
        return validar_telefono(value)


class RangoFechasSerializer(serializers.Serializer):
    fecha_desde = serializers.DateField(required=False)
    fecha_hasta = serializers.DateField(required=False)

    def validate(self, attrs):
        desde, hasta = attrs.get('fecha_desde'), attrs.get('fecha_hasta')
        if desde and hasta and desde > hasta:
            raise serializers.ValidationError({'fecha_hasta': 'La fecha final debe ser posterior a la inicial'})
        return attrs
