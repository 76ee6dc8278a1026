from django.utils import timezone
from rest_framework import serializers

from clientes.models import Cliente

from .models import Vehiculo

CAMPOS_OPCIONALES = [
    'color', 'tipo_combustible', 'transmision', 'numero_motor', 'numero_chasis', 'notas'
]


class VehiculoSerializer(serializers.ModelSerializer):
    cliente = serializers.PrimaryKeyRelatedField(
        queryset=Cliente.objects.all(),
        error_messages={'does_not_exist': 'Cliente no encontrado'},
    )
    cliente_nombre = serializers.CharField(source='cliente.nombre', read_only=True)
    placa = serializers.CharField(max_length=20)
    marca = serializers.CharField(max_length=50)
    modelo = serializers.CharField(max_length=50)
    anio = serializers.IntegerField()

    class Meta:
        model = Vehiculo
        fields = [
            'id', 'cliente', 'cliente_nombre', 'placa', 'marca', 'modelo', 'anio',
            'color', 'tipo_combustible', 'transmision', 'numero_motor', 'numero_chasis',
            'notas', 'creado', 'actualizado'
        ]
        read_only_fields = ['creado', 'actualizado']

    def validate_placa(self, value):
        """Placa única, normalizada en mayúsculas"""
        value = value.strip().upper()
        if not value:
            raise serializers.ValidationError("La placa es requerida")
        qs = Vehiculo.objects.filter(placa=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Ya existe un vehículo con esta placa")
        return value

    def validate_anio(self, value):
        maximo = timezone.localdate().year + 1
        if value < 1900 or value > maximo:
            raise serializers.ValidationError(f"El año debe estar entre 1900 y {maximo}")
        return value

    def validate(self, attrs):
        # Cadenas vacías en campos opcionales se guardan como nulo
        for campo in CAMPOS_OPCIONALES:
            if campo in attrs and attrs[campo] == '':
                attrs[campo] = None
        return attrs


class VehiculoDetailSerializer(VehiculoSerializer):
    cliente_info = serializers.SerializerMethodField()
    servicios_count = serializers.SerializerMethodField()

    class Meta(VehiculoSerializer.Meta):
        fields = VehiculoSerializer.Meta.fields + ['cliente_info', 'servicios_count']

    def get_cliente_info(self, obj):
        return {
            'id': obj.cliente.pk,
            'nombre': obj.cliente.nombre,
            'telefono': obj.cliente.telefono,
            'email': obj.cliente.email,
        }

    def get_servicios_count(self, obj):
        return obj.servicios.count()
