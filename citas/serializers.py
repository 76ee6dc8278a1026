from rest_framework import serializers

from clientes.models import Cliente
from clientes.validators import validar_telefono
from taller_backend.campos import RelacionExistente
from vehiculos.models import Vehiculo

from .models import Cita
from .services import validar_cita


class CitaSerializer(serializers.ModelSerializer):
    cliente_nombre = serializers.CharField(source='cliente.nombre', read_only=True)
    cliente_telefono = serializers.CharField(source='cliente.telefono', read_only=True)
    vehiculo_placa = serializers.CharField(source='vehiculo.placa', read_only=True)
    vehiculo_descripcion = serializers.SerializerMethodField()
    estado_display = serializers.CharField(source='get_estado_display', read_only=True)
    servicios = serializers.SerializerMethodField()

    class Meta:
        model = Cita
        fields = [
            'id', 'cliente', 'cliente_nombre', 'cliente_telefono', 'vehiculo', 'vehiculo_placa',
            'vehiculo_descripcion', 'sucursal', 'fecha_programada', 'estado', 'estado_display',
            'notas', 'oportunidad', 'desde_oportunidad', 'servicios', 'creado', 'actualizado'
        ]

    def get_vehiculo_descripcion(self, obj):
        return f"{obj.vehiculo.marca} {obj.vehiculo.modelo}"

    def get_servicios(self, obj):
        return [{
            'id': s.pk,
            'estado': s.estado.nombre,
            'fecha_recepcion': s.fecha_recepcion,
        } for s in obj.servicios.select_related('estado')]


class CitaCreateUpdateSerializer(serializers.ModelSerializer):
    cliente = RelacionExistente(
        queryset=Cliente.objects.all(),
        error_messages={'does_not_exist': 'Cliente no encontrado'},
    )
    vehiculo = RelacionExistente(
        queryset=Vehiculo.objects.all(),
        error_messages={'does_not_exist': 'Vehículo no encontrado'},
    )

    class Meta:
        model = Cita
        fields = ['id', 'cliente', 'vehiculo', 'sucursal', 'fecha_programada', 'estado', 'notas']

    def validate_estado(self, value):
        # La cancelación y la finalización tienen sus propios endpoints
        if value in ('cancelada', 'completada') and (self.instance is None or self.instance.estado != value):
            raise serializers.ValidationError('Use la acción correspondiente para cancelar o completar la cita')
        return value

    def validate(self, attrs):
        cliente = attrs.get('cliente', getattr(self.instance, 'cliente', None))
        vehiculo = attrs.get('vehiculo', getattr(self.instance, 'vehiculo', None))
        fecha = attrs.get('fecha_programada', getattr(self.instance, 'fecha_programada', None))
        validar_cita(cliente, vehiculo, fecha, getattr(self.instance, 'pk', None))
        return attrs


class CitaTelefonicaSerializer(serializers.Serializer):
    nombre_cliente = serializers.CharField(min_length=2, max_length=100)
    telefono_cliente = serializers.CharField(max_length=20)
    descripcion_vehiculo = serializers.CharField(min_length=2, max_length=200)
    fecha_programada = serializers.DateTimeField()
    notas = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_telefono_cliente(self, value):
        return validar_telefono(value)
