from rest_framework import serializers

from clientes.models import Cliente
from servicios.models import Servicio
from taller_backend.campos import RelacionExistente
from vehiculos.models import Vehiculo

from .models import Oportunidad
from .services import validar_relaciones_oportunidad


class OportunidadSerializer(serializers.ModelSerializer):
    cliente = RelacionExistente(
        queryset=Cliente.objects.all(),
        error_messages={'does_not_exist': 'Cliente no encontrado'},
    )
    vehiculo = RelacionExistente(
        queryset=Vehiculo.objects.all(),
        error_messages={'does_not_exist': 'Vehículo no encontrado'},
    )
    servicio = RelacionExistente(
        queryset=Servicio.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Servicio no encontrado'},
    )
    tipo = serializers.CharField(min_length=2, max_length=100)
    descripcion = serializers.CharField(min_length=5)
    cliente_nombre = serializers.CharField(source='cliente.nombre', read_only=True)
    vehiculo_placa = serializers.CharField(source='vehiculo.placa', read_only=True)
    estado_display = serializers.CharField(source='get_estado_display', read_only=True)

    class Meta:
        model = Oportunidad
        fields = [
            'id', 'cliente', 'cliente_nombre', 'vehiculo', 'vehiculo_placa', 'servicio', 'sucursal',
            'tipo', 'descripcion', 'fecha_seguimiento', 'estado', 'estado_display', 'notas',
            'creado_por', 'creado', 'actualizado'
        ]
        read_only_fields = ['creado_por', 'creado', 'actualizado']

    def validate(self, attrs):
        return validar_relaciones_oportunidad(attrs, self.instance)


class ConvertirACitaSerializer(serializers.Serializer):
    fecha_programada = serializers.DateTimeField()
    notas = serializers.CharField(required=False, allow_blank=True, allow_null=True)
