from rest_framework import serializers

from citas.models import Cita
from clientes.models import Cliente
from servicios.models import Servicio
from servicios.serializers import EstadoBasicoSerializer
from taller_backend.campos import RelacionExistente
from vehiculos.models import Vehiculo


class RecepcionVehiculoSerializer(serializers.Serializer):
    """Datos del asistente de recepción: inventario, firma y fotos del vehículo."""
    cita = RelacionExistente(
        queryset=Cita.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Cita no encontrada'},
    )
    cliente = RelacionExistente(
        queryset=Cliente.objects.all(),
        error_messages={'does_not_exist': 'Cliente no encontrado'},
    )
    vehiculo = RelacionExistente(
        queryset=Vehiculo.objects.all(),
        error_messages={'does_not_exist': 'Vehículo no encontrado'},
    )
    kilometraje = serializers.IntegerField(min_value=0)
    nivel_combustible = serializers.ChoiceField(choices=Servicio.NIVELES_COMBUSTIBLE)
    luces_ok = serializers.BooleanField(default=True)
    llantas_ok = serializers.BooleanField(default=True)
    cristales_ok = serializers.BooleanField(default=True)
    carroceria_ok = serializers.BooleanField(default=True)
    observaciones_recepcion = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    descripcion_problema = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    firma_cliente = serializers.CharField()
    fotos_recepcion = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    def validate_firma_cliente(self, value):
        # Se guarda tal como llega; solo se exige que sea una imagen en data URL
        if not value.startswith('data:image/'):
            raise serializers.ValidationError('La firma del cliente debe ser una imagen válida')
        return value

    def validate(self, attrs):
        cita = attrs.get('cita')
        if cita is not None:
            if cita.cliente_id != attrs['cliente'].pk or cita.vehiculo_id != attrs['vehiculo'].pk:
                raise serializers.ValidationError({'cita': 'La cita no corresponde al cliente y vehículo indicados'})
            if cita.estado in ('cancelada', 'completada', 'recibida'):
                raise serializers.ValidationError({'cita': 'La cita no está disponible para recepción'})
        return attrs


class ServicioRecepcionSerializer(serializers.ModelSerializer):
    cliente_nombre = serializers.CharField(source='cliente.nombre', read_only=True)
    vehiculo_placa = serializers.CharField(source='vehiculo.placa', read_only=True)
    vehiculo_descripcion = serializers.SerializerMethodField()
    estado = EstadoBasicoSerializer(read_only=True)
    recibido_por_nombre = serializers.CharField(source='recibido_por.get_full_name', read_only=True, default=None)

    class Meta:
        model = Servicio
        fields = [
            'id', 'cita', 'cliente', 'cliente_nombre', 'vehiculo', 'vehiculo_placa', 'vehiculo_descripcion',
            'estado', 'sucursal', 'descripcion_problema', 'kilometraje', 'nivel_combustible',
            'luces_ok', 'llantas_ok', 'cristales_ok', 'carroceria_ok', 'observaciones_recepcion',
            'firma_cliente', 'fotos_recepcion', 'recibido_por', 'recibido_por_nombre', 'fecha_recepcion',
        ]

    def get_vehiculo_descripcion(self, obj):
        return f"{obj.vehiculo.marca} {obj.vehiculo.modelo}"


class CitaRecepcionSerializer(serializers.ModelSerializer):
    cliente_nombre = serializers.CharField(source='cliente.nombre', read_only=True)
    cliente_telefono = serializers.CharField(source='cliente.telefono', read_only=True)
    vehiculo_placa = serializers.CharField(source='vehiculo.placa', read_only=True)
    servicios = ServicioRecepcionSerializer(many=True, read_only=True)

    class Meta:
        model = Cita
        fields = [
            'id', 'cliente', 'cliente_nombre', 'cliente_telefono', 'vehiculo', 'vehiculo_placa',
            'fecha_programada', 'estado', 'notas', 'servicios',
        ]
