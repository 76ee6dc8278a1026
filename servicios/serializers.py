import re

from rest_framework import serializers

from citas.models import Cita
from clientes.models import Cliente
from mecanicos.models import Mecanico
from taller_backend.campos import RelacionExistente
from vehiculos.models import Vehiculo

from .models import EstadoTrabajo, RegistroEstado, Servicio
from .services import validar_relaciones_servicio

PATRON_COLOR = re.compile(r'^#[0-9A-Fa-f]{6}$')


class EstadoTrabajoSerializer(serializers.ModelSerializer):
    nombre = serializers.CharField(min_length=2, max_length=50)
    orden = serializers.IntegerField(min_value=1)
    color = serializers.CharField(max_length=7, required=False, default='#6B7280')
    es_final = serializers.BooleanField(read_only=True)
    servicios_count = serializers.SerializerMethodField()

    class Meta:
        model = EstadoTrabajo
        fields = ['id', 'nombre', 'color', 'orden', 'tipo', 'es_final', 'servicios_count', 'creado', 'actualizado']
        read_only_fields = ['creado', 'actualizado']

    def get_servicios_count(self, obj):
        return obj.servicios.count()

    def validate_nombre(self, value):
        value = value.strip()
        qs = EstadoTrabajo.objects.filter(nombre__iexact=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('Ya existe un estado con este nombre')
        return value

    def validate_orden(self, value):
        qs = EstadoTrabajo.objects.filter(orden=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('Ya existe un estado con este orden')
        return value

    def validate_color(self, value):
        if not PATRON_COLOR.match(value):
            raise serializers.ValidationError('El color debe tener formato hexadecimal #RRGGBB')
        return value.upper()


class ReordenarItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    orden = serializers.IntegerField(min_value=1)


class EstadoBasicoSerializer(serializers.ModelSerializer):
    class Meta:
        model = EstadoTrabajo
        fields = ['id', 'nombre', 'color', 'orden', 'tipo']


class ServicioListSerializer(serializers.ModelSerializer):
    """Serializer para listar servicios"""
    cliente_nombre = serializers.CharField(source='cliente.nombre', read_only=True)
    vehiculo_placa = serializers.CharField(source='vehiculo.placa', read_only=True)
    vehiculo_descripcion = serializers.SerializerMethodField()
    mecanico_nombre = serializers.CharField(source='mecanico.nombre', read_only=True, default=None)
    estado = EstadoBasicoSerializer(read_only=True)

    class Meta:
        model = Servicio
        fields = [
            'id', 'cliente', 'cliente_nombre', 'vehiculo', 'vehiculo_placa', 'vehiculo_descripcion',
            'mecanico', 'mecanico_nombre', 'estado', 'descripcion_problema', 'monto_total',
            'comision_mecanico', 'fecha_inicio', 'fecha_fin', 'creado', 'actualizado'
        ]

    def get_vehiculo_descripcion(self, obj):
        return f"{obj.vehiculo.marca} {obj.vehiculo.modelo}"


class ServicioDetailSerializer(serializers.ModelSerializer):
    """Serializer detallado para servicios"""
    cliente_info = serializers.SerializerMethodField()
    vehiculo_info = serializers.SerializerMethodField()
    mecanico_info = serializers.SerializerMethodField()
    estado = EstadoBasicoSerializer(read_only=True)
    comision_calculada = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    recibido_por_nombre = serializers.CharField(source='recibido_por.get_full_name', read_only=True, default=None)
    registros_estado = serializers.SerializerMethodField()

    class Meta:
        model = Servicio
        fields = [
            'id', 'cita', 'cliente', 'cliente_info', 'vehiculo', 'vehiculo_info',
            'mecanico', 'mecanico_info', 'estado', 'sucursal',
            'descripcion_problema', 'diagnostico', 'detalle_cotizacion',
            'precio_mano_obra', 'precio_repuestos', 'costo_repuestos', 'monto_total', 'truput',
            'comision_mecanico', 'comision_calculada',
            'kilometraje', 'nivel_combustible', 'luces_ok', 'llantas_ok', 'cristales_ok',
            'carroceria_ok', 'observaciones_recepcion', 'firma_cliente', 'fotos_recepcion',
            'recibido_por', 'recibido_por_nombre', 'fecha_recepcion',
            'fecha_inicio', 'fecha_fin', 'registros_estado', 'creado', 'actualizado'
        ]

    def get_cliente_info(self, obj):
        return {
            'id': obj.cliente.pk,
            'nombre': obj.cliente.nombre,
            'telefono': obj.cliente.telefono,
            'email': obj.cliente.email,
        }

    def get_vehiculo_info(self, obj):
        return {
            'id': obj.vehiculo.pk,
            'placa': obj.vehiculo.placa,
            'marca': obj.vehiculo.marca,
            'modelo': obj.vehiculo.modelo,
            'anio': obj.vehiculo.anio,
        }

    def get_mecanico_info(self, obj):
        if obj.mecanico:
            return {
                'id': obj.mecanico.pk,
                'nombre': obj.mecanico.nombre,
                'porcentaje_comision': obj.mecanico.porcentaje_comision,
            }
        return None

    def get_registros_estado(self, obj):
        return RegistroEstadoSerializer(
            obj.registros_estado.select_related('estado_anterior', 'estado_nuevo', 'cambiado_por'),
            many=True,
        ).data


class ServicioCreateSerializer(serializers.ModelSerializer):
    """Serializer para crear servicios"""
    cliente = RelacionExistente(
        queryset=Cliente.objects.all(),
        error_messages={'does_not_exist': 'Cliente no encontrado'},
    )
    vehiculo = RelacionExistente(
        queryset=Vehiculo.objects.all(),
        error_messages={'does_not_exist': 'Vehículo no encontrado'},
    )
    mecanico = RelacionExistente(
        queryset=Mecanico.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Mecánico no encontrado'},
    )
    cita = RelacionExistente(
        queryset=Cita.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Cita no encontrada'},
    )
    estado = RelacionExistente(
        queryset=EstadoTrabajo.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Estado de trabajo no encontrado'},
    )

    class Meta:
        model = Servicio
        fields = [
            'id', 'cita', 'cliente', 'vehiculo', 'mecanico', 'estado',
            'descripcion_problema', 'diagnostico', 'detalle_cotizacion',
            'precio_mano_obra', 'precio_repuestos', 'costo_repuestos', 'monto_total', 'truput',
            'comision_mecanico',
        ]

    def validate(self, attrs):
        return validar_relaciones_servicio(attrs, self.instance)


class ServicioUpdateSerializer(ServicioCreateSerializer):
    """El estado solo cambia por el endpoint de cambio de estado."""

    class Meta(ServicioCreateSerializer.Meta):
        fields = [
            'id', 'cita', 'cliente', 'vehiculo', 'mecanico',
            'descripcion_problema', 'diagnostico', 'detalle_cotizacion',
            'precio_mano_obra', 'precio_repuestos', 'costo_repuestos', 'monto_total', 'truput',
            'comision_mecanico', 'fecha_inicio', 'fecha_fin',
        ]


class CambioEstadoSerializer(serializers.Serializer):
    estado = serializers.IntegerField()
    notas = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RegistroEstadoSerializer(serializers.ModelSerializer):
    estado_anterior = EstadoBasicoSerializer(read_only=True)
    estado_nuevo = EstadoBasicoSerializer(read_only=True)
    cambiado_por_nombre = serializers.CharField(source='cambiado_por.get_full_name', read_only=True, default=None)

    class Meta:
        model = RegistroEstado
        fields = [
            'id', 'servicio', 'estado_anterior', 'estado_nuevo', 'notas',
            'cambiado_por', 'cambiado_por_nombre', 'creado'
        ]


class CalculoComisionSerializer(serializers.Serializer):
    mecanico = serializers.IntegerField(error_messages={'required': 'El mecánico es requerido'})
    monto_total = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, default=0)
