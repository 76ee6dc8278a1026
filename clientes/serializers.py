from rest_framework import serializers

from .models import Cliente
from .validators import validar_telefono


class ClienteListSerializer(serializers.ModelSerializer):
    """Serializer para listar clientes"""
    vehiculos_count = serializers.IntegerField(read_only=True)
    creador_nombre = serializers.CharField(source='creador.get_full_name', read_only=True, default=None)

    class Meta:
        model = Cliente
        fields = [
            'id', 'nombre', 'telefono', 'whatsapp', 'email', 'direccion', 'activo',
            'vehiculos_count', 'creador_nombre', 'creado'
        ]


class ClienteDetailSerializer(serializers.ModelSerializer):
    """Serializer detallado para clientes"""
    vehiculos = serializers.SerializerMethodField()
    servicios_recientes = serializers.SerializerMethodField()
    citas_activas = serializers.SerializerMethodField()

    class Meta:
        model = Cliente
        fields = [
            'id', 'nombre', 'telefono', 'whatsapp', 'email', 'direccion', 'activo',
            'vehiculos', 'servicios_recientes', 'citas_activas', 'creado', 'actualizado'
        ]

    def get_vehiculos(self, obj):
        return [{
            'id': v.pk,
            'placa': v.placa,
            'marca': v.marca,
            'modelo': v.modelo,
            'anio': v.anio,
        } for v in obj.vehiculos.all()]

    def get_servicios_recientes(self, obj):
        servicios = obj.servicios.select_related('vehiculo', 'estado').order_by('-creado')[:5]
        return [{
            'id': s.pk,
            'vehiculo': s.vehiculo.placa,
            'estado': s.estado.nombre,
            'monto_total': s.monto_total,
            'creado': s.creado,
        } for s in servicios]

    def get_citas_activas(self, obj):
        from citas.models import Cita
        return obj.citas.filter(estado__in=Cita.ESTADOS_ACTIVOS).count()


class ClienteCreateUpdateSerializer(serializers.ModelSerializer):
    """Serializer para crear/actualizar clientes"""
    id = serializers.IntegerField(read_only=True)
    nombre = serializers.CharField(min_length=2, max_length=100)
    telefono = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    whatsapp = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=20)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    direccion = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=200)

    class Meta:
        model = Cliente
        fields = ['id', 'nombre', 'telefono', 'whatsapp', 'email', 'direccion']

    def validate_telefono(self, value):
        if not value:
            return None
        return validar_telefono(value)

    def validate_whatsapp(self, value):
        if not value:
            return None
        return validar_telefono(value, 'El WhatsApp')

    def validate_email(self, value):
        """Email opcional pero único entre clientes"""
        if not value:
            return None
        value = value.strip().lower()
        qs = Cliente.objects.filter(email__iexact=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Ya existe un cliente con este email")
        return value

    def validate(self, attrs):
        # El teléfono principal se unifica con el WhatsApp
        if attrs.get('whatsapp'):
            attrs['telefono'] = attrs['whatsapp']

        telefono = attrs.get('telefono', getattr(self.instance, 'telefono', None))
        whatsapp = attrs.get('whatsapp', getattr(self.instance, 'whatsapp', None))
        if not telefono and not whatsapp:
            raise serializers.ValidationError({
                'telefono': 'Debe registrar al menos un teléfono o WhatsApp'
            })
        return attrs
