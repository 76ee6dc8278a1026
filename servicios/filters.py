import django_filters

from .models import RegistroEstado, Servicio


class ServicioFilter(django_filters.FilterSet):
    cliente = django_filters.NumberFilter(field_name='cliente_id')
    vehiculo = django_filters.NumberFilter(field_name='vehiculo_id')
    mecanico = django_filters.NumberFilter(field_name='mecanico_id')
    estado = django_filters.NumberFilter(field_name='estado_id')
    fecha_desde = django_filters.DateFilter(field_name='creado', lookup_expr='date__gte')
    fecha_hasta = django_filters.DateFilter(field_name='creado', lookup_expr='date__lte')

    class Meta:
        model = Servicio
        fields = ['cliente', 'vehiculo', 'mecanico', 'estado', 'fecha_desde', 'fecha_hasta']


class RegistroEstadoFilter(django_filters.FilterSet):
    servicio = django_filters.NumberFilter(field_name='servicio_id')
    estado_anterior = django_filters.NumberFilter(field_name='estado_anterior_id')
    estado_nuevo = django_filters.NumberFilter(field_name='estado_nuevo_id')
    cambiado_por = django_filters.NumberFilter(field_name='cambiado_por_id')
    fecha_desde = django_filters.DateFilter(field_name='creado', lookup_expr='date__gte')
    fecha_hasta = django_filters.DateFilter(field_name='creado', lookup_expr='date__lte')

    class Meta:
        model = RegistroEstado
        fields = ['servicio', 'estado_anterior', 'estado_nuevo', 'cambiado_por', 'fecha_desde', 'fecha_hasta']
