import django_filters

from .models import Oportunidad


class OportunidadFilter(django_filters.FilterSet):
    cliente = django_filters.NumberFilter(field_name='cliente_id')
    vehiculo = django_filters.NumberFilter(field_name='vehiculo_id')
    estado = django_filters.ChoiceFilter(choices=Oportunidad.ESTADOS)
    tipo = django_filters.CharFilter(lookup_expr='icontains')
    seguimiento_desde = django_filters.DateFilter(field_name='fecha_seguimiento', lookup_expr='gte')
    seguimiento_hasta = django_filters.DateFilter(field_name='fecha_seguimiento', lookup_expr='lte')

    class Meta:
        model = Oportunidad
        fields = ['cliente', 'vehiculo', 'estado', 'tipo', 'seguimiento_desde', 'seguimiento_hasta']
