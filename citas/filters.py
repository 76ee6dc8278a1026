import django_filters

from .models import Cita


class CitaFilter(django_filters.FilterSet):
    cliente = django_filters.NumberFilter(field_name='cliente_id')
    vehiculo = django_filters.NumberFilter(field_name='vehiculo_id')
    estado = django_filters.ChoiceFilter(choices=Cita.ESTADOS)
    fecha_desde = django_filters.DateFilter(field_name='fecha_programada', lookup_expr='date__gte')
    fecha_hasta = django_filters.DateFilter(field_name='fecha_programada', lookup_expr='date__lte')

    class Meta:
        model = Cita
        fields = ['cliente', 'vehiculo', 'estado', 'fecha_desde', 'fecha_hasta']
