"""Aplicación de FilterSets de django-filter fuera de las vistas genéricas."""
from django_filters.utils import translate_validation


def aplicar_filtros(filterset_class, params, queryset):
    """Filtra ``queryset`` con ``filterset_class``; parámetros inválidos responden 400."""
    filtro = filterset_class(params, queryset=queryset)
    if not filtro.is_valid():
        raise translate_validation(filtro.errors)
    return filtro.qs, filtro.form.cleaned_data
