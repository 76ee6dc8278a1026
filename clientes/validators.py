import re

from rest_framework import serializers

PATRON_TELEFONO = re.compile(r'^[+]?[\d\s\-()]+$')


def validar_telefono(value, etiqueta='El teléfono'):
    """Valida un número de contacto: mínimo 10 caracteres, dígitos y separadores."""
    value = (value or '').strip()
    if len(value) < 10:
        raise serializers.ValidationError(f"{etiqueta} debe tener al menos 10 caracteres")
    if not PATRON_TELEFONO.match(value):
        raise serializers.ValidationError(f"{etiqueta} contiene caracteres no válidos")
    return value
