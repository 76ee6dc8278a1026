from rest_framework import serializers
from rest_framework.exceptions import NotFound


class RelacionExistente(serializers.PrimaryKeyRelatedField):
    """Llave primaria de una relación; si el registro no existe responde 404."""

    def to_internal_value(self, data):
        try:
            return super().to_internal_value(data)
        except serializers.ValidationError as exc:
            if 'does_not_exist' in exc.get_codes():
                raise NotFound(self.error_messages['does_not_exist'].format(pk_value=data))
            raise
