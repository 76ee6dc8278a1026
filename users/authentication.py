from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """Token de DRF enviado como ``Authorization: Bearer <token>``."""
    keyword = 'Bearer'
