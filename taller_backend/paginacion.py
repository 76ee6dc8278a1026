from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class PaginacionEstandar(PageNumberPagination):
    """Paginación por ``page``/``limit`` con respuesta dentro del sobre estándar."""
    page_size_query_param = "limit"
    max_page_size = 100

    def paginate_queryset(self, queryset, request, view=None):
        self.view = view
        return super().paginate_queryset(queryset, request, view)

    def datos_paginacion(self):
        return {
            "page": self.page.number,
            "limit": self.page.paginator.per_page,
            "total": self.page.paginator.count,
            "pages": self.page.paginator.num_pages,
        }

    def get_paginated_response(self, data):
        clave = getattr(self.view, "clave_listado", "results")
        mensaje = getattr(self.view, "mensajes", {}).get("list", "")
        return Response({
            "success": True,
            "message": mensaje,
            "data": {
                clave: data,
                "pagination": self.datos_paginacion(),
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "success": {"type": "boolean"},
                "message": {"type": "string"},
                "data": {
                    "type": "object",
                    "properties": {
                        "results": schema,
                        "pagination": {
                            "type": "object",
                            "properties": {
                                "page": {"type": "integer"},
                                "limit": {"type": "integer"},
                                "total": {"type": "integer"},
                                "pages": {"type": "integer"},
                            },
                        },
                    },
                },
            },
        }
