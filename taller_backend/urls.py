"""
URL configuration for taller_backend project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView
)

urlpatterns = [
    path("admin/", admin.site.urls),
    #Esquema de OpenAPI(JSON)
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    #Documentacion en swagger UI
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    #endpoints de API
    path("api/", include("users.urls")),
    path('api/sucursales/', include('sucursales.urls')),
    path('api/clientes/', include('clientes.urls')),
    path('api/vehiculos/', include('vehiculos.urls')),
    path('api/mecanicos/', include('mecanicos.urls')),
    path('api/', include('servicios.urls')),
    path('api/citas/', include('citas.urls')),
    path('api/oportunidades/', include('oportunidades.urls')),
    path('api/recepcion/', include('recepcion.urls')),
]
