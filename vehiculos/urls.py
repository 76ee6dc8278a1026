from django.urls import path

from . import views

urlpatterns = [
    path('', views.VehiculoListCreateView.as_view(), name='vehiculo-list-create'),
    path('<int:pk>/', views.VehiculoDetailView.as_view(), name='vehiculo-detail'),
    path('por-cliente/<int:cliente_id>/', views.vehiculos_por_cliente, name='vehiculos-por-cliente'),
]
