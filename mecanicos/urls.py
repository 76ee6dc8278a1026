from django.urls import path

from . import views

urlpatterns = [
    path('', views.MecanicoListCreateView.as_view(), name='mecanico-list-create'),
    path('reporte/', views.reporte_mecanicos, name='mecanico-reporte'),
    path('<int:pk>/', views.MecanicoDetailView.as_view(), name='mecanico-detail'),
    path('<int:pk>/activar/', views.MecanicoActivarView.as_view(), name='mecanico-activar'),
]
