from django.urls import path

from . import views

urlpatterns = [
    path('', views.OportunidadListCreateView.as_view(), name='oportunidad-list-create'),
    path('por-cliente/<int:cliente_id>/', views.oportunidades_por_cliente, name='oportunidades-por-cliente'),
    path('<int:pk>/', views.OportunidadDetailView.as_view(), name='oportunidad-detail'),
    path('<int:pk>/convertir/', views.ConvertirOportunidadView.as_view(), name='oportunidad-convertir'),
    path('<int:pk>/convertir-a-cita/', views.ConvertirACitaView.as_view(), name='oportunidad-convertir-a-cita'),
]
