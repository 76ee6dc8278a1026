from django.urls import path

from . import views

urlpatterns = [
    path('recibir-vehiculo/', views.RecibirVehiculoView.as_view(), name='recepcion-recibir-vehiculo'),
    path('hoy/', views.recepciones_hoy, name='recepcion-hoy'),
    path('servicio/<int:pk>/', views.ServicioRecepcionView.as_view(), name='recepcion-servicio'),
]
