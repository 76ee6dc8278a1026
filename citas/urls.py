from django.urls import path

from . import views

urlpatterns = [
    path('', views.CitaListCreateView.as_view(), name='cita-list-create'),
    path('telefonica/', views.CitaTelefonicaView.as_view(), name='cita-telefonica'),
    path('<int:pk>/', views.CitaDetailView.as_view(), name='cita-detail'),
    path('<int:pk>/confirmar/', views.ConfirmarCitaView.as_view(), name='cita-confirmar'),
    path('<int:pk>/completar/', views.CompletarCitaView.as_view(), name='cita-completar'),
]
