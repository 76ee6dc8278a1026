from django.urls import path
from . import views

urlpatterns = [
    path('', views.SucursalListCreateView.as_view(), name='sucursal-list-create'),
    path('activas/', views.sucursales_activas, name='sucursales-activas'),
    path('<int:pk>/', views.SucursalDetailView.as_view(), name='sucursal-detail'),
]
