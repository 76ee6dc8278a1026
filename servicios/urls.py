from django.urls import path

from . import views

urlpatterns = [
    # Órdenes de servicio
    path('servicios/', views.ServicioListCreateView.as_view(), name='servicio-list-create'),
    path('servicios/<int:pk>/', views.ServicioDetailView.as_view(), name='servicio-detail'),
    path('servicios/<int:pk>/estado/', views.CambiarEstadoServicioView.as_view(), name='servicio-cambiar-estado'),
    path('servicios/<int:pk>/iniciar/', views.IniciarServicioView.as_view(), name='servicio-iniciar'),
    path('servicios/<int:pk>/completar/', views.CompletarServicioView.as_view(), name='servicio-completar'),
    path('servicios/historial/<str:tipo>/<int:objeto_id>/', views.historial, name='servicio-historial'),
    path('servicios/calcular-comision/', views.calcular_comision_view, name='servicio-calcular-comision'),
    path('servicios/exportar/', views.exportar_servicios, name='servicios-exportar'),

    # Estados de trabajo
    path('estados-trabajo/', views.EstadoTrabajoListCreateView.as_view(), name='estado-trabajo-list-create'),
    path('estados-trabajo/reordenar/', views.reordenar_estados, name='estado-trabajo-reordenar'),
    path('estados-trabajo/<int:pk>/', views.EstadoTrabajoDetailView.as_view(), name='estado-trabajo-detail'),

    # Bitácora de cambios de estado
    path('registros-estado/', views.RegistroEstadoListView.as_view(), name='registro-estado-list'),
    path('registros-estado/estadisticas/', views.estadisticas_registros, name='registro-estado-estadisticas'),
    path('registros-estado/<int:pk>/', views.RegistroEstadoDetailView.as_view(), name='registro-estado-detail'),
    path(
        'registros-estado/por-servicio/<int:servicio_id>/',
        views.RegistrosPorServicioView.as_view(),
        name='registros-por-servicio',
    ),
]
