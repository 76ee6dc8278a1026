from django.urls import path
from .views import (
    CustomUserListView,
    CustomUserRetrieveUpdateDestroyView,
    ResetUserPasswordView,
    RolListView,
    cambiar_password_view,
    current_user_view,
    logout_view,
)
from .auth import (
    CustomUserLoginView,
)

urlpatterns = [
    # Autenticación
    path('auth/login/', CustomUserLoginView.as_view(), name='login'),
    path('auth/logout/', logout_view, name='logout'),
    path('auth/me/', current_user_view, name='current-user'),
    path('auth/cambiar-password/', cambiar_password_view, name='cambiar-password'),

    # Gestión de usuarios
    path('usuarios/', CustomUserListView.as_view(), name='user-list'),
    path('usuarios/roles/', RolListView.as_view(), name='rol-list'),
    path('usuarios/<int:pk>/', CustomUserRetrieveUpdateDestroyView.as_view(), name='user-detail'),
    path('usuarios/<int:pk>/reset-password/', ResetUserPasswordView.as_view(), name='reset-user-password'),
]
