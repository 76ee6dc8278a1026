from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'', views.ClienteViewSet, basename='cliente')

urlpatterns = [
    path('', include(router.urls)),
]
