from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import ProviderViewSet, register_user, login_user

router = SimpleRouter(trailing_slash=False)
router.register(r'provider', ProviderViewSet, basename='provider')

urlpatterns = [
    path('registry', register_user, name='registry'),
    path('login', login_user, name='login'),
    path('', include(router.urls)),
]
