import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from apps.domain.models import Provider, UserClaim
from apps.application.services.identity_service import IdentityService
from apps.infrastructure.identity.config import get_jwt_settings
from apps.infrastructure.identity.token_issuer import build_user_response

TEST_PASSWORD = 'Str0ng!Passw0rd'


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user():
    return User.objects.create_user(
        username='test@example.com',
        email='test@example.com',
        password=TEST_PASSWORD
    )


@pytest.fixture
def admin_user_with_claim():
    user = User.objects.create_user(
        username='admin@example.com',
        email='admin@example.com',
        password=TEST_PASSWORD
    )
    UserClaim.objects.create(user=user, claim_type='DeleteProvider', claim_value='true')
    return user


@pytest.fixture
def provider():
    return Provider.objects.create(
        name='Acme',
        document='12345678901234',
        active=True
    )


@pytest.fixture
def issue_token():
    def _issue(user):
        identity = IdentityService()
        response = build_user_response(
            user,
            identity.get_claims(user),
            identity.get_roles(user),
            get_jwt_settings(),
        )
        return response['access_token']
    return _issue


@pytest.fixture
def auth_client(api_client, user, issue_token):
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(user)}')
    return api_client


@pytest.fixture
def claim_client(api_client, admin_user_with_claim, issue_token):
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(admin_user_with_claim)}')
    return api_client
