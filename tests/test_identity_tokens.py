import pytest
import jwt
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from django.contrib.auth.models import AnonymousUser
from rest_framework import exceptions
from rest_framework.test import APIRequestFactory
from apps.infrastructure.identity.authentication import JWTAuthentication
from apps.infrastructure.identity.config import JwtSettings
from apps.infrastructure.identity.permissions import require_claim
from apps.infrastructure.identity.token_issuer import (
    build_token_payload, build_user_response, decode_token, encode_token
)

JWT_SETTINGS = JwtSettings(
    secret_key='test-secret-key-with-enough-length-for-hs256',
    expiration_hours=2,
    issuer='TestIssuer',
    audience='https://test.local',
)


@pytest.mark.django_db
class TestTokenIssuer:
    def test_build_user_response(self, user):
        response = build_user_response(user, [('DeleteProvider', 'true')], ['Admin'], JWT_SETTINGS)

        assert response['expires_in'] == 7200
        assert response['user_token'] == {
            'id': str(user.pk),
            'email': 'test@example.com',
            'claims': [{'type': 'DeleteProvider', 'value': 'true'}],
        }

        payload = decode_token(response['access_token'], JWT_SETTINGS)
        assert payload['sub'] == str(user.pk)
        assert payload['email'] == 'test@example.com'
        assert payload['DeleteProvider'] == 'true'
        assert payload['role'] == ['Admin']
        assert payload['iss'] == 'TestIssuer'
        assert payload['aud'] == 'https://test.local'
        assert payload['exp'] - payload['iat'] == 7200

    def test_repeated_claim_type_becomes_list(self, user):
        payload = build_token_payload(user, [('scope', 'a'), ('scope', 'b')], [], JWT_SETTINGS)
        assert payload['scope'] == ['a', 'b']

    def test_reserved_claims_are_not_overridden(self, user):
        payload = build_token_payload(user, [('sub', 'someone-else')], [], JWT_SETTINGS)
        assert payload['sub'] == str(user.pk)

    def test_each_token_has_unique_jti(self, user):
        first = build_token_payload(user, [], [], JWT_SETTINGS)
        second = build_token_payload(user, [], [], JWT_SETTINGS)
        assert first['jti'] != second['jti']

    def test_expired_token(self, user):
        past = datetime.now(timezone.utc) - timedelta(hours=3)
        token = encode_token(build_token_payload(user, [], [], JWT_SETTINGS, now=past), JWT_SETTINGS)

        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token, JWT_SETTINGS)

    def test_wrong_audience(self, user):
        token = build_user_response(user, [], [], JWT_SETTINGS)['access_token']
        other = JwtSettings(
            secret_key=JWT_SETTINGS.secret_key,
            expiration_hours=2,
            issuer='TestIssuer',
            audience='https://other.local',
        )

        with pytest.raises(jwt.InvalidAudienceError):
            decode_token(token, other)

    def test_wrong_signature(self, user):
        token = build_user_response(user, [], [], JWT_SETTINGS)['access_token']
        other = JwtSettings(
            secret_key='another-secret-key-with-enough-length-for-hs256',
            expiration_hours=2,
            issuer='TestIssuer',
            audience='https://test.local',
        )

        with pytest.raises(jwt.InvalidSignatureError):
            decode_token(token, other)


@pytest.mark.django_db
class TestJWTAuthentication:
    factory = APIRequestFactory()

    def _request(self, header=None):
        if header is None:
            return self.factory.get('/provider')
        return self.factory.get('/provider', HTTP_AUTHORIZATION=header)

    def test_without_header(self):
        assert JWTAuthentication(JWT_SETTINGS).authenticate(self._request()) is None

    def test_other_scheme_is_ignored(self):
        assert JWTAuthentication(JWT_SETTINGS).authenticate(self._request('Token abc')) is None

    def test_valid_token(self, user):
        token = build_user_response(user, [('DeleteProvider', 'true')], [], JWT_SETTINGS)['access_token']

        authenticated_user, payload = JWTAuthentication(JWT_SETTINGS).authenticate(self._request(f'Bearer {token}'))

        assert authenticated_user == user
        assert payload['DeleteProvider'] == 'true'

    def test_missing_credentials(self):
        with pytest.raises(exceptions.AuthenticationFailed):
            JWTAuthentication(JWT_SETTINGS).authenticate(self._request('Bearer'))

    def test_token_with_spaces(self):
        with pytest.raises(exceptions.AuthenticationFailed):
            JWTAuthentication(JWT_SETTINGS).authenticate(self._request('Bearer a b'))

    def test_invalid_token(self):
        with pytest.raises(exceptions.AuthenticationFailed):
            JWTAuthentication(JWT_SETTINGS).authenticate(self._request('Bearer not-a-jwt'))

    def test_inactive_user(self, user):
        token = build_user_response(user, [], [], JWT_SETTINGS)['access_token']
        user.is_active = False
        user.save()

        with pytest.raises(exceptions.AuthenticationFailed):
            JWTAuthentication(JWT_SETTINGS).authenticate(self._request(f'Bearer {token}'))

    def test_authenticate_header(self):
        assert JWTAuthentication(JWT_SETTINGS).authenticate_header(self._request()) == 'Bearer'


class TestRequireClaim:
    def _request(self, claims, authenticated=True):
        user = SimpleNamespace(is_authenticated=True) if authenticated else AnonymousUser()
        return SimpleNamespace(user=user, auth=claims)

    def test_claim_present(self):
        permission = require_claim('DeleteProvider')()
        assert permission.has_permission(self._request({'DeleteProvider': 'true'}), None) is True

    def test_claim_missing(self):
        permission = require_claim('DeleteProvider')()
        assert permission.has_permission(self._request({'sub': '1'}), None) is False

    def test_anonymous_user(self):
        permission = require_claim('DeleteProvider')()
        assert permission.has_permission(self._request(None, authenticated=False), None) is False

    def test_required_values(self):
        permission = require_claim('scope', 'write')()
        assert permission.has_permission(self._request({'scope': ['read', 'write']}), None) is True
        assert permission.has_permission(self._request({'scope': 'read'}), None) is False

    def test_class_name(self):
        assert require_claim('DeleteProvider').__name__ == 'RequireDeleteProviderClaim'
