import logging
import jwt
from django.contrib.auth import get_user_model
from drf_spectacular.extensions import OpenApiAuthenticationExtension
from drf_spectacular.plumbing import build_bearer_security_scheme_object
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from .config import JwtSettings, get_jwt_settings
from .token_issuer import decode_token

logger = logging.getLogger('apps')


class JWTAuthentication(BaseAuthentication):
    """Autenticação via header "Authorization: Bearer <token>".

    Em caso de sucesso, request.user é o usuário do claim "sub" e
    request.auth é o conjunto de claims decodificado do token.
    """

    keyword = 'Bearer'

    def __init__(self, jwt_settings: JwtSettings = None):
        self.jwt_settings = jwt_settings or get_jwt_settings()

    def authenticate(self, request):
        auth = get_authorization_header(request).split()

        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None

        if len(auth) == 1:
            raise exceptions.AuthenticationFailed('Invalid token header. No credentials provided.')
        if len(auth) > 2:
            raise exceptions.AuthenticationFailed('Invalid token header. Token string should not contain spaces.')

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Invalid token header. Token string should not contain invalid characters.')

        return self.authenticate_credentials(token)

    def authenticate_credentials(self, token: str):
        try:
            payload = decode_token(token, self.jwt_settings)
        except jwt.ExpiredSignatureError:
            raise exceptions.AuthenticationFailed('Token has expired.')
        except jwt.InvalidTokenError as e:
            logger.warning(f'Invalid bearer token: {e}')
            raise exceptions.AuthenticationFailed('Invalid token.')

        User = get_user_model()
        try:
            user = User.objects.filter(pk=payload['sub'], is_active=True).first()
        except (ValueError, TypeError):
            user = None

        if user is None:
            raise exceptions.AuthenticationFailed('User inactive or deleted.')

        return user, payload

    def authenticate_header(self, request):
        return self.keyword


class JWTAuthenticationScheme(OpenApiAuthenticationExtension):
    target_class = 'apps.infrastructure.identity.authentication.JWTAuthentication'
    name = 'Bearer'

    def get_security_definition(self, auto_schema):
        return build_bearer_security_scheme_object(
            header_name='Authorization',
            token_prefix='Bearer',
            bearer_format='JWT',
        )
