import logging
from django.urls import reverse
from rest_framework import exceptions, viewsets, status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiExample
from drf_spectacular.types import OpenApiTypes
from apps.domain.models import Provider
from apps.application.services.identity_service import IdentityService, IdentityError, SignInResult
from apps.infrastructure.identity.config import get_jwt_settings
from apps.infrastructure.identity.permissions import require_claim
from apps.infrastructure.identity.token_issuer import build_user_response
from apps.infrastructure.persistence.data_context import DataContext, SaveChangesError
from apps.presentation.serializers import (
    ProviderSerializer, RegisterUserSerializer, LoginUserSerializer, UserResponseSerializer
)
from apps.presentation.utils import error_response, validation_problem
from apps.presentation.validation import validate_payload

logger = logging.getLogger('apps')

SAVE_ERROR_MESSAGE = 'There is a error on record save'

DELETE_PROVIDER_CLAIM = 'DeleteProvider'


def _user_response(identity: IdentityService, user) -> dict:
    return build_user_response(
        user,
        identity.get_claims(user),
        identity.get_roles(user),
        get_jwt_settings(),
    )


@extend_schema(
    summary='Registrar usuário',
    description='Cria um usuário com e-mail e senha e retorna um JWT com os claims e roles do usuário.',
    tags=['User'],
    request=RegisterUserSerializer,
    responses={
        200: UserResponseSerializer,
        400: OpenApiTypes.OBJECT,
    },
    examples=[
        OpenApiExample(
            'Registro',
            value={
                'email': 'user@example.com',
                'password': 'Str0ng!Passw0rd',
                'confirm_password': 'Str0ng!Passw0rd'
            },
            request_only=True
        )
    ],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register_user(request):
    if not request.data:
        return error_response('Uninformed user')

    serializer, errors = validate_payload(request.data, RegisterUserSerializer)
    if errors:
        return validation_problem(errors)

    identity = IdentityService()
    try:
        user = identity.register_user(
            serializer.validated_data['email'],
            serializer.validated_data['password'],
        )
    except IdentityError as e:
        return error_response('User creation failed', status.HTTP_400_BAD_REQUEST, e.errors)

    return Response(_user_response(identity, user), status=status.HTTP_200_OK)


@extend_schema(
    summary='Login',
    description='Autentica o usuário com e-mail e senha. Após falhas consecutivas a conta é bloqueada temporariamente e o login retorna "Blocked user".',
    tags=['User'],
    request=LoginUserSerializer,
    responses={
        200: UserResponseSerializer,
        400: OpenApiTypes.OBJECT,
    },
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login_user(request):
    if not request.data:
        return error_response('Uninformed user')

    serializer, errors = validate_payload(request.data, LoginUserSerializer)
    if errors:
        return validation_problem(errors)

    email = serializer.validated_data['email']
    identity = IdentityService()
    result = identity.password_sign_in(email, serializer.validated_data['password'], lockout_on_failure=True)

    if result is SignInResult.LOCKED_OUT:
        return error_response('Blocked user')

    if result is not SignInResult.SUCCEEDED:
        return error_response('Invalid user or password')

    user = identity.find_by_email(email)
    return Response(_user_response(identity, user), status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(
        summary='Listar fornecedores',
        description='Retorna todos os fornecedores cadastrados, sem ordem garantida.',
        tags=['Provider'],
        responses={200: ProviderSerializer(many=True)},
    ),
    retrieve=extend_schema(
        summary='Obter fornecedor',
        description='Retorna um fornecedor pelo id.',
        tags=['Provider'],
        responses={200: ProviderSerializer, 404: None},
    ),
    create=extend_schema(
        summary='Criar fornecedor',
        description='Cria um fornecedor. O id é gerado pelo servidor. Requer autenticação.',
        tags=['Provider'],
        request=ProviderSerializer,
        responses={201: ProviderSerializer, 400: OpenApiTypes.OBJECT},
        examples=[
            OpenApiExample(
                'Criar fornecedor',
                value={'name': 'Acme', 'document': '12345678901234', 'active': True},
                request_only=True
            ),
        ],
    ),
    update=extend_schema(
        summary='Substituir fornecedor',
        description='Substitui todos os campos do fornecedor. Requer autenticação.',
        tags=['Provider'],
        request=ProviderSerializer,
        responses={204: None, 400: OpenApiTypes.OBJECT, 404: None},
    ),
    destroy=extend_schema(
        summary='Excluir fornecedor',
        description='Remove o fornecedor. Requer o claim "DeleteProvider".',
        tags=['Provider'],
        responses={204: None, 400: OpenApiTypes.OBJECT, 404: None},
    ),
)
class ProviderViewSet(viewsets.ViewSet):
    lookup_value_regex = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
    permission_classes = [IsAuthenticated]
    permission_classes_by_action = {
        'list': [AllowAny],
        'retrieve': [AllowAny],
        'create': [IsAuthenticated],
        'update': [IsAuthenticated],
        'destroy': [IsAuthenticated, require_claim(DELETE_PROVIDER_CLAIM)],
    }

    public_actions = ('list', 'retrieve')

    def get_permissions(self):
        classes = self.permission_classes_by_action.get(self.action, self.permission_classes)
        return [permission() for permission in classes]

    def perform_authentication(self, request):
        # Em rotas públicas um token inválido ou expirado é ignorado
        try:
            request.user
        except exceptions.AuthenticationFailed:
            if self.action not in self.public_actions:
                raise
            logger.info(f'Ignoring invalid bearer token on public action {self.action}')
            request._not_authenticated()

    def get_data_context(self) -> DataContext:
        return DataContext()

    def _commit(self, context: DataContext):
        """Retorna (linhas afetadas, resposta de erro ou None)."""
        try:
            return context.commit(), None
        except SaveChangesError:
            return 0, error_response(SAVE_ERROR_MESSAGE)

    def list(self, request):
        providers = self.get_data_context().providers.list()
        return Response(ProviderSerializer(providers, many=True).data, status=status.HTTP_200_OK)

    def retrieve(self, request, pk=None):
        provider = self.get_data_context().providers.get_by_id(pk)
        if provider is None:
            return Response(status=status.HTTP_404_NOT_FOUND)
        return Response(ProviderSerializer(provider).data, status=status.HTTP_200_OK)

    def create(self, request):
        serializer, errors = validate_payload(request.data, ProviderSerializer)
        if errors:
            return validation_problem(errors)

        context = self.get_data_context()
        provider = context.providers.add(Provider(**serializer.validated_data))

        result, error = self._commit(context)
        if error is not None:
            return error
        if result == 0:
            return error_response(SAVE_ERROR_MESSAGE)

        logger.info(f'Provider {provider.id} created by user {request.user.pk}')
        return Response(
            ProviderSerializer(provider).data,
            status=status.HTTP_201_CREATED,
            headers={'Location': reverse('provider-detail', kwargs={'pk': provider.id})},
        )

    def update(self, request, pk=None):
        context = self.get_data_context()

        # Checagem de existência antes da validação, sem manter a instância
        if not context.providers.exists(pk):
            return Response(status=status.HTTP_404_NOT_FOUND)

        serializer, errors = validate_payload(request.data, ProviderSerializer)
        if errors:
            return validation_problem(errors)

        context.providers.update(Provider(id=pk, **serializer.validated_data))

        result, error = self._commit(context)
        if error is not None:
            return error
        if result == 0:
            # Removido entre a leitura e a escrita
            return Response(status=status.HTTP_404_NOT_FOUND)

        logger.info(f'Provider {pk} replaced by user {request.user.pk}')
        return Response(status=status.HTTP_204_NO_CONTENT)

    def destroy(self, request, pk=None):
        context = self.get_data_context()
        provider = context.providers.get_by_id(pk)
        if provider is None:
            return Response(status=status.HTTP_404_NOT_FOUND)

        context.providers.remove(provider)

        result, error = self._commit(context)
        if error is not None:
            return error
        if result == 0:
            return Response(status=status.HTTP_404_NOT_FOUND)

        logger.info(f'Provider {pk} deleted by user {request.user.pk}')
        return Response(status=status.HTTP_204_NO_CONTENT)
