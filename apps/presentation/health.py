import logging
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema

logger = logging.getLogger('apps')


def check_database(alias: str = DEFAULT_DB_ALIAS) -> bool:
    try:
        with connections[alias].cursor() as cursor:
            cursor.execute('SELECT 1')
        return True
    except DatabaseError as e:
        logger.error(f'Database health check failed: {str(e)}')
        return False


@extend_schema(
    summary='Health Check',
    description='Verifica o status da API e a conectividade com o banco de dados. Retorna 503 quando o banco está indisponível.',
    tags=['Health'],
    responses={
        200: {
            'type': 'object',
            'properties': {
                'status': {'type': 'string', 'example': 'ok'},
                'database': {'type': 'string', 'example': 'healthy'},
            }
        },
        503: {
            'type': 'object',
            'properties': {
                'status': {'type': 'string', 'example': 'degraded'},
                'database': {'type': 'string', 'example': 'unhealthy'},
            }
        },
    },
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    if check_database():
        return Response({'status': 'ok', 'database': 'healthy'}, status=status.HTTP_200_OK)

    return Response(
        {'status': 'degraded', 'database': 'unhealthy'},
        status=status.HTTP_503_SERVICE_UNAVAILABLE,
    )
