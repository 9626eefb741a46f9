from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger('apps')

VALIDATION_PROBLEM_TYPE = 'https://tools.ietf.org/html/rfc7231#section-6.5.1'
VALIDATION_PROBLEM_TITLE = 'One or more validation errors occurred.'


def error_response(message: str, status_code: int = status.HTTP_400_BAD_REQUEST, details=None) -> Response:
    response_data = {
        'error': message,
        'status': status_code
    }

    if details:
        response_data['details'] = details

    logger.error(f'Error response: {message} - {details}')

    return Response(response_data, status=status_code)


def validation_problem(errors: dict, status_code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    response_data = {
        'type': VALIDATION_PROBLEM_TYPE,
        'title': VALIDATION_PROBLEM_TITLE,
        'status': status_code,
        'errors': errors,
    }

    logger.info(f'Validation problem: {errors}')

    return Response(response_data, status=status_code)
