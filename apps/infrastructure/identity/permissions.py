from rest_framework.permissions import BasePermission


def require_claim(claim_type: str, *allowed_values: str):
    """Cria uma permissão que exige o claim no token do usuário.

    Sem valores informados, basta o claim estar presente.
    """

    class RequireClaim(BasePermission):
        message = f'The "{claim_type}" claim is required.'

        def has_permission(self, request, view):
            if not (request.user and request.user.is_authenticated):
                return False

            claims = request.auth if isinstance(request.auth, dict) else {}
            if claim_type not in claims:
                return False

            if not allowed_values:
                return True

            values = claims[claim_type]
            if not isinstance(values, list):
                values = [values]
            return any(value in allowed_values for value in values)

    RequireClaim.__name__ = f'Require{claim_type}Claim'
    RequireClaim.__qualname__ = RequireClaim.__name__
    return RequireClaim
