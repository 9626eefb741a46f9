import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple
import jwt
from .config import JwtSettings

RESERVED_CLAIMS = {'sub', 'email', 'jti', 'nbf', 'iat', 'exp', 'iss', 'aud', 'role'}


def build_token_payload(
    user,
    claims: Iterable[Tuple[str, str]],
    roles: Iterable[str],
    jwt_settings: JwtSettings,
    now: Optional[datetime] = None,
) -> Dict:
    """Monta o payload do JWT: claims padrão, claims do usuário e roles.

    Claims do usuário com o mesmo tipo viram uma lista; tipos que colidem
    com claims registradas são ignorados.
    """
    now = now or datetime.now(timezone.utc)
    issued_at = int(now.timestamp())

    payload = {
        'sub': str(user.pk),
        'email': user.email,
        'jti': str(uuid.uuid4()),
        'nbf': issued_at,
        'iat': issued_at,
        'exp': issued_at + int(jwt_settings.lifetime.total_seconds()),
        'iss': jwt_settings.issuer,
        'aud': jwt_settings.audience,
    }

    grouped: Dict[str, List[str]] = {}
    for claim_type, claim_value in claims:
        if claim_type in RESERVED_CLAIMS:
            continue
        grouped.setdefault(claim_type, []).append(claim_value)

    for claim_type, values in grouped.items():
        payload[claim_type] = values[0] if len(values) == 1 else values

    payload['role'] = sorted(roles)
    return payload


def encode_token(payload: Dict, jwt_settings: JwtSettings) -> str:
    return jwt.encode(payload, jwt_settings.secret_key, algorithm=jwt_settings.algorithm)


def decode_token(token: str, jwt_settings: JwtSettings) -> Dict:
    # Levanta jwt.InvalidTokenError (ou subclasse) para assinatura, expiração, issuer ou audience inválidos
    return jwt.decode(
        token,
        jwt_settings.secret_key,
        algorithms=[jwt_settings.algorithm],
        audience=jwt_settings.audience,
        issuer=jwt_settings.issuer,
        options={'require': ['exp', 'iat', 'sub']},
    )


def build_user_response(
    user,
    claims: Iterable[Tuple[str, str]],
    roles: Iterable[str],
    jwt_settings: JwtSettings,
) -> Dict:
    claims = list(claims)
    payload = build_token_payload(user, claims, roles, jwt_settings)

    return {
        'access_token': encode_token(payload, jwt_settings),
        'expires_in': int(jwt_settings.lifetime.total_seconds()),
        'user_token': {
            'id': str(user.pk),
            'email': user.email,
            'claims': [{'type': claim_type, 'value': claim_value} for claim_type, claim_value in claims],
        },
    }
