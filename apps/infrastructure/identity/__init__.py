from .config import JwtSettings, LockoutSettings, get_jwt_settings, get_lockout_settings
from .token_issuer import build_user_response, decode_token

__all__ = [
    'JwtSettings',
    'LockoutSettings',
    'get_jwt_settings',
    'get_lockout_settings',
    'build_user_response',
    'decode_token',
]
