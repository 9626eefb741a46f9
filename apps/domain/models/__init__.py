from .provider import Provider
from .user_claim import UserClaim
from .user_lockout import UserLockout

__all__ = [
    'Provider',
    'UserClaim',
    'UserLockout',
]
