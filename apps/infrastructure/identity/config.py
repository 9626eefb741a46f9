from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from django.conf import settings


@dataclass(frozen=True)
class JwtSettings:
    secret_key: str
    expiration_hours: int
    issuer: str
    audience: str
    algorithm: str = 'HS256'

    @property
    def lifetime(self) -> timedelta:
        return timedelta(hours=self.expiration_hours)


@dataclass(frozen=True)
class LockoutSettings:
    max_failed_access_attempts: int
    duration_minutes: int

    @property
    def duration(self) -> timedelta:
        return timedelta(minutes=self.duration_minutes)


@lru_cache(maxsize=1)
def get_jwt_settings() -> JwtSettings:
    return JwtSettings(
        secret_key=settings.JWT_SECRET_KEY,
        expiration_hours=settings.JWT_EXPIRATION_HOURS,
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
    )


@lru_cache(maxsize=1)
def get_lockout_settings() -> LockoutSettings:
    return LockoutSettings(
        max_failed_access_attempts=settings.LOCKOUT_MAX_FAILED_ACCESS_ATTEMPTS,
        duration_minutes=settings.LOCKOUT_DURATION_MINUTES,
    )
