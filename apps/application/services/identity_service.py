import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone
from apps.domain.models import UserClaim, UserLockout
from apps.infrastructure.identity.config import LockoutSettings, get_lockout_settings

logger = logging.getLogger('apps')


class SignInResult(Enum):
    SUCCEEDED = 'succeeded'
    FAILED = 'failed'
    LOCKED_OUT = 'locked_out'


class IdentityError(Exception):
    def __init__(self, errors: List[Dict[str, str]]):
        super().__init__('; '.join(error['description'] for error in errors))
        self.errors = errors


class IdentityService:
    def __init__(self, lockout_settings: Optional[LockoutSettings] = None):
        self.lockout_settings = lockout_settings or get_lockout_settings()

    def find_by_email(self, email: str):
        User = get_user_model()
        return User.objects.filter(username__iexact=email).first()

    def register_user(self, email: str, password: str):
        User = get_user_model()

        if User.objects.filter(username__iexact=email).exists():
            raise IdentityError([{
                'code': 'DuplicateUserName',
                'description': f"Username '{email}' is already taken.",
            }])

        user = User(username=email, email=email)

        try:
            validate_password(password, user)
        except ValidationError as e:
            raise IdentityError([
                {'code': error.code or 'PasswordValidation', 'description': message}
                for error, message in zip(e.error_list, e.messages)
            ])

        user.set_password(password)
        try:
            with transaction.atomic():
                user.save()
        except IntegrityError:
            # Registro concorrente com o mesmo e-mail
            raise IdentityError([{
                'code': 'DuplicateUserName',
                'description': f"Username '{email}' is already taken.",
            }])
        logger.info(f'User {user.pk} registered')
        return user

    def password_sign_in(self, email: str, password: str, lockout_on_failure: bool = True) -> SignInResult:
        """Verifica a senha aplicando a política de lockout.

        Um usuário bloqueado recebe LOCKED_OUT sem checagem de senha. A falha
        que atinge o limite bloqueia a conta e já retorna LOCKED_OUT.
        """
        user = self.find_by_email(email)
        if user is None or not user.is_active:
            logger.warning(f'Sign-in failed for unknown or inactive user {email}')
            return SignInResult.FAILED

        with transaction.atomic():
            lockout, _ = UserLockout.objects.select_for_update().get_or_create(user=user)
            now = timezone.now()

            if lockout.is_locked_out(now):
                logger.warning(f'Sign-in rejected for locked out user {user.pk}')
                return SignInResult.LOCKED_OUT

            if user.check_password(password):
                if lockout.access_failed_count:
                    lockout.access_failed_count = 0
                    lockout.save(update_fields=['access_failed_count'])
                return SignInResult.SUCCEEDED

            if not lockout_on_failure:
                return SignInResult.FAILED

            lockout.access_failed_count += 1
            if lockout.access_failed_count >= self.lockout_settings.max_failed_access_attempts:
                lockout.lockout_end = now + self.lockout_settings.duration
                lockout.access_failed_count = 0
                lockout.save(update_fields=['access_failed_count', 'lockout_end'])
                logger.warning(f'User {user.pk} locked out until {lockout.lockout_end.isoformat()}')
                return SignInResult.LOCKED_OUT

            lockout.save(update_fields=['access_failed_count'])
            logger.warning(f'Sign-in failed for user {user.pk} ({lockout.access_failed_count} consecutive failures)')
            return SignInResult.FAILED

    def get_claims(self, user) -> List[Tuple[str, str]]:
        return list(
            UserClaim.objects.filter(user=user).values_list('claim_type', 'claim_value')
        )

    def get_roles(self, user) -> List[str]:
        return list(user.groups.values_list('name', flat=True))
