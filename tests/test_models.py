import uuid
import pytest
from datetime import timedelta
from django.utils import timezone
from apps.domain.models import Provider, UserClaim, UserLockout


@pytest.mark.django_db
class TestProvider:
    def test_create_provider_generates_id(self):
        provider = Provider.objects.create(
            name='Acme',
            document='12345678901234',
            active=True
        )
        assert isinstance(provider.id, uuid.UUID)
        assert provider.name == 'Acme'
        assert provider.document == '12345678901234'
        assert provider.active is True

    def test_active_defaults_to_false(self):
        provider = Provider.objects.create(name='Acme', document='123')
        assert provider.active is False

    def test_ids_are_unique(self):
        first = Provider.objects.create(name='A', document='1')
        second = Provider.objects.create(name='B', document='2')
        assert first.id != second.id

    def test_table_name(self):
        assert Provider._meta.db_table == 'Provider'


@pytest.mark.django_db
class TestUserClaim:
    def test_create_claim(self, user):
        claim = UserClaim.objects.create(user=user, claim_type='DeleteProvider', claim_value='true')
        assert str(claim) == 'DeleteProvider=true'
        assert list(user.claims.all()) == [claim]


@pytest.mark.django_db
class TestUserLockout:
    def test_not_locked_without_lockout_end(self, user):
        lockout = UserLockout.objects.create(user=user)
        assert lockout.is_locked_out() is False

    def test_locked_while_lockout_end_in_future(self, user):
        lockout = UserLockout.objects.create(user=user, lockout_end=timezone.now() + timedelta(minutes=5))
        assert lockout.is_locked_out() is True

    def test_not_locked_after_lockout_end(self, user):
        lockout = UserLockout.objects.create(user=user, lockout_end=timezone.now() - timedelta(seconds=1))
        assert lockout.is_locked_out() is False
