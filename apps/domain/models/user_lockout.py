from django.conf import settings
from django.db import models
from django.utils import timezone


class UserLockout(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='lockout')
    access_failed_count = models.PositiveIntegerField(default=0)
    lockout_end = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = 'UserLockouts'

    def __str__(self):
        return f"{self.user} ({self.access_failed_count} failures)"

    def is_locked_out(self, now=None) -> bool:
        now = now or timezone.now()
        return self.lockout_end is not None and self.lockout_end > now
