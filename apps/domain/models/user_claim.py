from django.conf import settings
from django.db import models


class UserClaim(models.Model):
    """Claim de autorização associada a um usuário (ex.: DeleteProvider)."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='claims')
    claim_type = models.CharField(max_length=256)
    claim_value = models.CharField(max_length=256, blank=True, default='')

    class Meta:
        db_table = 'UserClaims'
        ordering = ['claim_type']

    def __str__(self):
        return f"{self.claim_type}={self.claim_value}"
