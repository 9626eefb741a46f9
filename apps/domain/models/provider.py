import uuid
from django.db import models


class Provider(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, db_column='Id')
    name = models.CharField(max_length=200, db_column='Name')
    document = models.CharField(max_length=14, db_column='Document')
    active = models.BooleanField(default=False, db_column='Active')

    class Meta:
        db_table = 'Provider'

    def __str__(self):
        return f"{self.name} ({self.document})"
