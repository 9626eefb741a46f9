import logging
from typing import List, Optional, Tuple, Type
from django.db import DEFAULT_DB_ALIAS, DatabaseError, models, transaction
from apps.domain.models import Provider

logger = logging.getLogger('apps')

ADDED = 'added'
MODIFIED = 'modified'
DELETED = 'deleted'


class SaveChangesError(Exception):
    def __init__(self, message: str, original: Optional[Exception] = None):
        super().__init__(message)
        self.original = original


class EntitySet:
    """Coleção tipada de uma tabela; alterações ficam pendentes até o commit."""

    def __init__(self, context: 'DataContext', model: Type[models.Model]):
        self.context = context
        self.model = model

    @property
    def objects(self):
        return self.model._default_manager.using(self.context.using)

    def list(self) -> List[models.Model]:
        return list(self.objects.all())

    def get_by_id(self, pk) -> Optional[models.Model]:
        return self.objects.filter(pk=pk).first()

    def exists(self, pk) -> bool:
        return self.objects.filter(pk=pk).exists()

    def add(self, instance: models.Model) -> models.Model:
        self.context._track(ADDED, instance)
        return instance

    def update(self, instance: models.Model) -> models.Model:
        self.context._track(MODIFIED, instance)
        return instance

    def remove(self, instance: models.Model) -> models.Model:
        self.context._track(DELETED, instance)
        return instance


class DataContext:
    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using
        self._pending: List[Tuple[str, models.Model]] = []
        self.providers = EntitySet(self, Provider)

    @property
    def has_changes(self) -> bool:
        return bool(self._pending)

    def _track(self, state: str, instance: models.Model) -> None:
        self._pending.append((state, instance))

    def commit(self) -> int:
        """Aplica as alterações pendentes em uma única transação.

        Retorna o número de linhas afetadas. Erros de banco são relançados
        como SaveChangesError após o rollback.
        """
        pending, self._pending = self._pending, []
        affected = 0

        try:
            with transaction.atomic(using=self.using):
                for state, instance in pending:
                    affected += self._apply(state, instance)
        except DatabaseError as e:
            logger.error(f'Error saving changes: {str(e)}')
            raise SaveChangesError('There is a error on record save', e) from e

        return affected

    def _apply(self, state: str, instance: models.Model) -> int:
        manager = instance.__class__._default_manager.using(self.using)

        if state == ADDED:
            instance.save(using=self.using, force_insert=True)
            return 1

        if state == MODIFIED:
            values = {
                field.attname: getattr(instance, field.attname)
                for field in instance._meta.concrete_fields
                if not field.primary_key
            }
            return manager.filter(pk=instance.pk).update(**values)

        if state == DELETED:
            deleted, _ = manager.filter(pk=instance.pk).delete()
            return deleted

        raise ValueError(f'Unknown entity state: {state}')
