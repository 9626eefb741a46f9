from .data_context import DataContext, EntitySet, SaveChangesError

__all__ = ['DataContext', 'EntitySet', 'SaveChangesError']
