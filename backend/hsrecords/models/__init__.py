from .users import User, UserRole, RouteAccess
from .lookups import LookupItem
from .records import Incident, Capa

__all__ = [
    'User', 'UserRole', 'RouteAccess',
    'LookupItem',
    'Incident', 'Capa',
]
