"""Declarative search scopes for SQLAlchemy models."""

from __future__ import annotations

from .Scopes import (
    BaseScope,
    ReferenceScope,
    BooleanScope,
    DateRangeScope,
    LikeQueryScope,
    SearchScopes,
    SearchScopeException,
    UnknownScopeKindException,
    UnknownNamedFilterException,
    InvalidScopeValueException
)
from .Models import Searchable, define_scopes, search, scope_registry

__version__ = "0.1.0"

__all__ = [
    'BaseScope',
    'ReferenceScope',
    'BooleanScope',
    'DateRangeScope',
    'LikeQueryScope',
    'SearchScopes',
    'SearchScopeException',
    'UnknownScopeKindException',
    'UnknownNamedFilterException',
    'InvalidScopeValueException',
    'Searchable',
    'define_scopes',
    'search',
    'scope_registry'
]
