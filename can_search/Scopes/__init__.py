"""
Search scopes module.

Declares named, parameter-driven filters on a model and folds the
parameters of a search through them into one query.

Classes:
- BaseScope: Wraps a named filter the model already has
- ReferenceScope: belongs-to references, singular and plural keys ('reference')
- BooleanScope: boolean fields with a negated filter ('boolean')
- DateRangeScope: date and datetime ranges ('date_range')
- LikeQueryScope: case-insensitive substring search ('like')
- SearchScopes: Per-model registry and the scope kind registry

Usage:
    from can_search.Scopes import SearchScopes

    registry = SearchScopes(Topic)
    registry.scoped_by('forums')
    registry.scoped_by('live')
    registry.add_existing_scope('featured')

    query = registry.search_for({'forums': [1, 2], 'live': True})
"""

from __future__ import annotations

# Contract and registry
from .BaseScope import BaseScope, FilterableModel, Finder, NamedFilter, SearchParams
from .SearchScopes import SearchScopes, ScopeFactory
from .Schema import SchemaInspector, SQLAlchemySchema, StaticSchema

# Scope kinds, each registers itself with SearchScopes on import
from .ReferenceScope import ReferenceScope
from .BooleanScope import BooleanScope
from .DateRangeScope import DateRangeScope
from .LikeQueryScope import LikeQueryScope

from .Exceptions import (
    SearchScopeException,
    UnknownScopeKindException,
    UnknownNamedFilterException,
    InvalidScopeValueException
)

__all__ = [
    # Contract and registry
    'BaseScope',
    'FilterableModel',
    'Finder',
    'NamedFilter',
    'SearchParams',
    'SearchScopes',
    'ScopeFactory',
    'SchemaInspector',
    'SQLAlchemySchema',
    'StaticSchema',

    # Scope kinds
    'ReferenceScope',
    'BooleanScope',
    'DateRangeScope',
    'LikeQueryScope',

    # Exceptions
    'SearchScopeException',
    'UnknownScopeKindException',
    'UnknownNamedFilterException',
    'InvalidScopeValueException'
]
