from __future__ import annotations

from .Searchable import Searchable, define_scopes, search, scope_registry

__all__ = ['Searchable', 'define_scopes', 'search', 'scope_registry']
