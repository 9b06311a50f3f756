from __future__ import annotations

from typing import Any, Tuple
from sqlalchemy import or_

from .BaseScope import BaseScope, FilterableModel, Finder, SearchParams
from .SearchScopes import SearchScopes

ESCAPE_CHAR = '\\'


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2)
        .replace('%', f'{ESCAPE_CHAR}%')
        .replace('_', f'{ESCAPE_CHAR}_')
    )


class LikeQueryScope(BaseScope):
    """
    Case-insensitive substring search over one or more attributes.

        Topic.can_search(lambda s: s.scoped_by('q', scope='like', attribute=['title', 'body']))

        Topic.search({'q': 'rails'})     # title ILIKE '%rails%' OR body ILIKE '%rails%'
    """

    def __init__(self, model: FilterableModel, name: str, **options: Any) -> None:
        super().__init__(model, name, **options)
        attribute = options.get('attribute') or name
        self.attributes: Tuple[str, ...] = (attribute,) if isinstance(attribute, str) else tuple(attribute)
        self.attribute = self.attributes[0]
        self.named_filter = options.get('named_filter') or f"{name}_like"

        self.define_filter(self.named_filter, self._like)

    def _like(self, finder: Finder, term: Any) -> Finder:
        pattern = f"%{escape_like(str(term))}%"
        conditions = [
            getattr(self.model, attribute).ilike(pattern, escape=ESCAPE_CHAR)
            for attribute in self.attributes
        ]
        return finder.where(or_(*conditions))

    def scope_for(self, finder: Finder, params: SearchParams) -> Finder:
        term = params.pop(self.name, None)
        if term is None or not str(term).strip():
            return finder
        return self.apply_filter(finder, str(term).strip())

    def consumed_keys(self) -> Tuple[str, ...]:
        return (self.name,)

    def _identity(self) -> Tuple[Any, ...]:
        return super()._identity() + (self.attributes,)


SearchScopes.register_scope_type('like', LikeQueryScope)
