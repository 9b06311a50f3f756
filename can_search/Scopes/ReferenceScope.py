from __future__ import annotations

from typing import Any, List, Tuple
from sqlalchemy import inspect

from can_search.Support.Str import Str

from .BaseScope import BaseScope, FilterableModel, Finder, SearchParams
from .SearchScopes import SearchScopes


def record_key(record: Any) -> Any:
    """Reduce a mapped instance to its primary key; plain values pass through."""
    state = inspect(record, raiseerr=False)
    identity = getattr(state, 'identity', None)
    if identity:
        return identity[0] if len(identity) == 1 else identity
    return record


def as_list(values: Any) -> List[Any]:
    if values is None:
        return []
    if isinstance(values, (list, tuple, set, frozenset)):
        return list(values)
    return [values]


class ReferenceScope(BaseScope):
    """
    Filters on a belongs-to reference. Both a singular and a plural key are read.

        class Topic(Searchable, Base):
            forum_id = mapped_column(ForeignKey('forums.id'))

        Topic.can_search(lambda s: s.scoped_by('forums'))

        Topic.search({'forum': 1})             # Topic.by_forums(1)
        Topic.search({'forums': [1, 2]})       # Topic.by_forums([1, 2])

    The singular name comes from singularizing the scope name (forums -> forum),
    the attribute from the foreign key of the singular (forum -> forum_id) and
    the named filter prefixes the name with ``by_`` (forums -> by_forums).
    """

    def __init__(self, model: FilterableModel, name: str, **options: Any) -> None:
        super().__init__(model, name, **options)
        single = Str.singular(str(name))
        self.singular_name: str = options.get('singular') or single
        self.attribute = options.get('attribute') or Str.foreign_key(single)
        self.named_filter = options.get('named_filter') or f"by_{name}"

        self.define_filter(self.named_filter, self._by_reference)

    def _by_reference(self, finder: Finder, records: Any) -> Finder:
        column = getattr(self.model, self.attribute)
        if isinstance(records, (list, tuple, set, frozenset)):
            return finder.where(column.in_([record_key(record) for record in records]))
        return finder.where(column == record_key(records))

    def scope_for(self, finder: Finder, params: SearchParams) -> Finder:
        value = params.pop(self.singular_name, None)
        values = as_list(params.pop(self.name, None))
        if value != '':
            values.extend(as_list(value))
        if not values:
            return finder
        return self.apply_filter(finder, values[0] if len(values) == 1 else values)

    def consumed_keys(self) -> Tuple[str, ...]:
        return (self.singular_name, self.name)

    def list_keys(self) -> Tuple[str, ...]:
        return (self.name,)

    def _identity(self) -> Tuple[Any, ...]:
        return super()._identity() + (self.singular_name,)


SearchScopes.register_scope_type('reference', ReferenceScope)
