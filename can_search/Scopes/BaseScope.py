from __future__ import annotations

from typing import Any, Callable, MutableMapping, Optional, Protocol, Tuple, runtime_checkable
from sqlalchemy.sql import Select

# The composable query every scope receives and returns
Finder = Select[Any]
SearchParams = MutableMapping[str, Any]
NamedFilter = Callable[[Finder, Any], Finder]


@runtime_checkable
class FilterableModel(Protocol):
    """
    The model side of a scope.

    Scopes attach named filters to the model when they are built and invoke
    them by identifier when a search runs. ``Searchable`` implements this.
    """

    def named_filter(self, identifier: str, builder: NamedFilter, replace: bool = False) -> bool:
        ...

    def scope_filter(self, identifier: str, builder: NamedFilter) -> bool:
        ...

    def has_named_filter(self, identifier: str) -> bool:
        ...

    def filter_by_name(self, query: Finder, identifier: str, value: Any) -> Finder:
        ...


class BaseScope:
    """
    Base class for all search scopes.

    A scope knows which search parameters belong to it, how to strip them out
    of the parameters of a search, and which named filter on the model turns
    them into a query condition.

    The base class wraps a named filter that already exists on the model:

        registry.add_existing_scope('featured')
        Post.search({'featured': True})     # Post.filter_by_name(query, 'featured', True)

    Subclasses register their own named filter while being constructed and may
    override ``scope_for`` to read differently shaped parameters. Every
    subclass keeps the same contract: consume the keys it owns from ``params``
    and return the (possibly unchanged) query.
    """

    def __init__(self, model: FilterableModel, name: str, **options: Any) -> None:
        """
        @param model: The model class the scope filters
        @param name: The key this scope looks for in search parameters
        @param options: Scope options (named_filter, attribute, ...)
        """
        self.model = model
        self.name = name
        self.attribute: Optional[str] = options.get('attribute')
        self.named_filter: Optional[str] = options.get('named_filter')

    def scope_for(self, finder: Finder, params: SearchParams) -> Finder:
        """
        Strip this scope's key out of ``params`` and chain its filter onto ``finder``.

        @param finder: The query built so far
        @param params: The remaining search parameters, consumed in place
        @return: The filtered query, or ``finder`` itself when the key is absent
        """
        if self.named_filter is None or self.named_filter not in params:
            return finder
        value = params.pop(self.named_filter)
        return self.apply_filter(finder, value)

    def apply_filter(self, finder: Finder, value: Any) -> Finder:
        """Invoke this scope's named filter on the model."""
        return self.model.filter_by_name(finder, self.named_filter, value)

    def define_filter(self, identifier: str, builder: NamedFilter) -> None:
        """Attach a filter this scope generates, rebinding one an earlier scope generated."""
        self.model.scope_filter(identifier, builder)

    def consumed_keys(self) -> Tuple[str, ...]:
        """The search parameter keys this scope reads."""
        return (self.named_filter,) if self.named_filter else ()

    def list_keys(self) -> Tuple[str, ...]:
        """The consumed keys that accept several values."""
        return ()

    def _identity(self) -> Tuple[Any, ...]:
        return (self.name, self.attribute, self.named_filter)

    def __eq__(self, other: object) -> bool:
        if other.__class__ is not self.__class__:
            return NotImplemented
        return self._identity() == other._identity()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((self.__class__, self._identity()))

    def __repr__(self) -> str:
        return (f"<{self.__class__.__name__}(name='{self.name}', attribute={self.attribute!r}, "
                f"named_filter={self.named_filter!r})>")
