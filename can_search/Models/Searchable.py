from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Mapping, Optional, Set
from sqlalchemy import select

from can_search.Scopes.BaseScope import Finder, NamedFilter
from can_search.Scopes.Exceptions import UnknownNamedFilterException
from can_search.Scopes.Schema import SchemaInspector
from can_search.Scopes.SearchScopes import SearchScopes


class Searchable:
    """
    Mixin giving a declarative model named filters and search scopes.

    Named filters are query transforms attached to the model class under an
    identifier. A Laravel-style ``scope_<identifier>(cls, query, value)``
    classmethod counts as a named filter too.

        class Topic(Searchable, Base):
            __tablename__ = 'topics'
            ...

            @classmethod
            def scope_featured(cls, query, value):
                return query.where(cls.featured_at.is_not(None))

        Topic.can_search(lambda s: (
            s.scoped_by('forums'),
            s.scoped_by('live'),
            s.add_existing_scope('featured'),
        ))

        Topic.search({'forum': 1, 'live': 'true'})
    """

    # Filters declared on this exact class; subclasses see their parents' filters too
    __named_filters__: ClassVar[Dict[str, NamedFilter]] = {}
    # Identifiers whose current filter was generated by a search scope
    __scope_filters__: ClassVar[Set[str]] = set()
    __search_scopes__: ClassVar[Optional[SearchScopes]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__named_filters__ = {}
        cls.__scope_filters__ = set()
        cls.__search_scopes__ = None

    @classmethod
    def named_filter(cls, identifier: str, builder: NamedFilter, replace: bool = False) -> bool:
        """
        Attach a named filter to the model.

        @param identifier: Name the filter is invoked by
        @param builder: Callable taking (query, value) and returning a query
        @param replace: Overwrite a filter the model already resolves
        @return: True if the filter was attached
        """
        if not replace and cls.has_named_filter(identifier):
            return False
        cls.__named_filters__[identifier] = builder
        cls.__scope_filters__.discard(identifier)
        return True

    @classmethod
    def scope_filter(cls, identifier: str, builder: NamedFilter) -> bool:
        """
        Attach a named filter generated by a search scope.

        A filter generated by an earlier scope is replaced, so re-declaring a
        scope rebinds its filter. Hand-written filters and ``scope_<identifier>``
        methods are left in place.

        @return: True if the filter was attached
        """
        attached = cls.named_filter(identifier, builder, replace=identifier in cls.__scope_filters__)
        if attached:
            cls.__scope_filters__.add(identifier)
        return attached

    @classmethod
    def has_named_filter(cls, identifier: str) -> bool:
        return cls._resolve_named_filter(identifier) is not None

    @classmethod
    def filter_by_name(cls, query: Finder, identifier: str, value: Any) -> Finder:
        """Chain the named filter ``identifier`` onto ``query``."""
        builder = cls._resolve_named_filter(identifier)
        if builder is None:
            raise UnknownNamedFilterException(cls, identifier)
        return builder(query, value)

    @classmethod
    def _resolve_named_filter(cls, identifier: str) -> Optional[NamedFilter]:
        for klass in cls.__mro__:
            builder = vars(klass).get('__named_filters__', {}).get(identifier)
            if builder is not None:
                return builder

        scope_method = getattr(cls, f"scope_{identifier}", None)
        if callable(scope_method):
            return scope_method
        return None

    @classmethod
    def can_search(
        cls,
        setup: Optional[Callable[[SearchScopes], Any]] = None,
        schema: Optional[SchemaInspector] = None
    ) -> SearchScopes:
        """
        Declare search scopes for the model.

        Calling it again adds to the same registry.

        @param setup: Callable receiving the registry
        @param schema: Field type lookup, the SQLAlchemy mapper by default
        @return: The model's registry
        """
        registry = cls.__search_scopes__
        if registry is None:
            registry = SearchScopes(cls, schema=schema)
            cls.__search_scopes__ = registry
        if setup is not None:
            setup(registry)
        return registry

    @classmethod
    def search_scopes(cls) -> Optional[SearchScopes]:
        return cls.__search_scopes__

    @classmethod
    def search(cls, params: Optional[Mapping[str, Any]] = None, query: Optional[Finder] = None) -> Finder:
        """Build a filtered query from search parameters."""
        registry = cls.__search_scopes__
        if registry is None:
            return query if query is not None else select(cls)
        return registry.search_for(params, query)


def define_scopes(model: Any, setup: Optional[Callable[[SearchScopes], Any]] = None) -> SearchScopes:
    return model.can_search(setup)


def search(model: Any, params: Optional[Mapping[str, Any]] = None) -> Finder:
    return model.search(params)


def scope_registry(model: Any) -> Optional[SearchScopes]:
    return model.search_scopes()
