from __future__ import annotations

from collections import OrderedDict
from typing import Any, Callable, ClassVar, Dict, Iterator, List, Mapping, Optional, Type
from sqlalchemy import select

from can_search.config.settings import settings
from can_search.Utils.Logger import get_logger

from .BaseScope import BaseScope, Finder
from .Exceptions import UnknownNamedFilterException, UnknownScopeKindException
from .Schema import BOOLEAN, SchemaInspector, SQLAlchemySchema

ScopeFactory = Callable[..., BaseScope]


class SearchScopes:
    """
    Tracks the search scopes for a given model.

    Scopes are declared once, usually right after the model class, and are
    folded in declaration order over the parameters of every search:

        registry = SearchScopes(Topic)
        registry.scoped_by('forums')                 # reference scope, Topic.forum_id
        registry.scoped_by('live')                   # boolean scope, inferred from the column type
        registry.add_existing_scope('featured')      # wraps Topic's existing 'featured' filter

        registry.search_for({'forum': 1, 'live': True})

    Scope kinds are looked up in the process-wide ``scope_types`` registry.
    Each kind registers itself there when its module is imported.
    """

    # Registered scope kinds, keyed by their tag
    scope_types: ClassVar[Dict[str, ScopeFactory]] = {}

    @classmethod
    def register_scope_type(cls, kind: str, factory: ScopeFactory) -> None:
        """
        Register a scope kind under a tag usable as the ``scope`` option.

        @param kind: Tag such as 'reference' or 'boolean'
        @param factory: Callable taking (model, name, **options) and returning a scope
        """
        cls.scope_types[kind] = factory

    def __init__(
        self,
        model: Type[Any],
        setup: Optional[Callable[[SearchScopes], Any]] = None,
        schema: Optional[SchemaInspector] = None
    ) -> None:
        """
        @param model: The model class this registry builds searches for
        @param setup: Optional callable receiving the registry to declare scopes
        @param schema: Field type lookup used to infer scope kinds
        """
        self.model = model
        self.scopes: OrderedDict[str, BaseScope] = OrderedDict()
        self.schema: SchemaInspector = schema if schema is not None else SQLAlchemySchema(model)
        self.logger = get_logger(f"{__name__}.{getattr(model, '__name__', 'Unknown')}")

        if setup is not None:
            setup(self)

    def infer_kind(self, name: str) -> str:
        """Boolean columns get a boolean scope, everything else is treated as a reference."""
        return 'boolean' if self.schema.field_type(name) == BOOLEAN else 'reference'

    def scoped_by(self, name: str, **options: Any) -> Optional[BaseScope]:
        """
        Add a new scope for the model.

        The scope class is looked up in ``scope_types`` by the ``scope`` option,
        inferred from the schema when not given. An unknown kind adds nothing
        and logs a warning, or raises when strict mode is configured.

        @param name: The search parameter key for the scope
        @param options: scope, named_filter, attribute and kind-specific options
        @return: The new scope, or None when the kind is unknown
        """
        kind = options.get('scope') or self.infer_kind(name)
        options['scope'] = kind

        factory = self.scope_types.get(kind)
        if factory is None:
            known_kinds = sorted(self.scope_types)
            if settings.CAN_SEARCH_STRICT:
                raise UnknownScopeKindException(kind, known_kinds)
            self.logger.warning(
                f"Ignoring scope '{name}' with unknown kind",
                {'kind': kind, 'known': known_kinds}
            )
            return None

        try:
            scope = factory(self.model, name, **options)
        except Exception as e:
            self.logger.error(f"Failed to add scope '{name}': {e}")
            raise

        self.scopes[name] = scope
        self.logger.debug(f"Added {kind} scope '{name}'", {'named_filter': scope.named_filter})
        return scope

    def add_existing_scope(self, name: str) -> BaseScope:
        """
        Wrap a named filter the model already defines under the same name.

        No filter is declared on the model.
        """
        if not self.model.has_named_filter(name):
            if settings.CAN_SEARCH_STRICT:
                raise UnknownNamedFilterException(self.model, name)
            self.logger.warning(f"Existing scope '{name}' does not resolve to a named filter yet")

        scope = BaseScope(self.model, name, named_filter=name)
        self.scopes[name] = scope
        self.logger.debug(f"Added existing scope '{name}'")
        return scope

    def add_existing_scopes(self, *names: str) -> List[BaseScope]:
        return [self.add_existing_scope(name) for name in names]

    def search_for(self, params: Optional[Mapping[str, Any]] = None, query: Optional[Finder] = None) -> Finder:
        """
        Build a combined query, starting with the model itself.

        Every scope, in declaration order, strips its keys out of a private copy
        of ``params`` and chains its filter. Keys no scope claims are ignored.

        @param params: Search parameters; never modified
        @param query: Query to start from instead of ``select(model)``
        @return: The filtered query
        """
        remaining: Dict[str, Any] = dict(params or {})
        finder = query if query is not None else select(self.model)
        applied: List[str] = []

        for name, scope in self.scopes.items():
            before = len(remaining)
            finder = scope.scope_for(finder, remaining)
            if len(remaining) != before:
                applied.append(name)

        self.logger.debug(
            f"Built search for {getattr(self.model, '__name__', 'Unknown')}",
            {'applied': applied, 'ignored': sorted(remaining)}
        )
        return finder

    def get(self, name: str) -> Optional[BaseScope]:
        return self.scopes.get(name)

    def __getitem__(self, name: str) -> Optional[BaseScope]:
        return self.scopes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.scopes

    def __iter__(self) -> Iterator[str]:
        return iter(self.scopes)

    def __len__(self) -> int:
        return len(self.scopes)

    def __repr__(self) -> str:
        return (f"<SearchScopes(model={getattr(self.model, '__name__', 'Unknown')}, "
                f"scopes={list(self.scopes)})>")
