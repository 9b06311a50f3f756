from __future__ import annotations

from typing import Any, Tuple

from can_search.Support.Str import Str

from .BaseScope import BaseScope, FilterableModel, Finder
from .SearchScopes import SearchScopes

FALSE_STRINGS = frozenset({'0', 'false', 'f', 'no', 'n', 'off', ''})


def to_bool(value: Any, default: bool = True) -> bool:
    """Coerce a search parameter to a boolean; None means ``default``."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


class BooleanScope(BaseScope):
    """
    Generates named filters for boolean fields.

        Topic.can_search(lambda s: s.scoped_by('live'))

        Topic.search({'live': True})          # Topic.live(True)
        Topic.search({'live': False})         # Topic.live(False)

    A negated filter is registered next to the positive one (``not_live``, or
    ``doesnt_have_replies`` for ``has_replies``). Searches only read the
    positive key; the negated filter is there to be called directly or wrapped
    with ``add_existing_scope``.
    """

    def __init__(self, model: FilterableModel, name: str, **options: Any) -> None:
        super().__init__(model, name, **options)
        self.attribute = options.get('attribute') or name
        self.named_filter = options.get('named_filter') or name
        self.negative: str = options.get('negative') or self.negative_name(self.named_filter)

        self.define_filter(self.named_filter, self._positive)
        self.define_filter(self.negative, self._negative)

    @staticmethod
    def negative_name(named_filter: str) -> str:
        if Str.starts_with(named_filter, 'has_'):
            return Str.replace_first('has_', 'doesnt_have_', named_filter)
        return f"not_{named_filter}"

    def _positive(self, finder: Finder, flag: Any = None) -> Finder:
        return finder.where(getattr(self.model, self.attribute) == to_bool(flag))

    def _negative(self, finder: Finder, flag: Any = None) -> Finder:
        return finder.where(getattr(self.model, self.attribute) == (not to_bool(flag)))

    def _identity(self) -> Tuple[Any, ...]:
        return super()._identity() + (self.negative,)


SearchScopes.register_scope_type('boolean', BooleanScope)
