"""Tests for BooleanScope."""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import select

from can_search.Scopes import BooleanScope, SearchScopes
from can_search.Scopes.BooleanScope import to_bool
from conftest import FilterSpy, sql


class TestBooleanScope:
    """Positive and negated boolean filters."""

    @pytest.fixture
    def registry(self, Topic: Any) -> SearchScopes:
        return SearchScopes(Topic, lambda s: (s.scoped_by('live'), s.scoped_by('has_replies')))

    def test_derived_names(self, registry: SearchScopes) -> None:
        live = registry['live']
        assert (live.attribute, live.named_filter, live.negative) == ('live', 'live', 'not_live')

        replies = registry['has_replies']
        assert replies.negative == 'doesnt_have_replies'

    def test_both_filters_are_registered(self, registry: SearchScopes, Topic: Any) -> None:
        for identifier in ('live', 'not_live', 'has_replies', 'doesnt_have_replies'):
            assert Topic.has_named_filter(identifier)

    def test_negative_option_overrides_convention(self, Topic: Any) -> None:
        scope = BooleanScope(Topic, 'live', negative='offline')
        assert scope.negative == 'offline'
        assert Topic.has_named_filter('offline')

    def test_true_and_false_use_the_same_filter(self, registry: SearchScopes, Topic: Any, ids: Any) -> None:
        spy = FilterSpy(Topic, 'live')

        live = registry.search_for({'live': True})
        not_live = registry.search_for({'live': False})

        assert spy.calls == [True, False]
        assert ids(live) == [1, 3]
        assert ids(not_live) == [2, 4]

    def test_negative_key_is_not_consumed(self, registry: SearchScopes, Topic: Any) -> None:
        assert sql(registry.search_for({'not_live': True})) == sql(select(Topic))

    def test_negative_filter_inverts_the_flag(self, registry: SearchScopes, Topic: Any, ids: Any) -> None:
        assert ids(Topic.filter_by_name(select(Topic), 'not_live', None)) == [2, 4]
        assert ids(Topic.filter_by_name(select(Topic), 'not_live', False)) == [1, 3]
        assert ids(Topic.filter_by_name(select(Topic), 'doesnt_have_replies', None)) == [2, 3]

    def test_positive_filter_defaults_to_true(self, registry: SearchScopes, Topic: Any, ids: Any) -> None:
        assert ids(Topic.filter_by_name(select(Topic), 'live', None)) == [1, 3]

    def test_negative_key_reachable_through_existing_scope(self, registry: SearchScopes, ids: Any) -> None:
        registry.add_existing_scope('not_live')
        assert ids(registry.search_for({'not_live': True})) == [2, 4]

    def test_string_flags_are_coerced(self, registry: SearchScopes, ids: Any) -> None:
        assert ids(registry.search_for({'live': 'false'})) == [2, 4]
        assert ids(registry.search_for({'live': '1'})) == [1, 3]

    @pytest.mark.parametrize('value, expected', [
        (None, True), (True, True), (False, False), (0, False), (1, True),
        ('true', True), ('yes', True), ('0', False), ('Off', False), ('', False),
    ])
    def test_to_bool(self, value: Any, expected: bool) -> None:
        assert to_bool(value) is expected

    def test_equality_includes_negative(self, Topic: Any) -> None:
        assert BooleanScope(Topic, 'live') == BooleanScope(Topic, 'live')
        assert BooleanScope(Topic, 'live') != BooleanScope(Topic, 'live', negative='offline')

    def test_redeclaring_rebinds_both_filters(self, registry: SearchScopes, Topic: Any, ids: Any) -> None:
        registry.scoped_by('live', attribute='featured')

        assert 'topics.featured' in sql(registry.search_for({'live': True}))
        assert ids(registry.search_for({'live': True})) == [2, 3]
        assert ids(Topic.filter_by_name(select(Topic), 'not_live', None)) == [1, 4]
