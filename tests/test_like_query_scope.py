"""Tests for LikeQueryScope."""

from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy import select

from can_search.Scopes import LikeQueryScope, SearchScopes
from can_search.Scopes.LikeQueryScope import escape_like


class TestLikeQueryScope:
    """Substring search across attributes."""

    @pytest.fixture
    def registry(self, Topic: Any) -> SearchScopes:
        return SearchScopes(Topic, lambda s: s.scoped_by('q', scope='like', attribute=['title', 'body']))

    def test_derived_names(self, registry: SearchScopes, Topic: Any) -> None:
        scope = registry['q']
        assert isinstance(scope, LikeQueryScope)
        assert scope.attributes == ('title', 'body')
        assert scope.named_filter == 'q_like'
        assert Topic.has_named_filter('q_like')

    def test_matches_any_attribute_case_insensitively(self, registry: SearchScopes, ids: Any) -> None:
        assert ids(registry.search_for({'q': 'rails'})) == [1, 3, 4]

    def test_single_attribute(self, Topic: Any, ids: Any) -> None:
        registry = SearchScopes(Topic, lambda s: s.scoped_by('title', scope='like'))
        assert registry['title'].attributes == ('title',)
        assert ids(registry.search_for({'title': 'RAILS'})) == [1, 4]

    def test_wildcards_match_literally(self, registry: SearchScopes, ids: Any) -> None:
        assert ids(registry.search_for({'q': '100%'})) == [2]
        assert ids(registry.search_for({'q': '_'})) == [3]

    def test_blank_terms_pass_through_but_are_consumed(self, registry: SearchScopes, Topic: Any) -> None:
        params = {'q': '   '}
        finder = select(Topic)

        assert registry['q'].scope_for(finder, params) is finder
        assert params == {}

    def test_escape_like(self) -> None:
        assert escape_like('50%_off\\') == '50\\%\\_off\\\\'

    def test_equality_includes_attributes(self, Topic: Any) -> None:
        assert LikeQueryScope(Topic, 'q', attribute='title') == LikeQueryScope(Topic, 'q', attribute=['title'])
        assert LikeQueryScope(Topic, 'q', attribute='title') != LikeQueryScope(Topic, 'q', attribute=['title', 'body'])
