"""Tests for the Str inflection helpers."""

from __future__ import annotations

import pytest

from can_search.Support.Str import Str


class TestStr:

    @pytest.mark.parametrize('plural, singular', [
        ('forums', 'forum'),
        ('categories', 'category'),
        ('boxes', 'box'),
        ('addresses', 'address'),
        ('branches', 'branch'),
        ('leaves', 'leaf'),
        ('wives', 'wife'),
        ('people', 'person'),
        ('status', 'status'),
        ('blog_posts', 'blog_post'),
        ('forum', 'forum'),
        ('class', 'class'),
    ])
    def test_singular(self, plural: str, singular: str) -> None:
        assert Str.singular(plural) == singular

    def test_foreign_key(self) -> None:
        assert Str.foreign_key('forum') == 'forum_id'
        assert Str.foreign_key('BlogPost') == 'blog_post_id'
        assert Str.foreign_key('forum', with_underscore=False) == 'forumid'

    def test_snake(self) -> None:
        assert Str.snake('BlogPost') == 'blog_post'
        assert Str.snake('blog-post title') == 'blog_post_title'

    def test_starts_with_and_replace_first(self) -> None:
        assert Str.starts_with('has_replies', 'has_')
        assert not Str.starts_with('hash_tags', ['has_', 'is_'])
        assert Str.replace_first('has_', 'doesnt_have_', 'has_has_') == 'doesnt_have_has_'
