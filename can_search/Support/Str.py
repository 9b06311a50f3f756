from __future__ import annotations

import re
from typing import Dict, List, Union


class Str:
    """Laravel-style string helper class, limited to the inflections scopes need."""

    # Words whose singular form does not follow the suffix rules
    _irregular: Dict[str, str] = {
        'people': 'person',
        'men': 'man',
        'women': 'woman',
        'children': 'child',
        'mice': 'mouse',
        'geese': 'goose',
        'feet': 'foot',
        'teeth': 'tooth',
    }

    _uncountable = {'news', 'series', 'species', 'status', 'data', 'information', 'equipment'}

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """Convert a string to snake case."""
        # Insert delimiter before uppercase letters
        value = re.sub(r'([a-z0-9])([A-Z])', rf'\1{delimiter}\2', value)
        # Replace non-alphanumeric with delimiter
        value = re.sub(r'[^a-zA-Z0-9]', delimiter, value)
        value = value.lower()
        # Replace multiple delimiters with single delimiter
        value = re.sub(f'{re.escape(delimiter)}+', delimiter, value)
        return value.strip(delimiter)

    @staticmethod
    def singular(value: str) -> str:
        """Get the singular form of an English word.

        Only the last underscore-separated word is inflected, so
        ``blog_posts`` becomes ``blog_post``.
        """
        head, sep, word = value.rpartition('_')
        lowered = word.lower()

        if lowered in Str._uncountable:
            singular = word
        elif lowered in Str._irregular:
            singular = Str._irregular[lowered]
        elif lowered.endswith('ies') and len(word) > 3:
            singular = word[:-3] + 'y'
        elif lowered.endswith('ves'):
            if lowered.endswith('ives'):
                singular = word[:-4] + 'ife'
            else:
                singular = word[:-3] + 'f'
        elif lowered.endswith(('sses', 'xes', 'zes', 'shes', 'ches')):
            singular = word[:-2]
        elif lowered.endswith('s') and not lowered.endswith('ss') and len(word) > 1:
            singular = word[:-1]
        else:
            singular = word

        return f"{head}{sep}{singular}"

    @staticmethod
    def foreign_key(value: str, with_underscore: bool = True) -> str:
        """Get the foreign key column name for a singular model name (``forum`` -> ``forum_id``)."""
        return Str.snake(value) + ('_id' if with_underscore else 'id')

    @staticmethod
    def starts_with(haystack: str, needles: Union[str, List[str]]) -> bool:
        """Determine if a given string starts with a given substring."""
        if isinstance(needles, str):
            needles = [needles]

        return any(haystack.startswith(needle) for needle in needles)

    @staticmethod
    def replace_first(search: str, replace: str, subject: str) -> str:
        """Replace the first occurrence of a given value in the string."""
        return subject.replace(search, replace, 1)
