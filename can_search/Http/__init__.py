from __future__ import annotations

from .SearchRequest import SearchRequest
from .SearchDependency import (
    create_search_dependency,
    handle_search_exceptions,
    search_exception_detail
)

__all__ = [
    'SearchRequest',
    'create_search_dependency',
    'handle_search_exceptions',
    'search_exception_detail'
]
