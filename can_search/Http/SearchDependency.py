from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Type
from starlette.requests import Request
from fastapi import HTTPException, status

from can_search.Scopes.BaseScope import Finder
from can_search.Scopes.Exceptions import (
    SearchScopeException,
    UnknownScopeKindException,
    UnknownNamedFilterException,
    InvalidScopeValueException
)
from can_search.Scopes.SearchScopes import SearchScopes

from .SearchRequest import SearchRequest


def search_exception_detail(e: SearchScopeException) -> dict[str, Any]:
    """Build the HTTP error body for a search scope exception"""
    if isinstance(e, InvalidScopeValueException):
        return {
            "error": "Invalid Search Parameter",
            "message": str(e),
            "scope": e.scope_name,
            "reason": e.reason
        }
    if isinstance(e, UnknownNamedFilterException):
        return {
            "error": "Unknown Named Filter",
            "message": str(e),
            "named_filter": e.identifier
        }
    if isinstance(e, UnknownScopeKindException):
        return {
            "error": "Unknown Scope Kind",
            "message": str(e),
            "known_kinds": e.known_kinds
        }
    return {"error": "Invalid Search", "message": str(e)}


def create_search_dependency(model_class: Type[Any]) -> Callable[[Request], Finder]:
    """
    Create a FastAPI dependency that returns the model's search query

    Args:
        model_class: Searchable SQLAlchemy model class

    Returns:
        FastAPI dependency function
    """

    def search_dependency(request: Request) -> Finder:
        """Search query dependency"""
        registry: SearchScopes = model_class.can_search()
        params = SearchRequest.from_request(request, registry).params()
        try:
            return registry.search_for(params)
        except SearchScopeException as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=search_exception_detail(e)
            )

    return search_dependency


def handle_search_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator to convert search scope exceptions raised by a route into HTTP 400 responses
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except SearchScopeException as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=search_exception_detail(e)
            )

    return wrapper
