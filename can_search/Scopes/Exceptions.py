from __future__ import annotations

from typing import Any, List


class SearchScopeException(Exception):
    """Base exception for search scopes"""
    pass


class UnknownScopeKindException(SearchScopeException):
    """Exception raised when a scope is declared with an unregistered kind"""

    def __init__(self, kind: str, known_kinds: List[str]) -> None:
        self.kind = kind
        self.known_kinds = known_kinds

        known_str = ", ".join(known_kinds)

        super().__init__(
            f"Scope kind `{kind}` is not registered. "
            f"Known scope kind(s) are `{known_str}`."
        )


class UnknownNamedFilterException(SearchScopeException):
    """Exception raised when a named filter does not resolve on a model"""

    def __init__(self, model: Any, identifier: str) -> None:
        self.model = model
        self.identifier = identifier

        model_name = getattr(model, '__name__', repr(model))

        super().__init__(
            f"Named filter `{identifier}` is not defined on `{model_name}`."
        )


class InvalidScopeValueException(SearchScopeException):
    """Exception raised when a search parameter cannot be turned into a filter"""

    def __init__(self, scope_name: str, value: Any, reason: str) -> None:
        self.scope_name = scope_name
        self.value = value
        self.reason = reason

        super().__init__(
            f"Invalid value `{value!r}` for scope `{scope_name}`: {reason}"
        )
