from __future__ import annotations

from typing import Any, Dict, List
from starlette.requests import Request

from can_search.Scopes.SearchScopes import SearchScopes


class SearchRequest:
    """
    Collects the query string parameters a model's search scopes read.

    Plural reference keys accept repeated parameters (``?forums=1&forums=2``)
    and delimited values (``?forums=1,2``). Every other key takes a single
    value. Parameters no scope reads are left out.
    """

    # Default array value delimiter
    _array_delimiter = ","

    def __init__(self, request: Request, registry: SearchScopes) -> None:
        self.request = request
        self.registry = registry
        self._parsed_params: Dict[str, Any] | None = None

    @classmethod
    def from_request(cls, request: Request, registry: SearchScopes) -> SearchRequest:
        """Create instance from FastAPI Request"""
        return cls(request, registry)

    @classmethod
    def set_array_value_delimiter(cls, delimiter: str) -> None:
        """Set global array value delimiter"""
        cls._array_delimiter = delimiter

    def params(self) -> Dict[str, Any]:
        """Get the search parameters"""
        if self._parsed_params is None:
            self._parsed_params = self._parse_params()
        return self._parsed_params

    def _parse_params(self) -> Dict[str, Any]:
        query_params = self.request.query_params
        params: Dict[str, Any] = {}

        for scope in self.registry.scopes.values():
            list_keys = scope.list_keys()
            for key in scope.consumed_keys():
                if key in params or key not in query_params:
                    continue
                if key in list_keys:
                    params[key] = self._parse_list(query_params.getlist(key))
                else:
                    params[key] = query_params[key]

        return params

    def _parse_list(self, values: List[str]) -> List[str]:
        delimiter = self._array_delimiter
        return [
            item.strip()
            for value in values
            for item in value.split(delimiter)
            if item.strip()
        ]
