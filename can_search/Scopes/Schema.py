from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, Type, runtime_checkable
from sqlalchemy import Boolean, inspect
from sqlalchemy.exc import NoInspectionAvailable


BOOLEAN = 'boolean'


@runtime_checkable
class SchemaInspector(Protocol):
    """
    Reads declared field types for a model.

    Only used while inferring which scope kind a declaration implies.
    """

    def field_type(self, name: str) -> Optional[str]:
        """
        Return the declared type of a field.

        @param name: Attribute name on the model
        @return: 'boolean' for boolean fields, another lower-case type name, or None if unknown
        """
        ...


class SQLAlchemySchema:
    """Schema inspector backed by the SQLAlchemy mapper of a declarative model."""

    def __init__(self, model: Type[Any]) -> None:
        self.model = model
        self._types: Optional[Dict[str, str]] = None

    def field_type(self, name: str) -> Optional[str]:
        if self._types is None:
            self._types = self._load_types()
        return self._types.get(str(name))

    def _load_types(self) -> Dict[str, str]:
        try:
            mapper = inspect(self.model)
        except NoInspectionAvailable:
            return {}

        types: Dict[str, str] = {}
        for key, column in mapper.columns.items():
            if isinstance(column.type, Boolean):
                types[key] = BOOLEAN
            else:
                types[key] = type(column.type).__name__.lower()
        return types


class StaticSchema:
    """Schema inspector over a fixed ``{field: type}`` mapping."""

    def __init__(self, types: Mapping[str, str]) -> None:
        self.types = dict(types)

    def field_type(self, name: str) -> Optional[str]:
        return self.types.get(str(name))
