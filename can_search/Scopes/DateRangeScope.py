from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Any, Mapping, Optional, Tuple, Union
from sqlalchemy import DateTime

from can_search.config.settings import settings

from .BaseScope import BaseScope, FilterableModel, Finder, SearchParams
from .Exceptions import InvalidScopeValueException
from .SearchScopes import SearchScopes

DateLike = Union[date, datetime]
DateBounds = Tuple[Optional[DateLike], Optional[DateLike]]

PERIODS = ('daily', 'weekly', 'monthly', 'yearly')


def add_months(value: DateLike, months: int) -> DateLike:
    """Shift a date by whole months, clamping the day to the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def period_end(start: DateLike, period: str) -> DateLike:
    if period == 'daily':
        return start + timedelta(days=1)
    if period == 'weekly':
        return start + timedelta(weeks=1)
    if period == 'monthly':
        return add_months(start, 1)
    return add_months(start, 12)


class DateRangeScope(BaseScope):
    """
    Filters a date or datetime attribute to a half-open range ``[start, end)``.

        Topic.can_search(lambda s: s.scoped_by('created_at', scope='date_range'))

        Topic.search({'created_at': date(2024, 1, 1)})                          # that day
        Topic.search({'created_at': {'start': '2024-01-01', 'period': 'monthly'}})
        Topic.search({'created_at': (date(2024, 1, 1), date(2024, 3, 1))})
        Topic.search({'created_at_after': '2024-01-01'})                        # open ended

    ``_after`` and ``_before`` keys override the bounds from the main key.
    """

    def __init__(self, model: FilterableModel, name: str, **options: Any) -> None:
        super().__init__(model, name, **options)
        self.attribute = options.get('attribute') or name
        self.named_filter = options.get('named_filter') or f"{name}_between"
        self.period: str = options.get('period') or settings.CAN_SEARCH_DEFAULT_PERIOD
        if self.period not in PERIODS:
            raise InvalidScopeValueException(name, self.period, f"period must be one of {', '.join(PERIODS)}")

        self.define_filter(self.named_filter, self._between)

    @property
    def after_key(self) -> str:
        return f"{self.name}_after"

    @property
    def before_key(self) -> str:
        return f"{self.name}_before"

    def _between(self, finder: Finder, bounds: DateBounds) -> Finder:
        column = getattr(self.model, self.attribute)
        start, end = bounds
        as_datetime = isinstance(getattr(column, 'type', None), DateTime)

        conditions = []
        if start is not None:
            conditions.append(column >= (self._to_datetime(start) if as_datetime else start))
        if end is not None:
            conditions.append(column < (self._to_datetime(end) if as_datetime else end))
        if not conditions:
            return finder
        return finder.where(*conditions)

    def scope_for(self, finder: Finder, params: SearchParams) -> Finder:
        value = params.pop(self.name, None)
        after = params.pop(self.after_key, None)
        before = params.pop(self.before_key, None)

        start, end = self.bounds_for(value)
        if after not in (None, ''):
            start = self.parse_date(after)
        if before not in (None, ''):
            end = self.parse_date(before)

        if start is None and end is None:
            return finder
        return self.apply_filter(finder, (start, end))

    def bounds_for(self, value: Any) -> DateBounds:
        """Turn the main search parameter into ``(start, end)`` bounds."""
        if value is None or value == '':
            return None, None

        if isinstance(value, Mapping):
            start = self.parse_date(value.get('start'))
            end = self.parse_date(value.get('end'))
            period = value.get('period')
            if period is not None and period not in PERIODS:
                raise InvalidScopeValueException(self.name, value, f"unknown period `{period}`")
            if end is None and start is not None:
                end = period_end(start, period or self.period)
            return start, end

        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise InvalidScopeValueException(self.name, value, "expected a (start, end) pair")
            return self.parse_date(value[0]), self.parse_date(value[1])

        start = self.parse_date(value)
        return start, period_end(start, self.period)

    def parse_date(self, value: Any) -> Optional[DateLike]:
        if value is None or value == '':
            return None
        if isinstance(value, (date, datetime)):
            return value
        if isinstance(value, str):
            text = value.strip()
            try:
                if 'T' in text or ' ' in text:
                    return datetime.fromisoformat(text)
                return date.fromisoformat(text)
            except ValueError as e:
                raise InvalidScopeValueException(self.name, value, str(e)) from e
        raise InvalidScopeValueException(self.name, value, "expected a date, datetime or ISO 8601 string")

    @staticmethod
    def _to_datetime(value: DateLike) -> datetime:
        if isinstance(value, datetime):
            return value
        return datetime.combine(value, time.min)

    def consumed_keys(self) -> Tuple[str, ...]:
        return (self.name, self.after_key, self.before_key)

    def _identity(self) -> Tuple[Any, ...]:
        return super()._identity() + (self.period,)


SearchScopes.register_scope_type('date_range', DateRangeScope)
