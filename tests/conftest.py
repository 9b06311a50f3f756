"""Shared fixtures: a fresh set of searchable models per test, backed by in-memory SQLite."""

from datetime import datetime
from types import SimpleNamespace
from typing import Any, Iterator, List, Optional

import pytest
from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from can_search.Models.Searchable import Searchable


def build_models() -> SimpleNamespace:
    """Declare new model classes so named filters never leak between tests."""

    class Base(DeclarativeBase):
        pass

    class Forum(Base):
        __tablename__ = 'forums'

        id: Mapped[int] = mapped_column(primary_key=True)
        name: Mapped[str] = mapped_column(String(100))

    class Topic(Searchable, Base):
        __tablename__ = 'topics'

        id: Mapped[int] = mapped_column(primary_key=True)
        title: Mapped[str] = mapped_column(String(200))
        body: Mapped[str] = mapped_column(Text, default='')
        forum_id: Mapped[int] = mapped_column(ForeignKey('forums.id'))
        live: Mapped[bool] = mapped_column(Boolean, default=False)
        has_replies: Mapped[bool] = mapped_column(Boolean, default=False)
        featured: Mapped[bool] = mapped_column(Boolean, default=False)
        created_at: Mapped[datetime] = mapped_column(DateTime)
        closed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

        @classmethod
        def scope_featured(cls, query: Any, value: Any) -> Any:
            return query.where(cls.featured == bool(value))

    return SimpleNamespace(Base=Base, Forum=Forum, Topic=Topic)


def seed(session: Session, models: SimpleNamespace) -> None:
    Forum, Topic = models.Forum, models.Topic
    session.add_all([
        Forum(id=1, name='Rails'),
        Forum(id=2, name='Databases'),
        Forum(id=3, name='Python'),
    ])
    session.add_all([
        Topic(id=1, title='Rails tips', body='Use scopes', forum_id=1, live=True,
              has_replies=True, featured=False, created_at=datetime(2024, 1, 5, 10, 0)),
        Topic(id=2, title='SQLAlchemy 100% guide', body='Select all the things', forum_id=2, live=False,
              has_replies=False, featured=True, created_at=datetime(2024, 1, 20, 8, 30)),
        Topic(id=3, title='Python_tips', body='Rails envy', forum_id=3, live=True,
              has_replies=False, featured=True, created_at=datetime(2024, 2, 3, 23, 59)),
        Topic(id=4, title='Rails routing', body='Resources', forum_id=1, live=False,
              has_replies=True, featured=False, created_at=datetime(2024, 3, 15, 12, 0)),
    ])
    session.commit()


@pytest.fixture
def models() -> SimpleNamespace:
    return build_models()


@pytest.fixture
def Topic(models: SimpleNamespace) -> Any:
    return models.Topic


@pytest.fixture
def session(models: SimpleNamespace) -> Iterator[Session]:
    engine = create_engine('sqlite://')
    models.Base.metadata.create_all(engine)
    with Session(engine) as db:
        seed(db, models)
        yield db
    engine.dispose()


@pytest.fixture
def ids(session: Session) -> Any:
    """Run a query and return the sorted ids of the matched topics."""

    def run(query: Any) -> List[int]:
        return sorted(topic.id for topic in session.scalars(query))

    return run


def sql(query: Any) -> str:
    """Render a query with literal values for comparisons."""
    return str(query.compile(compile_kwargs={'literal_binds': True}))


class FilterSpy:
    """Wraps a named filter and records the values it is invoked with."""

    def __init__(self, model: Any, identifier: str) -> None:
        self.calls: List[Any] = []
        self.identifier = identifier
        self._builder = model._resolve_named_filter(identifier)
        model.named_filter(identifier, self, replace=True)

    def __call__(self, query: Any, value: Any) -> Any:
        self.calls.append(value)
        return self._builder(query, value)
