"""Pytest configuration and fixtures for unit tests."""

import pytest

from tasklist.core.store import Store
from tasklist.modules.tasks.view import TaskListView
from tasklist.services.confirmation_service import StaticConfirmer
from tasklist.services.notification_service import NotificationService
from tests.unit.mocks import FakeWeatherService, InMemoryStorage


@pytest.fixture
def store() -> Store:
    """Provides a fresh, empty store for each test."""
    return Store()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def weather(store: Store) -> FakeWeatherService:
    return FakeWeatherService(store)


@pytest.fixture
def notifier() -> NotificationService:
    return NotificationService()


@pytest.fixture
def confirmer() -> StaticConfirmer:
    """Confirmer that accepts every prompt."""
    return StaticConfirmer(answer=True)


@pytest.fixture
def view(
    store: Store,
    storage: InMemoryStorage,
    weather: FakeWeatherService,
    notifier: NotificationService,
    confirmer: StaticConfirmer,
) -> TaskListView:
    """Task list view wired to in-memory collaborators."""
    return TaskListView(
        store=store,
        weather_service=weather,
        storage=storage,
        confirmer=confirmer,
        notifier=notifier,
    )
