"""Pytest fixtures for actionbridge tests."""

import logging
from typing import Optional

import pytest
from pydantic import BaseModel, Field


ENV_VARS = [
    "ACTIONBRIDGE_LOG_LEVEL",
    "ACTIONBRIDGE_LOG_HANDLER",
    "ACTIONBRIDGE_LOG_TO_STDERR",
    "ACTIONBRIDGE_STRIP_SCHEMA_KEYS",
    "ACTIONBRIDGE_REQUIRE_ARGUMENTS",
    "ACTIONBRIDGE_STRICT_VALIDATION",
]


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Reset settings before each test."""
    from actionbridge.config import reload_settings

    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reload_settings()
    yield
    reload_settings()


@pytest.fixture
def package_logger():
    """Restore the actionbridge logger handlers and level after a test."""
    package = logging.getLogger("actionbridge")
    handlers = list(package.handlers)
    level = package.level
    yield package
    package.handlers = handlers
    package.setLevel(level)


class WeatherQuery(BaseModel):
    location: str = Field(..., description="The city and state")
    unit: str = Field(default="celsius", description="Temperature unit")


class SearchQuery(BaseModel):
    query: Optional[str] = None
    limit: int = 10


class CallCounter:
    """Handler spy counting how many times it ran."""

    def __init__(self, result=None):
        self.calls = []
        self.result = result

    async def __call__(self, *args):
        self.calls.append(args)
        return self.result

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def weather_counter():
    return CallCounter(result={"tempC": 20})


@pytest.fixture
def ping_counter():
    return CallCounter(result="pong")


@pytest.fixture
def actions(weather_counter, ping_counter):
    """Registry with a unary, a nullary and a renamed action."""
    from actionbridge.actions import Action, ActionArity, ActionRegistry

    registry = ActionRegistry()
    registry.register("getWeather", Action(
        handler=weather_counter,
        arity=ActionArity.UNARY,
        input_validator=WeatherQuery,
        description="Get the current weather",
    ))
    registry.register("ping", Action(
        handler=ping_counter,
        description="Check that the service is alive",
    ))
    registry.register("search", Action(
        handler=lambda query: {"limit": query.limit},
        arity=ActionArity.UNARY,
        input_validator=SearchQuery,
        name="search_documents",
    ))
    return registry
