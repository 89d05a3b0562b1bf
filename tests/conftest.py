"""Shared test fixtures for Yaga."""

import datetime

import yaml
import pytest
from pathlib import Path

from yaga.cache import MemoryCache
from yaga.config import Config
from yaga.models import AwardEvent, CriteriaForm, Member
from yaga.rules import load_rule_modules
from yaga.rules import base as rules_base

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Built-in rules register at import; import them once before any test
# swaps the registry out.
load_rule_modules()


@pytest.fixture
def load_yaml():
    """Return a function that loads a YAML fixture file."""

    def _load(name: str):
        path = FIXTURES_DIR / name
        with open(path) as f:
            return yaml.safe_load(f)

    return _load


@pytest.fixture
def empty_registry(monkeypatch):
    """Replace the global rule registry with an empty one for the test."""
    registry: dict[str, type] = {}
    monkeypatch.setattr(rules_base, "_RULE_REGISTRY", registry)
    return registry


@pytest.fixture
def memory_cache():
    return MemoryCache()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def now():
    return datetime.datetime(2024, 6, 15, 12, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def make_member(now):
    """Return a factory for Member models with sensible defaults."""

    def _make(**overrides) -> Member:
        values = {
            "user_id": 1,
            "name": "alice",
            "date_inserted": now - datetime.timedelta(days=400),
        }
        values.update(overrides)
        return Member(**values)

    return _make


@pytest.fixture
def make_event(now, make_member):
    """Return a factory for AwardEvent models."""

    def _make(hook: str = "test_hook", user=None, **overrides) -> AwardEvent:
        return AwardEvent(
            hook=hook,
            user=user or make_member(),
            occurred_at=overrides.pop("occurred_at", now),
            **overrides,
        )

    return _make


def _make_rule(identity: str, display_name: str, interactive: bool = False) -> type:
    """Create a minimal rule class named ``identity``."""

    def name(self):
        return display_name

    def description(self):
        return f"{display_name} description"

    def interacts(self):
        return interactive

    def form(self):
        return CriteriaForm(note=display_name)

    def award(self, event, criteria):
        return False

    def hooks(self):
        return []

    return type(
        identity,
        (),
        {
            "name": name,
            "description": description,
            "interacts": interacts,
            "form": form,
            "award": award,
            "hooks": hooks,
        },
    )


@pytest.fixture
def make_rule():
    """Return a factory for minimal rule classes."""
    return _make_rule


class RecordingCache(MemoryCache):
    """MemoryCache that records every get/store call."""

    def __init__(self) -> None:
        super().__init__()
        self.gets: list[str] = []
        self.stores: list[tuple] = []

    def get(self, key):
        self.gets.append(key)
        return super().get(key)

    def store(self, key, value, expiry=None):
        self.stores.append((key, value, expiry))
        super().store(key, value, expiry)


@pytest.fixture
def recording_cache():
    return RecordingCache()
