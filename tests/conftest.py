# Ensures project root is importable for tests (so 'data', 'models', etc. can be imported)
# and provides an in-memory repository with a controllable clock.
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from data.prompt_repository import PromptRepository  # noqa: E402
from data.prompt_store import MemoryPromptStore  # noqa: E402

T0 = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


class StepClock:
    """Advances by `step` on every call; step=0 freezes time."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def frozen_clock():
    return StepClock(step=timedelta(0))


@pytest.fixture
def store():
    return MemoryPromptStore()


@pytest.fixture
def repo(store, clock):
    r = PromptRepository(store, seed_on_empty=False, clock=clock)
    r.load()
    return r


@pytest.fixture
def events(repo):
    seen = []
    repo.subscribe(seen.append)
    return seen
