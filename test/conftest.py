from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from core.interaction import InteractionStateMachine  # noqa: E402
from shared.models import TimeWindow  # noqa: E402
from test.fixtures.track_fixtures import LinearSurface, RecordingSink, ToolBox  # noqa: E402


@pytest.fixture
def surface() -> LinearSurface:
    # pixel 50 -> 2.0, pixel 150 -> 8.0, pixel 100 -> 5.0
    return LinearSurface(TimeWindow(-1.0, 11.0))


@pytest.fixture
def sink(surface: LinearSurface) -> RecordingSink:
    return RecordingSink(surface)


@pytest.fixture
def tools() -> ToolBox:
    return ToolBox()


@pytest.fixture
def machine(surface: LinearSurface, tools: ToolBox, sink: RecordingSink) -> InteractionStateMachine:
    return InteractionStateMachine(surface, tools, sink)
