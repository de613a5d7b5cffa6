import pytest

from squadrota.timeline import ManualTicker, TimelineConfig, TimelineController


@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def controller(ticker: ManualTicker) -> TimelineController:
    """Controller with a one-minute half-time break and a hand-fired ticker."""
    return TimelineController(TimelineConfig(break_seconds=60), ticker=ticker, session_name="test")
