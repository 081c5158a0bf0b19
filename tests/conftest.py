"""
Pytest configuration and fixtures for export tests
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class RecordingSink:
    """Trace sink that keeps lines and counts close calls"""

    def __init__(self):
        self.lines = []
        self.close_calls = 0

    def __call__(self, line):
        self.lines.append(line)

    def close(self):
        self.close_calls += 1


class FakeClock:
    """Monotonic clock advanced by the fake engine"""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeEngine:
    """Engine that records calls, advances the clock and optionally raises"""

    def __init__(self, clock: FakeClock = None, duration: float = 0.0, error: Exception = None):
        self.clock = clock
        self.duration = duration
        self.error = error
        self.calls = []

    def export_to_svf(self, view, config):
        self.calls.append((view, config))
        config.trace("engine started")
        if self.clock:
            self.clock.advance(self.duration)
        if self.error:
            raise self.error


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_engine(fake_clock):
    return FakeEngine(clock=fake_clock)


@pytest.fixture
def settings_file(tmp_path):
    """Path for a JSON settings file in a temporary directory"""
    return tmp_path / "settings" / "local_config.json"


@pytest.fixture
def gateway(settings_file):
    from svfzip.storage import JsonSettingsGateway
    return JsonSettingsGateway(settings_file)


@pytest.fixture
def make_engine(fake_clock):
    """Factory for fake engines sharing the fake clock"""
    def factory(duration: float = 0.0, error: Exception = None):
        return FakeEngine(clock=fake_clock, duration=duration, error=error)
    return factory
