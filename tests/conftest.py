import pytest

from skywarden.config import LifecycleConfig
from skywarden.models import InstanceIdentity


class FakeClock:
    """Monotonic clock that only moves when the monitor sleeps."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def identity():
    return InstanceIdentity(
        id="1234567890",
        name="spot-runner-1",
        zone="us-central1-a",
        machine_type="e2-medium",
        project_id="research-proj",
    )


@pytest.fixture
def config():
    return LifecycleConfig(terminate_after_hours=1)


@pytest.fixture
def metadata(mocker, identity):
    mock = mocker.Mock()
    mock.fetch_identity.return_value = identity
    mock.is_preempted.return_value = False
    mock.maintenance_event.return_value = "NONE"
    return mock


@pytest.fixture
def notifier(mocker):
    mock = mocker.Mock()
    mock.notify.return_value = True
    return mock


@pytest.fixture
def terminator(mocker):
    return mocker.Mock()
