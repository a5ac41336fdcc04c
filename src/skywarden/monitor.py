import threading
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any, Protocol, TypeVar

from . import messages
from .config import LifecycleConfig
from .core import MAINTENANCE_TERMINATE_VALUE, PROBE_TIMEOUT_SECONDS, UNKNOWN_NAME
from .errors import MetadataError, MetadataUnavailable, TerminationError
from .logger import logger
from .models import InstanceIdentity, MonitorPhase, MonitorState, TerminationSignal

T = TypeVar("T")


class MetadataProvider(Protocol):
    def get(self, key: str) -> str: ...

    def fetch_identity(
        self, placeholder: str = ..., get: Callable[[str], str] | None = ...
    ) -> InstanceIdentity: ...

    def is_preempted(self) -> bool: ...

    def maintenance_event(self) -> str: ...


class NotifierProtocol(Protocol):
    def notify(self, message: str) -> bool: ...


class TerminatorProtocol(Protocol):
    def terminate(self, project_id: str, zone: str, instance_name: str) -> None: ...


class LifecycleMonitor:
    """
    Watches a single VM for two exit conditions: its own TTL and a GCP
    preemption notice.

    RUNNING -> GRACE_WAIT -> TERMINATING -> EXITED  (TTL path)
    RUNNING -> EXITED                               (preemption path)

    Each cycle checks TTL first, then preemption. Once either path is taken
    the monitor is EXITED and refuses to poll again, so terminate and the
    exit notification happen at most once per process.
    """

    def __init__(
        self,
        config: LifecycleConfig,
        metadata: MetadataProvider,
        notifier: NotifierProtocol,
        terminator: TerminatorProtocol,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        probe_timeout: float = PROBE_TIMEOUT_SECONDS,
    ):
        self.config = config
        self.metadata = metadata
        self.notifier = notifier
        self.terminator = terminator
        self.clock = clock
        self.sleep = sleep
        self.probe_timeout = probe_timeout

        self.identity: InstanceIdentity | None = None
        self.state: MonitorState | None = None

    # Startup

    def start(self) -> InstanceIdentity:
        """
        Fetches identity, announces the launch and starts the uptime clock.
        Raises StartupError if a required identity fact is unavailable.
        """
        hours = self.config.terminate_after_hours
        logger.info(f"Instance will terminate in {hours} hours")

        # Each key gets its own deadline; a hung name read still falls back
        # to the placeholder instead of failing startup.
        identity = self.metadata.fetch_identity(UNKNOWN_NAME, get=self._guarded_get)

        self.identity = identity
        self.notifier.notify(messages.launch_message(identity, hours))
        self.state = MonitorState(start_time=self.clock())
        return identity

    # Poll cycle

    def poll_once(self) -> TerminationSignal | None:
        """
        Runs one cycle. Returns the signal that ended monitoring, or None
        after sleeping the poll interval.
        """
        if self.state is None or self.identity is None:
            raise RuntimeError("monitor not started")
        if self.state.phase is not MonitorPhase.RUNNING:
            raise RuntimeError(f"monitor already {self.state.phase.value}")

        state = self.state
        state.polls += 1
        uptime = timedelta(seconds=self.clock() - state.start_time)
        terminate_after = self.config.terminate_after

        # 1. TTL (self-termination)
        if uptime > terminate_after:
            self._terminate_after_grace()
            return TerminationSignal.TTL_EXCEEDED

        # 2. Preemption
        if self._check_preemption():
            state.phase = MonitorPhase.EXITED
            return TerminationSignal.PREEMPTED

        logger.info(f"Time left: {messages.format_remaining(terminate_after - uptime)}")
        self.sleep(self.config.poll_interval.total_seconds())
        return None

    def run(self) -> TerminationSignal:
        if self.state is None:
            self.start()

        while True:
            signal = self.poll_once()
            if signal is not None:
                return signal

    # Internals

    def _terminate_after_grace(self) -> None:
        assert self.state is not None and self.identity is not None
        identity = self.identity
        grace = self.config.grace_period

        self.notifier.notify(messages.ttl_crossed_message(identity, grace))
        logger.warning(f"Crossed uptime threshold. Terminating in {grace}")

        # Preemption is deliberately not re-checked while waiting
        self.state.phase = MonitorPhase.GRACE_WAIT
        self.sleep(grace.total_seconds())

        self.state.phase = MonitorPhase.TERMINATING
        self.state.terminated = True
        try:
            self.terminator.terminate(identity.project_id, identity.zone, identity.name)
        except TerminationError as e:
            logger.error(f"Termination failed: {e}")
        finally:
            self.state.phase = MonitorPhase.EXITED

    def _check_preemption(self) -> bool:
        assert self.identity is not None
        try:
            preempted = self._guarded("instance/preempted", self.metadata.is_preempted)
        except MetadataError as e:
            logger.error(f"Spot termination check failed: {e}")
            return False

        if preempted:
            self.notifier.notify(messages.preempted_message(self.identity))
            return True

        if not self.config.watch_maintenance_event:
            return False

        try:
            event = self._guarded(
                "instance/maintenance-event", self.metadata.maintenance_event
            )
        except MetadataError as e:
            logger.error(f"Maintenance event check failed: {e}")
            return False

        if event == MAINTENANCE_TERMINATE_VALUE:
            self.notifier.notify(messages.maintenance_message(self.identity, event))
            return True

        return False

    def _guarded(self, key: str, probe: Callable[[], T]) -> T:
        """
        Runs a metadata probe with a caller-side deadline. A probe that
        outlives the deadline is abandoned and reported as unavailable.
        The probe thread is a daemon so an abandoned one never holds up
        process exit.
        """
        outcome: dict[str, Any] = {}

        def target() -> None:
            try:
                outcome["value"] = probe()
            except Exception as e:
                outcome["error"] = e

        thread = threading.Thread(target=target, name="metadata-probe", daemon=True)
        thread.start()
        thread.join(self.probe_timeout)

        if thread.is_alive():
            raise MetadataUnavailable(key, f"no answer within {self.probe_timeout}s")
        if "error" in outcome:
            raise outcome["error"]
        return outcome["value"]  # type: ignore[no-any-return]

    def _guarded_get(self, key: str) -> str:
        return self._guarded(key, lambda: self.metadata.get(key))
