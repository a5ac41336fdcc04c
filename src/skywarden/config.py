import os
from collections.abc import Mapping
from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field

from .core import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_NOTIFY_URL,
    DEFAULT_TERMINATE_AFTER_HOURS,
    GRACE_PERIOD,
    POLL_INTERVAL,
)

_TRUTHY = {"1", "true", "yes", "on"}

# Names accepted by logging.Logger.setLevel
_LOG_LEVELS = {"CRITICAL", "FATAL", "ERROR", "WARNING", "WARN", "INFO", "DEBUG", "NOTSET"}

# Largest TTL a timedelta can hold
MAX_TERMINATE_AFTER_HOURS = timedelta.max // timedelta(hours=1)


def _parse_hours(raw: str | None) -> int:
    """
    Parses TERMINATE_AFTER_HOURS. Anything that is not an integer
    (unset, empty, "abc", "1.5") or does not fit in a timedelta
    falls back to the default.
    """
    if raw is None:
        return DEFAULT_TERMINATE_AFTER_HOURS
    try:
        hours = int(raw.strip())
    except ValueError:
        return DEFAULT_TERMINATE_AFTER_HOURS
    if abs(hours) > MAX_TERMINATE_AFTER_HOURS:
        return DEFAULT_TERMINATE_AFTER_HOURS
    return hours


def _parse_log_level(raw: str | None) -> str:
    level = (raw or "").strip().upper()
    return level if level in _LOG_LEVELS else DEFAULT_LOG_LEVEL


class LifecycleConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    terminate_after_hours: int = Field(
        default=DEFAULT_TERMINATE_AFTER_HOURS,
        ge=-MAX_TERMINATE_AFTER_HOURS,
        le=MAX_TERMINATE_AFTER_HOURS,
    )
    grace_period: timedelta = Field(default=GRACE_PERIOD, description="Fixed")
    poll_interval: timedelta = Field(default=POLL_INTERVAL, description="Fixed")
    notify_url: str = DEFAULT_NOTIFY_URL
    watch_maintenance_event: bool = False
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def terminate_after(self) -> timedelta:
        return timedelta(hours=self.terminate_after_hours)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "LifecycleConfig":
        """
        Builds the configuration from environment variables.
        Grace period and poll interval are not configurable.
        """
        env = os.environ if environ is None else environ

        return cls(
            terminate_after_hours=_parse_hours(env.get("TERMINATE_AFTER_HOURS")),
            notify_url=env.get("NOTIFY_URL") or DEFAULT_NOTIFY_URL,
            watch_maintenance_event=(
                env.get("WATCH_MAINTENANCE_EVENT", "").strip().lower() in _TRUTHY
            ),
            log_level=_parse_log_level(env.get("LOG_LEVEL")),
        )
