from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


def short_name(value: str) -> str:
    """
    Returns the trailing segment of a hierarchical metadata value.
    e.g. projects/123/zones/us-central1-a -> us-central1-a
    """
    return value.strip().rstrip("/").split("/")[-1]


class InstanceIdentity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    zone: str = Field(description="Short form (e.g., us-central1-a)")
    machine_type: str = Field(description="Short form (e.g., e2-medium)")
    project_id: str


class TerminationSignal(str, Enum):
    TTL_EXCEEDED = "ttl_exceeded"
    PREEMPTED = "preempted"


class MonitorPhase(str, Enum):
    RUNNING = "running"
    GRACE_WAIT = "grace_wait"
    TERMINATING = "terminating"
    EXITED = "exited"


class MonitorState(BaseModel):
    start_time: float = Field(description="Monotonic seconds at startup")
    phase: MonitorPhase = MonitorPhase.RUNNING
    terminated: bool = False
    polls: int = 0
