from datetime import timedelta

import humanize

from .models import InstanceIdentity


def launch_message(identity: InstanceIdentity, terminate_after_hours: int) -> str:
    return (
        "GCP Instance Launched\n"
        "```\n"
        f"Name: {identity.name}\n"
        f"ID: {identity.id}\n"
        f"Zone: {identity.zone}\n"
        f"Type: {identity.machine_type}\n"
        f"Project: {identity.project_id}\n"
        f"Terminate after: {terminate_after_hours} hours\n"
        "```\n"
    )


def ttl_crossed_message(identity: InstanceIdentity, grace_period: timedelta) -> str:
    return (
        f"Instance `{identity.name}` in `{identity.zone}` crossed uptime threshold. "
        f"Will terminate in {humanize.naturaldelta(grace_period)}"
    )


def preempted_message(identity: InstanceIdentity) -> str:
    return (
        f"\N{POLICE CARS REVOLVING LIGHT} Instance `{identity.name}` in "
        f"`{identity.zone}` is being PREEMPTED by GCP"
    )


def maintenance_message(identity: InstanceIdentity, event: str) -> str:
    return (
        f"\N{POLICE CARS REVOLVING LIGHT} Instance `{identity.name}` in "
        f"`{identity.zone}` is scheduled for host maintenance ({event})"
    )


def format_remaining(remaining: timedelta) -> str:
    """Truncates to whole seconds, e.g. 23:59:55."""
    return str(timedelta(seconds=int(remaining.total_seconds())))
