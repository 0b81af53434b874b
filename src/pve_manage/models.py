"""
Models module for pve-manage.

Entity families, lifecycle actions and the policy deciding which action may be
applied to an entity in a given state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import PolicyError, PreconditionError, UsageError

RUNNING = "running"


class Family(Enum):
    """Entity family, carrying the API path segment and config name field."""

    CONTAINER = ("lxc", "hostname", "LXC")
    VIRTUAL_MACHINE = ("qemu", "name", "VM")

    def __init__(self, path: str, name_field: str, label: str):
        self.path = path
        self.name_field = name_field
        self.label = label


class Action(Enum):
    """Lifecycle action; the value is both the CLI name and the API path segment."""

    START = "start"
    STOP = "stop"
    SHUTDOWN = "shutdown"
    REBOOT = "reboot"
    RESET = "reset"

    @property
    def verb(self) -> str:
        return _VERBS[self]

    @classmethod
    def names(cls) -> str:
        return ", ".join(action.value for action in cls)

    @classmethod
    def parse(cls, name: str) -> "Action":
        """
        Map an action name to an Action.

        Raises:
            UsageError: if the name is not one of the known actions.
        """
        try:
            return cls(name)
        except ValueError:
            raise UsageError(
                f"Invalid action '{name}'. Valid actions are: {cls.names()}."
            ) from None


_VERBS = {
    Action.START: "Starting",
    Action.STOP: "Stopping",
    Action.SHUTDOWN: "Shutting down",
    Action.REBOOT: "Rebooting",
    Action.RESET: "Resetting",
}


@dataclass(frozen=True)
class Transition:
    """A transition request accepted by the API. Completion is not tracked."""

    family: Family
    vmid: int
    action: Action
    name: Optional[str] = None
    upid: Optional[str] = None

    def describe(self) -> str:
        return f"{self.family.label}: {self.vmid} ({self.name or 'unnamed'})"


def check_policy(action: Action, family: Family, vmid: int) -> None:
    """Reject actions that are never valid for a family."""
    if action is Action.RESET and family is Family.CONTAINER:
        raise PolicyError(
            f"reset not applicable to containers: cannot reset {family.label} {vmid}, "
            "the 'reset' action is only applicable to QEMU virtual machines."
        )


def check_precondition(action: Action, family: Family, vmid: int, status: str) -> None:
    """
    Check that an entity with the given status may undergo the action.

    Start requires the entity not to be running; every other action requires
    it to be running.

    Raises:
        PreconditionError: naming the current and the required state.
    """
    if action is Action.START:
        if status == RUNNING:
            raise PreconditionError(
                f"{family.label} {vmid} is already running!",
                current=status,
                required=f"not {RUNNING}",
            )
    elif status != RUNNING:
        raise PreconditionError(
            f"{family.label} {vmid} is not running (current status: {status}), "
            f"cannot {action.value}!",
            current=status,
            required=RUNNING,
        )
