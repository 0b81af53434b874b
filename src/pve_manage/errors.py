"""
Errors module for pve-manage.

Every failure is terminal for the invocation; the entry point turns any
PveManageError into a message on stderr and a nonzero exit code.
"""

from typing import Optional


class PveManageError(Exception):
    """Base class for all pve-manage errors."""

    exit_code = 1


class UsageError(PveManageError):
    """Missing or invalid command-line arguments."""


class ConfigError(PveManageError):
    """Missing or invalid configuration, e.g. no API token."""


class TransportError(PveManageError):
    """Network, HTTP or JSON failure while talking to the Proxmox API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(PveManageError):
    """The VMID is neither a container nor a virtual machine on the node."""


class PolicyError(PveManageError):
    """The action is never allowed for the entity's family."""


class PreconditionError(PveManageError):
    """The entity's current status does not allow the requested action."""

    def __init__(self, message: str, current: str, required: str):
        super().__init__(message)
        self.current = current
        self.required = required
