"""
pve-manage: lifecycle actions for Proxmox VE containers and virtual machines

This package resolves whether a VMID is an LXC container or a QEMU virtual
machine and asks the node to start, stop, shut down, reboot or reset it,
refusing transitions that do not fit the entity's current state.
"""

from .config import Config, load_config
from .dispatcher import dispatch
from .errors import (
    ConfigError,
    NotFoundError,
    PolicyError,
    PreconditionError,
    PveManageError,
    TransportError,
    UsageError,
)
from .models import Action, Family, Transition
from .pve_client import PveClient
from .resolver import resolve_family
from .transitions import apply_action
