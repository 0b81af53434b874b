"""
Dispatcher module for pve-manage.

Runs one invocation: parse the action, resolve the entity, apply the action.
"""

from .models import Action
from .pve_client import PveClient
from .resolver import resolve_family
from .transitions import apply_action


def dispatch(client: PveClient, vmid: int, action_name: str) -> int:
    """
    Apply the named action to an entity.

    The action name is validated before any network activity. Errors
    propagate to the caller.

    Returns:
        0 once the transition request has been accepted.
    """
    action = Action.parse(action_name)
    family = resolve_family(client, vmid)
    apply_action(client, family, vmid, action)
    return 0
