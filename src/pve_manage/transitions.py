"""
Transitions module for pve-manage.

Applies a lifecycle action to an entity after checking the action policy
and the entity's current status.
"""

import logging
from dataclasses import replace

from .models import Action, Family, Transition, check_policy, check_precondition
from .pve_client import PveClient

logger = logging.getLogger("pve-manage")


def apply_action(client: PveClient, family: Family, vmid: int, action: Action) -> Transition:
    """
    Request a state transition for an entity.

    The request is fire-and-forget: success means the node accepted the
    command, not that the entity reached its new state.

    Args:
        client: The PveClient to use.
        family: The resolved family of the entity.
        vmid: The entity ID.
        action: The action to perform.

    Returns:
        The Transition that was requested.

    Raises:
        PolicyError: if the action is never valid for the family. Raised
            before any request is made.
        PreconditionError: if the current status does not allow the action.
        TransportError: if any API call fails.
    """
    check_policy(action, family, vmid)

    status = client.get_status(family, vmid)
    logger.debug(f"{family.label} {vmid} status: {status}")
    check_precondition(action, family, vmid, status)

    name = client.get_name(family, vmid)
    transition = Transition(family=family, vmid=vmid, action=action, name=name)

    logger.info(f"{action.verb} {transition.describe()}")
    upid = client.request_transition(family, vmid, action)
    logger.info(f"{action.value.capitalize()} command has been sent to {transition.describe()}")
    if upid:
        logger.debug(f"Task UPID: {upid}")

    return replace(transition, upid=upid)
