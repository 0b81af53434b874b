"""
Resolver module for pve-manage.

Determines whether a VMID belongs to a container or a virtual machine.
"""

import logging

from .errors import NotFoundError
from .models import Family
from .pve_client import PveClient

logger = logging.getLogger("pve-manage")


def resolve_family(client: PveClient, vmid: int) -> Family:
    """
    Find the family of an entity.

    Both listings are fetched before searching. VMIDs are unique across
    families on a node, so at most one listing can match.

    Args:
        client: The PveClient to query.
        vmid: The entity ID.

    Returns:
        Family.CONTAINER or Family.VIRTUAL_MACHINE.

    Raises:
        NotFoundError: if neither listing contains the VMID.
        TransportError: if a listing cannot be fetched.
    """
    containers = client.list_vmids(Family.CONTAINER)
    virtual_machines = client.list_vmids(Family.VIRTUAL_MACHINE)

    if vmid in containers:
        family = Family.CONTAINER
    elif vmid in virtual_machines:
        family = Family.VIRTUAL_MACHINE
    else:
        raise NotFoundError(
            f"VMID {vmid} not found as an LXC container or QEMU virtual machine "
            f"on node {client.node}."
        )

    logger.debug(f"VMID {vmid} is a {family.label}")
    return family
