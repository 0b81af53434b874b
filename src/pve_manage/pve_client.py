"""
Proxmox VE Client module for pve-manage.

This module provides the PveClient class for querying and changing the run
state of containers and virtual machines on a single Proxmox VE node.
"""

import logging
from typing import Any, List, Optional

import requests
import urllib3

from .config import Config
from .errors import TransportError
from .models import Action, Family

# Certificate verification is off; self-signed node certificates are expected.
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

logger = logging.getLogger("pve-manage")


class PveClient:
    """Client for the Proxmox VE REST API of one node."""

    def __init__(self, config: Config):
        self.host = config.host
        self.node = config.node
        self.timeout = config.timeout
        self.session = requests.Session()
        self.session.verify = False
        self.session.headers.update(
            {
                "Authorization": config.token,
                "Accept": "application/json",
            }
        )

    def __enter__(self) -> "PveClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def url(self, family: Family, path: str = "") -> str:
        return f"{self.host}/api2/json/nodes/{self.node}/{family.path}{path}"

    def _request(self, method: str, url: str) -> requests.Response:
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise TransportError(
                f"{method} {url} returned status code {response.status_code}: {response.text.strip()}",
                status_code=response.status_code,
            )
        return response

    def get(self, family: Family, path: str = "") -> Any:
        """
        GET a resource and return the ``data`` member of the JSON envelope.

        Raises:
            TransportError: on network failure, non-2xx status or malformed JSON.
        """
        url = self.url(family, path)
        response = self._request("GET", url)
        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(f"GET {url} returned malformed JSON: {e}") from e

        if not isinstance(payload, dict) or "data" not in payload:
            raise TransportError(f"GET {url} returned no data member")

        logger.debug(f"Proxmox API response: {payload}")
        return payload["data"]

    def post(self, family: Family, path: str) -> Any:
        """
        POST to a resource. Only the HTTP status decides success; the ``data``
        member is returned when the body is JSON, otherwise None.
        """
        url = self.url(family, path)
        response = self._request("POST", url)
        try:
            payload = response.json()
        except ValueError:
            return None
        logger.debug(f"Proxmox API response: {payload}")
        return payload.get("data") if isinstance(payload, dict) else None

    def list_vmids(self, family: Family) -> List[int]:
        """
        List the VMIDs of every entity of a family on the node.

        Returns:
            List of VMIDs. Entries without a usable vmid are skipped.
        """
        entries = self.get(family) or []
        if not isinstance(entries, list):
            raise TransportError(f"Listing of {family.path} entities is not a list")

        vmids = []
        for entry in entries:
            try:
                vmids.append(int(entry["vmid"]))
            except (KeyError, TypeError, ValueError):
                logger.debug(f"Ignoring {family.path} entry without vmid: {entry}")
        logger.debug(f"Found {len(vmids)} {family.path} entities on node {self.node}")
        return vmids

    def get_status(self, family: Family, vmid: int) -> str:
        """Return the current status string of an entity, e.g. 'running'."""
        data = self.get(family, f"/{vmid}/status/current")
        try:
            return str(data["status"])
        except (KeyError, TypeError):
            raise TransportError(
                f"Status of {family.label} {vmid} is missing from the API response"
            ) from None

    def get_name(self, family: Family, vmid: int) -> Optional[str]:
        """Return the display name of an entity, or None if it has none."""
        data = self.get(family, f"/{vmid}/config")
        if not isinstance(data, dict):
            return None
        return data.get(family.name_field)

    def request_transition(self, family: Family, vmid: int, action: Action) -> Optional[str]:
        """
        Ask the node to perform a lifecycle action.

        Returns:
            The task UPID if the API returned one. The transition itself runs
            asynchronously on the node and is not waited for.
        """
        data = self.post(family, f"/{vmid}/status/{action.value}")
        return data if isinstance(data, str) else None
