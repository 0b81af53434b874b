"""Shared fixtures for pve-manage tests."""

from typing import Dict, List, Optional

import pytest

from pve_manage.config import Config
from pve_manage.errors import TransportError
from pve_manage.models import Action, Family


class FakePveClient:
    """In-memory stand-in for PveClient that records every API call."""

    node = "pve"

    def __init__(
        self,
        containers: Optional[Dict[int, Dict[str, str]]] = None,
        vms: Optional[Dict[int, Dict[str, str]]] = None,
        fail_on: Optional[str] = None,
    ):
        self.entities = {
            Family.CONTAINER: containers or {},
            Family.VIRTUAL_MACHINE: vms or {},
        }
        self.fail_on = fail_on
        self.calls: List[tuple] = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True

    def _record(self, *call):
        self.calls.append(call)
        if self.fail_on == call[0]:
            raise TransportError(f"{call[0]} failed: connection refused")

    def list_vmids(self, family: Family) -> List[int]:
        self._record("list", family)
        return list(self.entities[family])

    def get_status(self, family: Family, vmid: int) -> str:
        self._record("status", family, vmid)
        return self.entities[family][vmid]["status"]

    def get_name(self, family: Family, vmid: int) -> Optional[str]:
        self._record("name", family, vmid)
        return self.entities[family][vmid].get("name")

    def request_transition(self, family: Family, vmid: int, action: Action) -> Optional[str]:
        self._record("post", family, vmid, action)
        self.entities[family][vmid]["pending"] = action.value
        return f"UPID:pve:0000ABCD:{family.path}{action.value}:{vmid}:root@pam!ops:"

    def kinds(self) -> List[str]:
        return [call[0] for call in self.calls]

    def posts(self) -> List[tuple]:
        return [call for call in self.calls if call[0] == "post"]


@pytest.fixture
def config():
    return Config(
        host="https://pve.test:8006",
        node="pve",
        token="PVEAPIToken=root@pam!ops=11111111-2222-3333-4444-555555555555",
        timeout=30.0,
    )


@pytest.fixture
def fake_client():
    return FakePveClient(
        containers={
            100: {"status": "stopped", "name": "dns"},
            101: {"status": "running", "name": "proxy"},
            400: {"status": "running", "name": "web"},
        },
        vms={
            300: {"status": "running", "name": "win11"},
            301: {"status": "stopped", "name": "debian"},
        },
    )
