"""Tests for resolve_family."""

import pytest

from conftest import FakePveClient
from pve_manage.errors import NotFoundError, TransportError
from pve_manage.models import Family
from pve_manage.resolver import resolve_family


class TestResolveFamily:
    """Tests for resolve_family."""

    @pytest.mark.parametrize("vmid", [100, 101, 400])
    def test_container(self, fake_client, vmid):
        """IDs in the container listing resolve to CONTAINER."""
        assert resolve_family(fake_client, vmid) is Family.CONTAINER

    @pytest.mark.parametrize("vmid", [300, 301])
    def test_virtual_machine(self, fake_client, vmid):
        """IDs in the VM listing resolve to VIRTUAL_MACHINE."""
        assert resolve_family(fake_client, vmid) is Family.VIRTUAL_MACHINE

    def test_not_found(self, fake_client):
        """IDs in neither listing raise NotFoundError."""
        with pytest.raises(NotFoundError) as exc:
            resolve_family(fake_client, 200)
        assert "200 not found" in str(exc.value)
        assert "node pve" in str(exc.value)

    def test_fetches_both_listings(self, fake_client):
        """Both listings are fetched even when the container listing matches."""
        resolve_family(fake_client, 100)
        assert fake_client.calls == [("list", Family.CONTAINER), ("list", Family.VIRTUAL_MACHINE)]

    def test_empty_node(self):
        """A node without entities finds nothing."""
        with pytest.raises(NotFoundError):
            resolve_family(FakePveClient(), 100)

    def test_listing_failure(self):
        """A failed listing propagates TransportError."""
        client = FakePveClient(containers={100: {"status": "running"}}, fail_on="list")
        with pytest.raises(TransportError):
            resolve_family(client, 100)
