#!/usr/bin/env python3
"""
pve-manage: Start, stop, shut down, reboot or reset a Proxmox VE entity

Usage: ./main.py <VMID> <start|stop|reboot|shutdown|reset>

The VMID may belong to an LXC container or a QEMU virtual machine; its type is
detected automatically. The API token is read from a '.secret.sh' file next to
this script or from the TOKEN environment variable.
"""

import sys

from pve_manage.main import main

if __name__ == "__main__":
    sys.exit(main())
