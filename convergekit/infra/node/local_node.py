from __future__ import annotations

import platform
import socket
import sys

from convergekit.core.domain.models import Node


def platform_family_for(sys_platform: str) -> str:
    if sys_platform.startswith("win"):
        return "windows"
    if sys_platform == "darwin":
        return "mac_os_x"
    return "linux"


def detect_local_node() -> Node:
    """Describe the machine this process runs on."""
    family = platform_family_for(sys.platform)
    return Node(
        name=socket.gethostname(),
        platform=family,
        platform_family=family,
        attributes={
            "os": platform.system().lower(),
            "platform_version": platform.release(),
            "machine": platform.machine(),
        },
    )
