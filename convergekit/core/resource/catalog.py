from __future__ import annotations

from .execute import Execute
from .powershell_script import PowershellScript
from .registry import ResourceRegistry
from .script import Bash, Script


def build_default_registry() -> ResourceRegistry:
    registry = ResourceRegistry()
    registry.register("execute", Execute)
    registry.register("script", Script)
    registry.register("bash", Bash)
    registry.register("powershell_script", PowershellScript, platform_families=["windows"])
    return registry


default_resource_registry = build_default_registry()

__all__ = ["build_default_registry", "default_resource_registry"]
