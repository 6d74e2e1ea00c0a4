from __future__ import annotations

import os
import shlex
import shutil
import tempfile
from typing import Any, Callable, Optional

from ..domain.errors import ResourceActionError
from ..guard.translator import translate_command_block
from .base import AttributeSpec
from .execute import Execute


class Script(Execute):
    """Execute resource whose body is ``code`` run by an interpreter.

    Setting ``guard_interpreter`` makes raw only_if/not_if commands run as the
    ``code`` of an anonymous resource of that type, with this resource's
    process options inherited.
    """

    resource_name = "script"
    ATTRIBUTES = {
        "code": AttributeSpec(kind_of=(str,)),
        "interpreter": AttributeSpec(kind_of=(str,)),
        "flags": AttributeSpec(kind_of=(str,)),
        "guard_interpreter": AttributeSpec(kind_of=(str,)),
    }
    SCRIPT_SUFFIX = ""
    guard_inherited_attributes = ("cwd", "environment", "group", "path", "user", "umask")

    def only_if(
        self,
        command: Optional[str] = None,
        block: Optional[Callable[[], Any]] = None,
        **opts: Any,
    ) -> None:
        translated_command, translated_block = translate_command_block(self, command, block)
        super().only_if(translated_command, translated_block, **opts)

    def not_if(
        self,
        command: Optional[str] = None,
        block: Optional[Callable[[], Any]] = None,
        **opts: Any,
    ) -> None:
        translated_command, translated_block = translate_command_block(self, command, block)
        super().not_if(translated_command, translated_block, **opts)

    def script_body(self) -> str:
        return self.get("code") or ""

    def interpreter_command(self, script_path: str) -> str:
        interpreter = self.get("interpreter")
        if not interpreter:
            raise ResourceActionError(f"{self} requires an interpreter")
        parts = [interpreter, self.get("flags"), shlex.quote(script_path)]
        return " ".join(part for part in parts if part)

    def action_run(self) -> bool:
        if self.already_created():
            return False

        fd, script_path = tempfile.mkstemp(prefix="convergekit-script-", suffix=self.SCRIPT_SUFFIX)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(self.script_body())
            if self.get("user") or self.get("group"):
                shutil.chown(script_path, user=self.get("user"), group=self.get("group"))
            return self.run_command(self.interpreter_command(script_path))
        finally:
            os.unlink(script_path)


class Bash(Script):
    resource_name = "bash"
    ATTRIBUTES = {
        "interpreter": AttributeSpec(default="bash", kind_of=(str,)),
    }
