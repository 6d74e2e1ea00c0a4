"""Check one only_if / not_if guard against the local machine.

Purpose:
  - Decide whether a resource action would run, given a single guard command.
Inputs:
  - CLI args (guard command, guard interpreter, process options, config path).
Outputs:
  - CONTINUE=1|0 on stdout; exit status 0 when the action would run, 1 otherwise.
Example:
  - python3 -m convergekit.cli.check_guard --only-if "test -f /tmp/x" --guard-interpreter bash
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from convergekit.app_api.factories import build_parent_resource, build_run_context
from convergekit.app_api.guard_config import DEFAULT_GUARD_CONFIG, GuardConfig, load_guard_config
from convergekit.cli._debug_utils import _dbg, _debug_enabled
from convergekit.core.guard.evaluator import set_guard_debug
from convergekit.core.resource.ports.command_runner_port import CommandRunner


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate a single resource guard")
    guard = parser.add_mutually_exclusive_group(required=True)
    guard.add_argument("--only-if", dest="only_if", help="Run the action only if this command succeeds")
    guard.add_argument("--not-if", dest="not_if", help="Run the action only if this command fails")
    parser.add_argument("--config", help="Path to guard config JSON")
    parser.add_argument("--resource-type", help="Type of the guarded resource (default: bash)")
    parser.add_argument("--guard-interpreter", help="Resource type used to run the guard command")
    parser.add_argument("--cwd")
    parser.add_argument("--user")
    parser.add_argument("--group")
    parser.add_argument("--timeout", type=float)
    parser.add_argument("--env", action="append", default=[], help="KEY=VALUE, repeatable")
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args(argv)


def parse_env(pairs: Sequence[str]) -> dict[str, str]:
    environment: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"--env expects KEY=VALUE, got: {pair}")
        key, value = pair.split("=", 1)
        if not key:
            raise ValueError(f"--env key must be non-empty: {pair}")
        environment[key] = value
    return environment


def build_config(args: argparse.Namespace) -> GuardConfig:
    config = load_guard_config(args.config) if args.config else DEFAULT_GUARD_CONFIG
    environment = dict(config.environment)
    environment.update(parse_env(args.env))
    return config.with_overrides(
        resource_type=args.resource_type,
        guard_interpreter=args.guard_interpreter,
        cwd=args.cwd,
        user=args.user,
        group=args.group,
        timeout=args.timeout,
        environment=environment,
    )


def main(argv: Optional[Sequence[str]] = None, runner: Optional[CommandRunner] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if _debug_enabled(args) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = build_config(args)
    run_context = build_run_context(runner=runner)
    resource = build_parent_resource(config, run_context)

    if _debug_enabled(args):
        set_guard_debug(lambda msg: _dbg(args, msg))
    try:
        if args.only_if is not None:
            resource.only_if(args.only_if)
        else:
            resource.not_if(args.not_if)
        _dbg(args, f"RESOURCE={resource} GUARD={resource.guards[-1].description}")
        skip = resource.should_skip(resource.action)
    finally:
        set_guard_debug(None)

    print(f"CONTINUE={0 if skip else 1}")
    return 1 if skip else 0


if __name__ == "__main__":
    raise SystemExit(main())
