from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence

POWER = "power"
REMOVE = "remove"
UNKNOWN = "unknown"

POWER_COMMANDS = {"reboot", "shutdown", "poweroff", "halt"}

@dataclass
class Advisory:
    kind: str
    command: str
    args: List[str] = field(default_factory=list)
    targets: List[str] = field(default_factory=list)

def _is_recursive_flag(arg: str) -> bool:
    if arg == "--recursive":
        return True
    if arg.startswith("--") or not arg.startswith("-"):
        return False
    return "r" in arg[1:] or "R" in arg[1:]

def _split_rm_args(args: Sequence[str]):
    options: List[str] = []
    paths: List[str] = []
    only_paths = False
    for a in args:
        if only_paths:
            paths.append(a)
        elif a == "--":
            only_paths = True
        elif a.startswith("-") and a != "-":
            options.append(a)
        else:
            paths.append(a)
    return options, paths

def classify(argv: Sequence[str]) -> Advisory:
    """Map a command line onto the advisory that should be shown for it."""
    if not argv:
        return Advisory(UNKNOWN, "")
    cmd, args = argv[0], list(argv[1:])

    if cmd in POWER_COMMANDS:
        return Advisory(POWER, cmd, args)

    if cmd == "rm":
        options, paths = _split_rm_args(args)
        if paths and any(_is_recursive_flag(o) for o in options):
            return Advisory(REMOVE, cmd, args, paths)

    return Advisory(UNKNOWN, cmd, args)
