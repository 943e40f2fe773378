"""Argument classification for ansible-alias.

The wrapper is meant to be invoked through a symlink named after an
inventory host or group:

    webservers ping                 # ansible webservers -m ping
    webservers shell "uptime"       # ansible webservers -m shell -a uptime
    webservers deploy               # ansible-playbook --limit webservers ansible/deploy.yml
    webservers deploy -- -e x=1     # extra arguments forwarded verbatim

Flags are only recognised before the first "--" and before a third
non-flag token; everything from there on is passed through untouched.
"""

import os
from dataclasses import dataclass, field

from ansible_alias.errors import IdentityError, UsageError

PROG = "ansible-alias"

# Names the wrapper has when run directly rather than through a symlink.
OWN_NAMES = frozenset({PROG, "__main__.py"})

HELP_FLAGS = ("-h", "--help")
DRY_RUN_FLAGS = ("-n", "--dry-run", "--dryrun")
RETRY_FLAGS = ("-r", "--retry")
TARGET_FLAGS = ("-t", "--target")


@dataclass
class ParsedArgs:
    positionals: list[str] = field(default_factory=list)
    passthrough: list[str] = field(default_factory=list)
    dry_run: bool = False
    retry: bool = False
    help: bool = False
    target: str | None = None


def parse_args(argv: list[str]) -> ParsedArgs:
    """Split argv into flags, up to two positionals and passthrough args.

    Raises:
        UsageError: On an unknown flag or a --target without a value.
    """
    parsed = ParsedArgs()

    # Help wins wherever it appears before the separator.
    head = argv[:argv.index("--")] if "--" in argv else argv
    if any(arg in HELP_FLAGS for arg in head):
        parsed.help = True
        return parsed

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            parsed.passthrough.extend(argv[i + 1:])
            break
        if len(parsed.positionals) == 2:
            parsed.passthrough.extend(argv[i:])
            break

        if arg in DRY_RUN_FLAGS:
            parsed.dry_run = True
        elif arg in RETRY_FLAGS:
            parsed.retry = True
        elif arg in TARGET_FLAGS:
            if i + 1 >= len(argv):
                raise UsageError(f"{arg} requires a value")
            i += 1
            parsed.target = argv[i]
        elif arg.startswith("--target="):
            parsed.target = arg.split("=", 1)[1]
            if not parsed.target:
                raise UsageError("--target requires a value")
        elif arg.startswith("-"):
            raise UsageError(f"Unknown option: {arg}")
        else:
            parsed.positionals.append(arg)
        i += 1

    return parsed


def resolve_target(parsed: ParsedArgs, prog: str) -> str:
    """Return the target name: --target if given, else the invocation name.

    Raises:
        IdentityError: If run under the wrapper's own name with no --target.
    """
    if parsed.target:
        return parsed.target

    name = os.path.basename(prog)
    if not name or name in OWN_NAMES:
        raise IdentityError(
            f"{PROG} must be invoked through a symlink named after an "
            f"inventory host or group (e.g. ln -s $(which {PROG}) webservers), "
            f"or given --target NAME"
        )
    return name


def format_usage(prog: str, playbooks: list[str]) -> str:
    """Usage text, listing the playbooks that can be run by name."""
    name = os.path.basename(prog) or PROG
    lines = [
        f"usage: {name} [-n] [-r] [-t TARGET] {{module|playbook}} [arg] [-- args...]",
        "",
        "  module arg        run an ad-hoc module with a single argument string",
        "  module            run an ad-hoc module without arguments",
        "  playbook          run a playbook file or a playbook by name",
        "",
        "options:",
        "  -h, --help        show this help and exit",
        "  -n, --dry-run     print the command instead of running it",
        "  -r, --retry       limit a playbook run to the hosts in its .retry file",
        "  -t, --target NAME target host or group (default: invoked name)",
        "",
    ]
    if playbooks:
        lines.append("playbooks:")
        lines.extend(f"  {p}" for p in playbooks)
    else:
        lines.append("playbooks: (none found)")
    return "\n".join(lines)
