"""CLI entry point for ansible-alias.

Install once, then symlink it under the names of inventory hosts or
groups:

    ln -s $(which ansible-alias) ~/bin/webservers
    webservers ping
    webservers deploy
"""

import asyncio
import logging
import sys

from ansible_alias.cli import format_usage, parse_args, resolve_target
from ansible_alias.command import build_command, resolve_mode
from ansible_alias.config import load_config
from ansible_alias.errors import AliasError, UsageError
from ansible_alias.runner import EXIT_INTERRUPTED, make_command_notifier, run_command


def main(args: list[str] | None = None, prog: str | None = None) -> int:
    """Main CLI entry point."""
    if args is None:
        args = sys.argv[1:]
    if prog is None:
        prog = sys.argv[0]

    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(name)s: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        parsed = parse_args(args)
        if parsed.help:
            print(format_usage(prog, config.available_playbooks()), file=sys.stderr)
            return 1

        target = resolve_target(parsed, prog)
        mode = resolve_mode(parsed.positionals, config.playbook_dir)
    except UsageError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        print(format_usage(prog, config.available_playbooks()), file=sys.stderr)
        return e.exit_code
    except AliasError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code

    command = build_command(
        mode,
        target,
        config,
        passthrough=parsed.passthrough,
        retry=parsed.retry,
    )
    notify = make_command_notifier(config.notify_command) if config.notify_command else None

    try:
        return asyncio.run(
            run_command(command, target, dry_run=parsed.dry_run, notify=notify)
        )
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
