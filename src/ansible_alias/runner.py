"""Run (or print) a built command.

The child inherits stdin/stdout/stderr and gets a copy of the current
environment with the command's overrides applied; os.environ itself is
left alone.
"""

import asyncio
import logging
import os
import sys
from typing import Awaitable, Callable, Mapping

from ansible_alias.command import Command
from ansible_alias.logfile import prepare_log

logger = logging.getLogger(__name__)

Notifier = Callable[[str], Awaitable[None]]

# What a shell returns when the executable can't be found.
EXIT_NOT_FOUND = 127

# 128 + SIGINT
EXIT_INTERRUPTED = 130


def child_environment(overrides: Mapping[str, str], base: Mapping[str, str] | None = None) -> dict[str, str]:
    env = dict(os.environ if base is None else base)
    env.update(overrides)
    return env


async def execute(command: Command) -> int:
    """Start the child and wait for it. Returns its exit status."""
    logger.debug("Running: %s", command.shell_line())
    try:
        proc = await asyncio.create_subprocess_exec(
            *command.argv,
            env=child_environment(command.env),
        )
    except FileNotFoundError:
        print(f"ERROR: {command.argv[0]}: command not found", file=sys.stderr)
        return EXIT_NOT_FOUND
    rc = await proc.wait()
    if rc < 0:
        # Killed by signal N; report it the way a shell does.
        rc = 128 - rc
    return rc


def make_command_notifier(notify_command: str) -> Notifier:
    """Notifier that runs an external command with the message as its argument."""
    async def notify(message: str) -> None:
        try:
            proc = await asyncio.create_subprocess_exec(notify_command, message)
        except FileNotFoundError:
            logger.warning("Notification command not found: %s", notify_command)
            return
        rc = await proc.wait()
        if rc != 0:
            logger.warning("Notification command %s exited with %d", notify_command, rc)

    return notify


async def run_command(
    command: Command,
    target: str,
    dry_run: bool = False,
    notify: Notifier | None = None,
) -> int:
    """Run a command the way the CLI does.

    Args:
        command: Output of build_command()
        target: Target name, used in the completion message
        dry_run: Print the command line instead of running it
        notify: Called with a completion message after a successful run

    Returns:
        The child's exit status (0 for a dry run)
    """
    if dry_run:
        print(command.shell_line())
        return 0

    if command.log is not None:
        prepare_log(command.log)

    rc = await execute(command)
    if rc != 0:
        logger.debug("%s exited with %d", command.argv[0], rc)
        return rc

    if command.log is not None:
        print(f"Log: {command.log.path}")

    if notify is not None:
        await notify(f"{command.label} finished on {target}")

    return rc
