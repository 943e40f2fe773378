"""Mode resolution and command construction.

Everything here is pure apart from existence checks on playbook and
retry files: build_command() returns the argv and environment for the
child and never runs anything.
"""

import logging
import os
import shlex
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ansible_alias.config import Config
from ansible_alias.errors import UsageError
from ansible_alias.logfile import LogFile, plan_log

logger = logging.getLogger(__name__)

ADHOC = "adhoc"
PLAYBOOK = "playbook"


@dataclass(frozen=True)
class Mode:
    kind: str
    module: str | None = None
    module_arg: str | None = None
    playbook: str | None = None


@dataclass
class Command:
    argv: list[str]
    env: dict[str, str]
    label: str
    mode: Mode
    log: LogFile | None = None

    def shell_line(self) -> str:
        """The command as a copy-pasteable shell line, env overrides first."""
        env = " ".join(f"{k}={shlex.quote(v)}" for k, v in self.env.items())
        line = shlex.join(self.argv)
        return f"{env} {line}" if env else line


def resolve_mode(positionals: list[str], playbook_dir: Path) -> Mode:
    """Decide between an ad-hoc module run and a playbook run.

    Raises:
        UsageError: If no positional arguments were given.
    """
    if not positionals:
        raise UsageError("Missing module or playbook")

    if len(positionals) == 2:
        module, module_arg = positionals
        return Mode(ADHOC, module=module, module_arg=module_arg)

    name = positionals[0]
    if os.path.isfile(name):
        return Mode(PLAYBOOK, playbook=name)

    candidate = playbook_dir / f"{name}.yml"
    if candidate.is_file():
        return Mode(PLAYBOOK, playbook=str(candidate))

    return Mode(ADHOC, module=name)


def retry_file(playbook: str) -> Path:
    """Ansible's retry file for a playbook: same directory, .retry suffix."""
    return Path(playbook).with_suffix(".retry")


def build_command(
    mode: Mode,
    target: str,
    config: Config,
    passthrough: list[str] | None = None,
    retry: bool = False,
    now: datetime | None = None,
) -> Command:
    """Build the ansible or ansible-playbook command for a resolved mode.

    Args:
        mode: Result of resolve_mode()
        target: Target name (invocation name or --target)
        config: Loaded configuration
        passthrough: Arguments appended verbatim
        retry: Narrow a playbook run with its .retry file, if present
        now: Timestamp for the log file name

    Returns:
        Command with argv, environment overrides and (playbooks only) log paths
    """
    passthrough = list(passthrough or [])
    pattern = config.host_pattern(target)
    inventory = str(config.inventory)

    if mode.kind == ADHOC:
        argv = ["ansible", pattern, "-i", inventory, "-m", mode.module]
        if mode.module_arg is not None:
            argv += ["-a", mode.module_arg]
        argv += passthrough
        return Command(
            argv=argv,
            env=config.environment(adhoc=True),
            label=mode.module,
            mode=mode,
        )

    log = plan_log(mode.playbook, config.log_dir, now)
    argv = ["ansible-playbook", "-i", inventory, "--limit", pattern]
    if retry:
        retry_path = retry_file(mode.playbook)
        if retry_path.is_file():
            argv += ["--limit", f"@{retry_path}"]
        else:
            logger.warning("No retry file at %s, running against %s", retry_path, pattern)
    argv.append(mode.playbook)
    argv += passthrough

    env = config.environment(adhoc=False)
    env["ANSIBLE_LOG_PATH"] = str(log.path)

    return Command(
        argv=argv,
        env=env,
        label=log.name,
        mode=mode,
        log=log,
    )
