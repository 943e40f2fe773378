"""Environment-driven configuration for ansible-alias.

All settings are read once from the process environment:

- ANSIBLE_ALIAS_ROOT: directory holding ansible/inventory and ansible/*.yml
- ANSIBLE_ALIAS_LOG_DIR: where run logs go (default ~/log)
- ANSIBLE_ALIAS_TARGETS: name=pattern pairs, comma separated
- ANSIBLE_ALIAS_NOTIFY: command invoked after a successful run
- ANSIBLE_ALIAS_LOG_LEVEL: diagnostic log level (default WARNING)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

# Applied to every child, ad-hoc or playbook.
ANSIBLE_ENVIRONMENT = {
    "ANSIBLE_PIPELINING": "True",
    "ANSIBLE_SSH_ARGS": "-o ControlMaster=auto -o ControlPersist=60s",
    "ANSIBLE_STRATEGY": "free",
    "ANSIBLE_STDOUT_CALLBACK": "debug",
    "ANSIBLE_NO_TARGET_SYSLOG": "True",
}

# ansible(1) ignores callback plugins unless told otherwise.
ADHOC_ENVIRONMENT = {
    "ANSIBLE_LOAD_CALLBACK_PLUGINS": "True",
}


def parse_targets(value: str) -> dict[str, str]:
    """Parse "name=pattern,name=pattern" into a lookup table.

    Empty entries are ignored. A bare name maps to itself.
    """
    targets: dict[str, str] = {}
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, pattern = entry.partition("=")
        name = name.strip()
        targets[name] = pattern.strip() if sep and pattern.strip() else name
    return targets


def parse_log_level(value: str) -> str:
    """Normalise a level name; unknown or empty names fall back to WARNING."""
    name = value.strip().upper()
    if name and isinstance(logging.getLevelName(name), int):
        return name
    return "WARNING"


@dataclass(frozen=True)
class Config:
    root: Path
    log_dir: Path
    targets: dict[str, str] = field(default_factory=dict)
    notify_command: str | None = None
    log_level: str = "WARNING"

    @property
    def ansible_dir(self) -> Path:
        return self.root / "ansible"

    @property
    def inventory(self) -> Path:
        return self.ansible_dir / "inventory"

    @property
    def playbook_dir(self) -> Path:
        return self.ansible_dir

    def host_pattern(self, target: str) -> str:
        """Map a target name to the inventory pattern Ansible should use."""
        return self.targets.get(target, target)

    def environment(self, adhoc: bool) -> dict[str, str]:
        """Environment overrides for a child of the given mode."""
        env = dict(ANSIBLE_ENVIRONMENT)
        if adhoc:
            env.update(ADHOC_ENVIRONMENT)
        return env

    def available_playbooks(self) -> list[str]:
        """Names of the playbooks in the playbook directory, sorted."""
        if not self.playbook_dir.is_dir():
            return []
        return sorted(p.stem for p in self.playbook_dir.glob("*.yml"))


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build a Config from environment variables."""
    if environ is None:
        environ = os.environ

    root = Path(environ.get("ANSIBLE_ALIAS_ROOT") or os.getcwd())
    log_dir = Path(environ.get("ANSIBLE_ALIAS_LOG_DIR") or "~/log").expanduser()

    return Config(
        root=root,
        log_dir=log_dir,
        targets=parse_targets(environ.get("ANSIBLE_ALIAS_TARGETS", "")),
        notify_command=environ.get("ANSIBLE_ALIAS_NOTIFY") or None,
        log_level=parse_log_level(environ.get("ANSIBLE_ALIAS_LOG_LEVEL", "")),
    )
