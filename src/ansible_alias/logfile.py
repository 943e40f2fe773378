"""Per-run log files for playbook runs.

Each run writes to <log_dir>/<name>-<timestamp>.log (Ansible does the
writing via ANSIBLE_LOG_PATH) and <log_dir>/<name>-latest.log is
repointed at it.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"


@dataclass(frozen=True)
class LogFile:
    name: str
    path: Path
    latest: Path


def plan_log(playbook: str, log_dir: Path, now: datetime | None = None) -> LogFile:
    """Compute log paths for a playbook without touching the filesystem.

    Args:
        playbook: Playbook path or name; only the stem is used
        log_dir: Directory that holds the logs
        now: Timestamp to use (defaults to the current local time)
    """
    name = Path(playbook).stem
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    return LogFile(
        name=name,
        path=log_dir / f"{name}-{stamp}.log",
        latest=log_dir / f"{name}-latest.log",
    )


def prepare_log(log: LogFile) -> None:
    """Create the log directory and point the latest symlink at log.path.

    OSError from either step propagates.
    """
    log.path.parent.mkdir(parents=True, exist_ok=True)

    if log.latest.is_symlink() or log.latest.exists():
        log.latest.unlink()
    # Both live in log_dir; a bare name keeps the link valid for relative dirs.
    os.symlink(log.path.name, log.latest)
    logger.debug("Linked %s -> %s", log.latest, log.path)
