"""Tests for logfile.py — log paths and the latest symlink."""

import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from ansible_alias.logfile import plan_log, prepare_log


def test_plan_log_strips_extension():
    log = plan_log("ansible/site.yml", Path("/logs"), datetime(2023, 12, 31, 23, 59, 1))
    assert log.name == "site"
    assert log.path == Path("/logs/site-2023-12-31-23-59-01.log")
    assert log.latest == Path("/logs/site-latest.log")


def test_prepare_log_creates_dir_and_symlink():
    with tempfile.TemporaryDirectory() as d:
        log_dir = Path(d) / "nested" / "log"
        log = plan_log("deploy.yml", log_dir, datetime(2024, 1, 1, 0, 0, 0))
        prepare_log(log)
        assert log_dir.is_dir()
        assert log.latest.is_symlink()
        assert os.readlink(log.latest) == log.path.name


def test_prepare_log_replaces_previous_symlink():
    with tempfile.TemporaryDirectory() as d:
        log_dir = Path(d)
        first = plan_log("deploy.yml", log_dir, datetime(2024, 1, 1, 0, 0, 0))
        second = plan_log("deploy.yml", log_dir, datetime(2024, 1, 2, 0, 0, 0))
        prepare_log(first)
        prepare_log(second)
        assert os.readlink(second.latest) == second.path.name


def test_prepare_log_dir_uncreatable():
    with tempfile.NamedTemporaryFile() as f:
        log = plan_log("deploy.yml", Path(f.name) / "log")
        with pytest.raises(OSError):
            prepare_log(log)


def test_prepare_log_relative_dir(tmp_path, monkeypatch):
    """The latest link resolves to the log file when log_dir is relative."""
    monkeypatch.chdir(tmp_path)
    log = plan_log("deploy.yml", Path("log"), datetime(2024, 1, 1, 0, 0, 0))
    prepare_log(log)
    log.path.write_text("PLAY [all]\n")
    assert log.latest.exists()
    assert log.latest.read_text() == "PLAY [all]\n"
