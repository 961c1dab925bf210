"""Shared test fixtures for tracerelay test suite."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from tracerelay.lib.trace_lib import TraceFacade, TraceOptions
from tracerelay.lib.trace_lib import manager as _manager_mod


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: tests that spawn subprocesses or touch many files")


# ---------------------------------------------------------------------------
# Recording listeners
# ---------------------------------------------------------------------------
class RecordingListener:
    """Listener that records every call into a shared, ordered journal.

    Each entry is ``(listener_name, operation, args)``; ``log`` holds the
    values passed to write()/write_line() for this listener only.
    """

    def __init__(self, name, journal):
        self.name = name
        self.journal = journal
        self.log = []
        self.indent_level = 0
        self.indent_size = 4

    def _record(self, operation, *args):
        self.journal.append((self.name, operation, args))

    def write(self, value, category=None):
        self.log.append(value)
        self._record("write", value, category)

    def write_line(self, value, category=None):
        self.log.append(value)
        self._record("write_line", value, category)

    def flush(self):
        self._record("flush")

    def close(self):
        self._record("close")

    def ops(self):
        """Operations this listener saw, in order."""
        return [op for name, op, _ in self.journal if name == self.name]


class FailingListener(RecordingListener):
    """RecordingListener whose chosen operations raise RuntimeError."""

    def __init__(self, name, journal, fail_on=("write", "write_line")):
        super().__init__(name, journal)
        self.fail_on = set(fail_on)

    def _record(self, operation, *args):
        super()._record(operation, *args)
        if operation in self.fail_on:
            raise RuntimeError(f"{self.name} cannot {operation}")


@pytest.fixture
def journal():
    """Shared call journal for RecordingListeners."""
    return []


@pytest.fixture
def make_listener(journal):
    """Factory for RecordingListeners that share the journal."""
    def _make(name):
        return RecordingListener(name, journal)
    return _make


@pytest.fixture
def make_failing(journal):
    """Factory for FailingListeners that share the journal."""
    def _make(name, fail_on=("write", "write_line")):
        return FailingListener(name, journal, fail_on=fail_on)
    return _make


@pytest.fixture
def options():
    """Default options with every severity gate open."""
    opts = TraceOptions()
    opts.set_level("verbose")
    return opts


@pytest.fixture
def facade(options):
    """A TraceFacade with no listeners that only records failures."""
    return TraceFacade(options, on_failure=False)


@pytest.fixture(autouse=True)
def _reset_default_facade():
    """Keep the module-level facade isolated between tests."""
    old = _manager_mod._facade
    _manager_mod._facade = None
    yield
    _manager_mod._facade = old


# ---------------------------------------------------------------------------
# Temporary directory fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def tmp_config_home(tmp_path):
    """Provide a temporary home directory for ~/.tracerelay/config.json."""
    home = tmp_path / "home"
    home.mkdir()
    with patch.dict(os.environ, {"HOME": str(home), "USERPROFILE": str(home)}):
        with patch("pathlib.Path.home", return_value=home):
            yield home


@pytest.fixture
def tmp_project(tmp_path):
    """Provide an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def sample_project_config(tmp_project):
    """Write a .tracerelay.json file in the tmp project."""
    config = {
        "level": "info",
        "auto_flush": True,
        "listeners": ["memory"],
    }
    path = tmp_project / ".tracerelay.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path, config


@pytest.fixture
def sample_global_config(tmp_config_home):
    """Write a global config file in the tmp home."""
    config_dir = tmp_config_home / ".tracerelay"
    config_dir.mkdir()
    config = {
        "level": "error",
        "mirror_to_system_trace": True,
        "indent_size": 2,
        "listeners": ["stderr"],
    }
    path = config_dir / "config.json"
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    return path, config
