"""
Pytest configuration and shared fixtures for the devpush test suite.
"""

from pathlib import Path
import shutil
import tempfile
from typing import List, Optional

from click.testing import CliRunner
import pytest
import yaml

from devpush.config.settings import PushConfig
from devpush.core.sync_engine import RsyncTransfer, Transfer
from devpush.core.watcher import ChangeWatcher


class FakeTransfer(Transfer):
    """Records every transfer instead of running rsync."""

    def __init__(self, exit_codes: Optional[List[int]] = None):
        self.exit_codes = list(exit_codes or [])
        self.calls = []

    def command(self, source, destination, excludes, flags):
        return RsyncTransfer().command(source, destination, excludes, flags)

    def run(self, source, destination, excludes, flags):
        self.calls.append(
            {
                "source": source,
                "destination": destination,
                "excludes": list(excludes),
                "flags": list(flags),
            }
        )
        return self.exit_codes.pop(0) if self.exit_codes else 0


class FakeWatcher(ChangeWatcher):
    """Replays scripted change events, then simulates Ctrl-C."""

    def __init__(self, events: Optional[List[str]] = None):
        self.events = list(events or [])
        self.armed: List[List[str]] = []
        self.closed = False

    def arm(self, paths):
        self.armed.append(list(paths))

    def wait_for_change(self, timeout=None):
        if not self.events:
            raise KeyboardInterrupt
        return self.events.pop(0)

    def close(self):
        self.closed = True


class FakeLister:
    """Returns a fixed tracked file set and counts queries."""

    def __init__(self, files: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.files = list(files or [])
        self.error = error
        self.calls = 0

    def list_files(self) -> List[str]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.files)


@pytest.fixture
def cli_runner():
    """Provide a Click CLI runner for testing CLI commands."""
    from rich.console import Console

    class TestCliRunner(CliRunner):
        def invoke(self, cli, args=None, **kwargs):
            # Provide a console object in the context if not already provided
            obj = kwargs.setdefault("obj", {})
            obj.setdefault("console", Console(force_terminal=False, width=200))
            return super().invoke(cli, args, **kwargs)

    return TestCliRunner()


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after the test."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def home_dir(temp_dir):
    """A fake home directory containing a project checkout."""
    home = temp_dir.resolve() / "home" / "dev"
    (home / "proj" / "src").mkdir(parents=True)
    (home / "proj" / "src" / "main.rs").write_text("fn main() {}\n")
    return home


@pytest.fixture
def project_dir(home_dir, monkeypatch):
    """Run the test from inside the project checkout."""
    project = home_dir / "proj"
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def push_config():
    """Configuration rooted at /home/dev with the default host."""
    config = PushConfig()
    config.home = Path("/home/dev")
    return config


@pytest.fixture
def sample_config_data():
    """Provide a sample devpush configuration for testing."""
    return {
        "remote": {"default_host": "rome", "domain": "example.test"},
        "transfer": {"excludes": [".git", "target"], "compress": True, "extra_args": ["-e", "ssh"]},
        "logging": {"level": "DEBUG", "file": None},
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Create a temporary devpush configuration file."""
    path = temp_dir / "devpush.yaml"
    with open(path, "w") as f:
        yaml.dump(sample_config_data, f)
    return path


@pytest.fixture
def fake_transfer():
    return FakeTransfer()


@pytest.fixture
def fakes():
    """Expose the fake collaborator classes to tests."""

    class Fakes:
        Transfer = FakeTransfer
        Watcher = FakeWatcher
        Lister = FakeLister

    return Fakes
