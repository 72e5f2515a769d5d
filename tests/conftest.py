from pathlib import Path

import pytest

from blu.domain.events.event import BluEvent


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Isolated workspace root for tests.

    Tests should never write outside tmp_path.
    """
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def utf8() -> str:
    """Canonical encoding used throughout tests."""
    return "utf-8"


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Prevent tests from reading the developer's ~/.blu/config.yml.

    If a test needs a user config, it should write one under this home.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


class RecordingObserver:
    """Observer that keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: list[BluEvent] = []

    def on_event(self, event: BluEvent) -> None:
        self.events.append(event)


@pytest.fixture
def recording_observer() -> RecordingObserver:
    return RecordingObserver()
