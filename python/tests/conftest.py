"""
Pytest configuration and shared fakes for the notification bridge.
"""

from __future__ import annotations

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, Iterator, List, Optional

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from wslnotify.notification_sink import SinkOutcome  # noqa: E402

SINK_TEMP_DIRECTORY = "C:\\Users\\me\\AppData\\Local\\Temp"


class FakeSink:
    """Notification sink that records documents and returns a canned outcome."""

    def __init__(self, outcome: Optional[SinkOutcome] = None) -> None:
        self.outcome = outcome or SinkOutcome(exit_status=0)
        self.documents: List[str] = []

    def show(self, document: str) -> SinkOutcome:
        self.documents.append(document)
        return self.outcome


class FakeRelocator:
    """Relocator that maps paths through a fixed table."""

    def __init__(self, mapping: Optional[Dict[str, str]] = None) -> None:
        self.mapping = mapping or {}
        self.calls: List[str] = []

    def relocate(self, path: str) -> Optional[str]:
        self.calls.append(path)
        return self.mapping.get(path)


class FakeTranslator:
    """Path translator that maps the sink temp directory onto a local folder."""

    def __init__(self, caller_directory: Path) -> None:
        self.caller_directory = caller_directory
        self.temp_lookups = 0

    def sink_temp_directory(self) -> str:
        self.temp_lookups += 1
        return SINK_TEMP_DIRECTORY

    def to_caller_namespace(self, path: str) -> str:
        assert path == SINK_TEMP_DIRECTORY
        return str(self.caller_directory)

    def to_sink_namespace(self, path: str) -> str:
        relative = Path(path).relative_to(self.caller_directory)
        return SINK_TEMP_DIRECTORY + "\\" + str(relative)


@pytest.fixture
def socket_dir() -> Iterator[Path]:
    """Short directory for Unix sockets, which have a small path length limit."""
    directory = Path(tempfile.mkdtemp(prefix="wsln-", dir="/tmp"))
    try:
        yield directory
    finally:
        shutil.rmtree(directory, ignore_errors=True)
