"""Pytest configuration and fixtures for speech2text tests."""

import logging
import tempfile
import threading
from pathlib import Path

import pytest
from pubsub import pub

from speech2text.models.session import Mode, Session


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without external processes")
    config.addinivalue_line("markers", "integration: tests that run threads or subprocesses")


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def media_tree(temp_data_dir):
    """Directory with sub-directories, media files and other files."""
    root = Path(temp_data_dir)
    (root / "clips").mkdir()
    (root / "Archive").mkdir()
    (root / ".hidden_dir").mkdir()
    (root / "clips" / "nested.wav").write_bytes(b"RIFF")
    for name in ["talk.mp3", "Lecture.MP4", "notes.txt", "b_interview.wav", ".secret.mp3"]:
        (root / name).write_bytes(b"\x00" * 16)
    return root


@pytest.fixture(autouse=True)
def clean_pubsub():
    """Drop every pub/sub subscription a test made."""
    yield
    pub.unsubAll()


@pytest.fixture
def restore_root_logger():
    """Keep tests that configure logging from leaking handlers."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class FakeJobRunner:
    """Records start requests instead of running anything."""

    def __init__(self):
        self.started = []
        self.cancelled = False

    def start(self, input_path):
        self.started.append(input_path)

    def cancel(self):
        self.cancelled = True


class StubBrowser:
    """File browser stand-in that selects a path when told to."""

    def __init__(self, select_on=None, path="/media/talk.mp3"):
        self.select_on = select_on or ("enter",)
        self.path = path
        self.keys = []
        self.height = None
        self._selection = None

    def handle_key(self, key):
        self.keys.append(key)
        if key in self.select_on:
            self._selection = self.path

    def current_selection(self):
        return self._selection

    def set_height(self, height):
        self.height = height


class FakePipeline:
    """Pipeline returning canned text, optionally blocking until released."""

    def __init__(self, text="hello world", error=None, block=False):
        self.text = text
        self.error = error
        self.calls = []
        self.cancel_calls = 0
        self.release = threading.Event()
        self.entered = threading.Event()
        if not block:
            self.release.set()

    def run(self, input_path):
        self.calls.append(input_path)
        self.entered.set()
        self.release.wait(timeout=5.0)
        if self.error is not None:
            raise self.error
        return self.text

    def cancel(self):
        self.cancel_calls += 1
        self.release.set()


@pytest.fixture
def fake_job_runner():
    return FakeJobRunner()


@pytest.fixture
def stub_browser():
    return StubBrowser()


@pytest.fixture
def make_session():
    """Factory for sessions in a given mode with sensible fields."""
    def _make(mode=Mode.SELECTING_FILE, **kwargs):
        if mode is not Mode.SELECTING_FILE:
            kwargs.setdefault("selected_path", "/media/talk.mp3")
        return Session(mode=mode, **kwargs)
    return _make


def numbered_words(count: int) -> str:
    """Text of ``count`` nine-character words."""
    return " ".join(f"w{i:08d}" for i in range(count))
