"""
Shared fixtures: a Qt core application, a scriptable playback device, a
manual timer and in-memory preference storage.
"""

import random

import pytest
from PySide6.QtCore import QCoreApplication

from core.models import TrackRecord
from core.preferences import MemoryStore, PreferenceStore
from player.device import PlaybackDevice


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeDevice(PlaybackDevice):
    """Records requests; tests fire media events by emitting its signals."""

    def __init__(self):
        super().__init__()
        self.source = None
        self.sources = []
        self.play_result = True
        self.play_calls = 0
        self.pause_calls = 0
        self.seeks = []
        self.volume = None

    def set_source(self, url):
        self.source = url
        self.sources.append(url)

    def play(self):
        self.play_calls += 1
        return self.play_result

    def pause(self):
        self.pause_calls += 1

    def seek_ms(self, ms):
        self.seeks.append(ms)

    def set_volume(self, volume_0_to_1):
        self.volume = volume_0_to_1

    # helpers
    def ready(self, url=None):
        self.mediaReady.emit(url if url is not None else self.source)

    def fail(self, message="decode error", url=None):
        self.mediaFailed.emit(url if url is not None else self.source, message)

    def end(self, url=None):
        self.mediaEnded.emit(url if url is not None else self.source)


class ManualScheduler:
    """Stands in for QTimer.singleShot; callbacks run only when flushed."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay_ms, fn):
        self.pending.append((delay_ms, fn))

    def run_all(self):
        pending, self.pending = self.pending, []
        for _delay, fn in pending:
            fn()
        return len(pending)


def resolve(filename):
    return f"https://cdn.test/music/{filename}"


@pytest.fixture
def device():
    return FakeDevice()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def prefs(memory_store):
    return PreferenceStore(memory_store, namespace="shuffle")


@pytest.fixture
def tracks():
    return [
        TrackRecord.create("a.mp3", "Song A", "Artist X"),
        TrackRecord.create("b.mp3", "Song B", "Artist Y"),
        TrackRecord.create("c.mp3", "Song C", "Artist X"),
        TrackRecord.create("d.mp3", "Song D", "Artist Z"),
    ]


@pytest.fixture
def catalog_text():
    return "\n".join([
        "(a.mp3=Song A=Artist X=none)",
        "(b.mp3=Song B=Artist Y=none)",
        "(c.mp3=Song C=Artist X=none)",
        "(d.mp3=Song D=Artist Z=none)",
    ])
