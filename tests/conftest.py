"""Shared test fixtures for DJ Audio API tests."""

import os

# Add project root to path
import sys
from typing import Iterable, Optional

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from media_source import MediaError, MediaSource, validate_url
from settings import Settings

TEST_API_KEY = "s3cret-test-key"
VALID_YOUTUBE_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


# =============================================================================
# Fake media source
# =============================================================================


class FakeSource(MediaSource):
    """In-memory MediaSource that records how it was used.

    Args:
        chunks: Byte chunks the audio stream yields
        valid: Fixed validate() result, or None to use the real URL grammar
        fail_at: Raise fail_with before yielding the chunk at this index
        fail_with: Exception raised at fail_at (MediaError by default)
        open_error: Exception raised directly by open_audio_stream()
    """

    def __init__(
        self,
        chunks: Iterable[bytes] = (b"ID3\x03\x00", b"\xff\xfb\x90\x64", b"audio-frame-data"),
        valid: Optional[bool] = None,
        fail_at: Optional[int] = None,
        fail_with: Optional[Exception] = None,
        open_error: Optional[Exception] = None,
    ):
        self.chunks = list(chunks)
        self.valid = valid
        self.fail_at = fail_at
        self.fail_with = fail_with or MediaError("upstream exploded")
        self.open_error = open_error
        self.validated = []
        self.opened = []
        self.closed = False

    def validate(self, url: str) -> bool:
        self.validated.append(url)
        if self.valid is None:
            return validate_url(url)
        return self.valid

    def open_audio_stream(self, url: str):
        self.opened.append(url)
        if self.open_error is not None:
            raise self.open_error
        return self._generate()

    async def _generate(self):
        try:
            for index, chunk in enumerate(self.chunks):
                if index == self.fail_at:
                    raise self.fail_with
                yield chunk
            if self.fail_at is not None and self.fail_at >= len(self.chunks):
                raise self.fail_with
        finally:
            self.closed = True


# =============================================================================
# App fixtures
# =============================================================================


@pytest.fixture
def fake_source():
    """A fresh fake media source with the real URL grammar."""
    return FakeSource()


@pytest.fixture
def test_settings():
    """Settings with auth disabled and no public base URL."""
    return Settings()


@pytest.fixture
def auth_settings():
    """Settings with the test API key configured."""
    return Settings(api_key=TEST_API_KEY)


@pytest.fixture
def make_client():
    """Factory building a TestClient for the real app with overridden dependencies."""
    from routers.deps import get_media_source
    from server import app
    from settings import get_settings

    def _make(settings: Settings, source: MediaSource) -> TestClient:
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_media_source] = lambda: source
        return TestClient(app)

    yield _make

    app.dependency_overrides.clear()


@pytest.fixture
def test_client(make_client, test_settings, fake_source):
    """Client for an open API backed by the fake source."""
    return make_client(test_settings, fake_source)


@pytest.fixture
def auth_client(make_client, auth_settings, fake_source):
    """Client for an API protected by TEST_API_KEY."""
    return make_client(auth_settings, fake_source)


# =============================================================================
# Mock yt-dlp subprocess
# =============================================================================


class MockStreamReader:
    """Mock asyncio.StreamReader over a fixed byte string."""

    def __init__(self, data: bytes = b""):
        self._data = data
        self.read_sizes = []

    async def read(self, n: int = -1) -> bytes:
        self.read_sizes.append(n)
        if n < 0:
            data, self._data = self._data, b""
            return data
        chunk, self._data = self._data[:n], self._data[n:]
        return chunk


class MockProcess:
    """Mock asyncio subprocess for streaming yt-dlp calls."""

    def __init__(self, stdout: bytes = b"", stderr: str = "", returncode: int = 0):
        self.stdout = MockStreamReader(stdout)
        self.stderr = MockStreamReader(stderr.encode())
        self.returncode = None
        self._exit_code = returncode
        self.killed = False

    async def wait(self):
        if self.returncode is None:
            self.returncode = self._exit_code
        return self.returncode

    def kill(self):
        self.killed = True
        self.returncode = -9
