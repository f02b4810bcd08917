"""MediaSource: the media-resolution capability used by the endpoints."""

from typing import AsyncIterator, Protocol


class MediaSource(Protocol):
    """Turns a video URL into an audio byte stream.

    Implementations must not contact the network in validate().
    """

    def validate(self, url: str) -> bool:
        """Return True if the URL is structurally valid for this source."""
        ...

    def open_audio_stream(self, url: str) -> AsyncIterator[bytes]:
        """Open an audio-only stream at the highest available audio quality.

        Returns an async generator of byte chunks. Calling ``aclose()`` on it
        stops the stream and releases any underlying resources. Failures are
        raised as MediaError while iterating.
        """
        ...
