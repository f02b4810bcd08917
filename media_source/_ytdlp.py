"""yt-dlp subprocess implementation of MediaSource."""

import asyncio
import logging
from typing import AsyncIterator, List

from media_source._base import MediaSource
from media_source._sanitize import MediaError, build_watch_url, get_video_id, validate_url
from settings import Settings

logger = logging.getLogger(__name__)


class YtDlpSource(MediaSource):
    """Streams audio by piping ``yt-dlp -o -`` stdout.

    Args:
        ytdlp_path: yt-dlp executable
        chunk_size: Maximum bytes per yielded chunk
        buffer_limit: StreamReader limit for the stdout pipe (read-ahead window)
        skip_tls_verify: Pass --no-check-certificates to yt-dlp
    """

    def __init__(
        self,
        ytdlp_path: str = "yt-dlp",
        chunk_size: int = 256 * 1024,
        buffer_limit: int = 1 << 25,
        skip_tls_verify: bool = False,
    ):
        self.ytdlp_path = ytdlp_path
        self.chunk_size = chunk_size
        self.buffer_limit = buffer_limit
        self.skip_tls_verify = skip_tls_verify

    @classmethod
    def from_settings(cls, settings: Settings) -> "YtDlpSource":
        return cls(
            ytdlp_path=settings.ytdlp_path,
            chunk_size=settings.stream_chunk_size,
            buffer_limit=settings.stream_buffer_limit,
            skip_tls_verify=settings.ytdlp_skip_tls_verify,
        )

    def validate(self, url: str) -> bool:
        return validate_url(url)

    def build_command(self, url: str) -> List[str]:
        """Build the yt-dlp argument list for an audio-only stream to stdout.

        The URL passed to yt-dlp is rebuilt from the validated video ID and
        placed after '--' so it can never be read as a flag.
        """
        video_id = get_video_id(url)
        cmd = [
            self.ytdlp_path,
            "-f",
            "bestaudio",
            "--no-playlist",
            "--no-part",
            "--quiet",
            "--no-warnings",
        ]
        if self.skip_tls_verify:
            cmd.append("--no-check-certificates")
        cmd.extend(
            [
                "--remote-components",
                "ejs:github",  # Required for JS challenge solving
                "-o",
                "-",
                "--",
                build_watch_url(video_id),
            ]
        )
        return cmd

    async def open_audio_stream(self, url: str) -> AsyncIterator[bytes]:
        cmd = self.build_command(url)
        logger.debug(f"[YtDlp] Starting: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=self.buffer_limit,
            )
        except OSError as e:
            raise MediaError(f"Failed to start yt-dlp: {e}") from e

        try:
            bytes_read = 0
            while True:
                chunk = await process.stdout.read(self.chunk_size)
                if not chunk:
                    break
                bytes_read += len(chunk)
                yield chunk

            stderr = await process.stderr.read()
            returncode = await process.wait()
            if returncode != 0:
                error_msg = stderr.decode(errors="replace").strip() if stderr else "Unknown error"
                logger.error(f"[YtDlp] Failed (exit code {returncode}) for URL: {url}")
                logger.error(f"[YtDlp] stderr: {error_msg}")
                raise MediaError(f"yt-dlp failed: {error_msg}")

            logger.debug(f"[YtDlp] Completed: {bytes_read} bytes for URL: {url}")
        finally:
            if process.returncode is None:
                process.kill()
                logger.info(f"[YtDlp] Killed yt-dlp process for URL: {url}")
                await process.wait()
