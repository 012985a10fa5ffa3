"""File downloads requested by the app shell."""

import itertools
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import requests

from .channels import ChannelError, MethodChannel

logger = logging.getLogger(__name__)

CHANNEL_NAME = "cqut/downloads"


@dataclass(frozen=True)
class DownloadTicket:
    download_id: int
    path: str

    def as_dict(self) -> dict[str, Any]:
        return {"downloadId": self.download_id, "path": self.path}


class DownloadManager:
    """Downloads files into a fixed folder under the user's downloads directory."""

    SUBDIRECTORY = "CQUT-Helper"
    CHUNK_SIZE = 64 * 1024
    TIMEOUT = 30

    def __init__(
        self,
        downloads_dir: Union[str, Path, None] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the download manager.

        Args:
            downloads_dir: Base downloads directory (default: ~/Downloads).
            session: HTTP session to use; a new one is created when omitted.
        """
        self._target_dir = Path(downloads_dir or Path.home() / "Downloads") / self.SUBDIRECTORY
        self._session = session or requests.Session()
        self._ids = itertools.count(1)

    @property
    def target_dir(self) -> Path:
        return self._target_dir

    def save_path(self, file_name: str) -> Path:
        """Return where ``file_name`` is stored.

        Raises:
            ValueError: If the name would leave the download folder.
        """
        name = Path(file_name)
        if name.is_absolute() or ".." in name.parts or not name.name:
            raise ValueError(f"Invalid file name: '{file_name}'")
        return self._target_dir / name

    def enqueue(self, url: str, file_name: str) -> DownloadTicket:
        """Download ``url`` into the download folder as ``file_name``.

        Args:
            url: Address of the file.
            file_name: Name to save the file under.

        Returns:
            Ticket with the download id and the saved path.

        Raises:
            ValueError: If the file name is invalid.
            requests.RequestException: If the request fails.
            OSError: If the file cannot be written.
        """
        path = self.save_path(file_name)
        download_id = next(self._ids)
        logger.info("Download %d: %s -> %s", download_id, url, path)

        partial = path.with_name(path.name + ".part")
        with self._session.get(url, stream=True, timeout=self.TIMEOUT) as response:
            response.raise_for_status()
            path.parent.mkdir(parents=True, exist_ok=True)
            try:
                with open(partial, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
            except BaseException:
                partial.unlink(missing_ok=True)
                raise
        os.replace(partial, path)

        return DownloadTicket(download_id=download_id, path=str(path))


def downloads_channel(manager: DownloadManager) -> MethodChannel:
    """Build the channel exposing ``enqueueDownload``."""
    channel = MethodChannel(CHANNEL_NAME)

    def enqueue_download(arguments: dict[str, Any]) -> dict[str, Any]:
        url = arguments.get("url")
        file_name = arguments.get("fileName")
        if not isinstance(url, str) or not url.strip() or not isinstance(file_name, str) or not file_name.strip():
            raise ChannelError("INVALID_ARGS", "url/fileName is required")

        try:
            ticket = manager.enqueue(url, file_name)
        except (requests.RequestException, OSError, ValueError) as e:
            raise ChannelError("DOWNLOAD_FAILED", str(e)) from e
        return ticket.as_dict()

    channel.register("enqueueDownload", enqueue_download)
    return channel
