import os
import tempfile
import uuid
import requests
from typing import Optional, Callable
from zoomfixer.config import constants
from zoomfixer.config.manager import config_manager
from zoomfixer.services.errors import DownloadFailed
from zoomfixer.utils.logger import log

class DownloadService:
    """
    Streams the Zoom installer package to a uniquely named temporary file.
    """

    NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

    @staticmethod
    def make_destination() -> str:
        """Unique temp path so concurrent or repeated runs never collide."""
        name = f"{constants.INSTALLER_PREFIX}{uuid.uuid4()}{constants.INSTALLER_SUFFIX}"
        return os.path.join(tempfile.gettempdir(), name)

    @staticmethod
    def download_installer(
        url: Optional[str] = None,
        progress_callback: Optional[Callable[[float], None]] = None,
        log_callback: Optional[Callable[[str], None]] = None
    ) -> str:
        """
        Download the installer.

        Args:
            url: Source URL, defaults to the configured installer URL
            progress_callback: Called with the received fraction in [0, 1]
            log_callback: Called with user-facing status lines

        Returns:
            Path of the completed file. The caller owns its deletion.

        Raises:
            DownloadFailed: response status outside [200, 300)
        """
        url = url or config_manager.get("installer_url")
        chunk_size = config_manager.get("download_chunk_size")
        timeout = config_manager.get("download_timeout")

        if log_callback:
            log_callback("Downloading latest Zoom package...")

        dest_path = DownloadService.make_destination()
        last_reported = None

        with requests.get(url, headers=DownloadService.NO_CACHE_HEADERS, stream=True, timeout=timeout) as r:
            if not 200 <= r.status_code < 300:
                raise DownloadFailed(r.status_code)

            expected = int(r.headers.get("content-length") or 0)
            received = 0

            try:
                with open(dest_path, "wb") as f:
                    for chunk in r.iter_content(chunk_size=chunk_size):
                        if not chunk:
                            continue
                        f.write(chunk)
                        received += len(chunk)

                        if expected > 0 and progress_callback:
                            last_reported = min(received / expected, 1.0)
                            progress_callback(last_reported)
            except BaseException:
                # Never leave a half-written package behind
                if os.path.exists(dest_path):
                    os.remove(dest_path)
                raise

        if progress_callback and last_reported != 1.0:
            progress_callback(1.0)

        log.info(f"Downloaded {received} bytes from {url}")
        if log_callback:
            log_callback(f"Installer saved to {dest_path}")
        return dest_path
