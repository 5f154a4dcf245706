"""
Asset fetcher - downloads the release asset and computes its checksum
"""

import os
import hashlib
import logging
import tempfile
from pathlib import Path
from typing import Optional

import requests

from aursync import config
from aursync.common.errors import FetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def sha256_file(path: Path) -> str:
    """Lowercase hex SHA-256 digest of a file"""
    digest = hashlib.sha256()
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b''):
            digest.update(chunk)
    return digest.hexdigest()


class AssetFetcher:
    """Downloads release assets into temporary files"""

    def __init__(self, session=None, timeout: int = config.DOWNLOAD_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout

    def download(self, url: str, dest_dir: Optional[Path] = None) -> Path:
        """
        Stream url into a new temporary file

        Raises:
            FetchError: on a network error or a non-2xx response
        """
        fd, tmp_name = tempfile.mkstemp(prefix="tmp_asset_", dir=dest_dir)
        tmp_path = Path(tmp_name)

        try:
            with os.fdopen(fd, 'wb') as f:
                with self.session.get(url, stream=True, timeout=self.timeout) as response:
                    response.raise_for_status()
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except requests.exceptions.RequestException as e:
            tmp_path.unlink(missing_ok=True)
            raise FetchError(f"failed to download {url}: {e}") from e

        logger.debug(f"Downloaded {url} -> {tmp_path} ({tmp_path.stat().st_size} bytes)")
        return tmp_path

    def fetch_sha256(self, url: str, dest_dir: Optional[Path] = None) -> str:
        """Download url and return its SHA-256 digest; the file is removed afterwards"""
        path = self.download(url, dest_dir)
        try:
            return sha256_file(path)
        finally:
            path.unlink(missing_ok=True)
