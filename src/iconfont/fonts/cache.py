"""
Asset Cache
===========

Path-addressed storage for downloaded web font assets. The output fonts
directory doubles as the cache: an asset whose key is already present is not
fetched again. The presence check is the swappable part of the policy.
"""

import hashlib
import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class AssetCache(ABC):
    """Interface for asset storage keyed by local filename."""

    @abstractmethod
    def path_for(self, key: str) -> Path:
        """Return the filesystem location for a key."""

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return True if the asset for key can be reused without fetching."""

    @abstractmethod
    def put(self, key: str, data: bytes) -> Path:
        """Store asset bytes under key and return the written path."""


class DirectoryAssetCache(AssetCache):
    """Skip-if-present cache backed by a plain directory."""

    def __init__(self, directory: Path):
        self.directory = directory

    def path_for(self, key: str) -> Path:
        return self.directory / key

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def put(self, key: str, data: bytes) -> Path:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug(f"Cached {key} ({len(data)} bytes)")
        return path


class ChecksumAssetCache(DirectoryAssetCache):
    """
    Directory cache that records a SHA256 sidecar for every stored asset.

    An asset only counts as present when its sidecar exists and matches the
    file content, so truncated or hand-edited files are fetched again.
    """

    SIDECAR_SUFFIX = ".sha256"

    def _sidecar_for(self, key: str) -> Path:
        return self.directory / f"{key}{self.SIDECAR_SUFFIX}"

    @staticmethod
    def _digest(path: Path) -> str:
        hasher = hashlib.sha256()
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                hasher.update(chunk)
        return hasher.hexdigest()

    def exists(self, key: str) -> bool:
        path = self.path_for(key)
        sidecar = self._sidecar_for(key)
        if not path.is_file() or not sidecar.is_file():
            return False

        expected = sidecar.read_text(encoding="utf-8").strip()
        if self._digest(path) != expected:
            logger.warning(f"Checksum mismatch for cached asset {key}, fetching again")
            return False
        return True

    def put(self, key: str, data: bytes) -> Path:
        path = super().put(key, data)
        self._sidecar_for(key).write_text(hashlib.sha256(data).hexdigest(), encoding="utf-8")
        return path
