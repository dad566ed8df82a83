"""Copy WSL-side images into the Windows temporary directory."""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from wslnotify.path_translation import PathTranslationError, PathTranslator

logger = logging.getLogger(__name__)

DEFAULT_ASSET_PREFIX = "wsl-notify"
_CHUNK_SIZE = 64 * 1024


def hash_file(path: Path) -> str:
    """Return the SHA-256 hex digest of a file's contents.

    :param path: File to hash.
    :type path: Path
    :return: Lowercase hex digest.
    :rtype: str
    """
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


class AssetRelocator:
    """Make WSL images reachable from Windows.

    Images are stored once per content hash as ``<prefix>-<sha256><ext>``
    inside the Windows temporary directory, so the same bytes reached via
    different source paths share one copy.
    """

    def __init__(
        self, translator: PathTranslator, prefix: str = DEFAULT_ASSET_PREFIX
    ) -> None:
        self.translator = translator
        self.prefix = prefix
        self._cache_directory: Optional[Path] = None

    def relocate(self, path: str) -> Optional[str]:
        """Copy an image into the Windows temp directory.

        :param path: WSL path of the image.
        :type path: str
        :return: Windows path of the copy, or None when the image is unusable.
        :rtype: Optional[str]
        """
        try:
            source = Path(path).resolve(strict=True)
        except (OSError, RuntimeError) as error:
            logger.warning("image %s could not be resolved: %s", path, error)
            return None
        try:
            digest = hash_file(source)
        except OSError as error:
            logger.warning("image %s could not be read: %s", source, error)
            return None
        try:
            target = self._get_cache_directory() / (
                f"{self.prefix}-{digest}{source.suffix}"
            )
            if not target.exists():
                _copy_atomically(source, target)
            return self.translator.to_sink_namespace(str(target))
        except (OSError, PathTranslationError) as error:
            logger.warning("image %s could not be relocated: %s", source, error)
            return None

    def _get_cache_directory(self) -> Path:
        if self._cache_directory is None:
            sink_directory = self.translator.sink_temp_directory()
            self._cache_directory = Path(
                self.translator.to_caller_namespace(sink_directory)
            )
        return self._cache_directory


def _copy_atomically(source: Path, target: Path) -> None:
    handle = tempfile.NamedTemporaryFile(
        dir=target.parent, prefix=".", suffix=".partial", delete=False
    )
    temporary = Path(handle.name)
    try:
        with handle, source.open("rb") as reader:
            shutil.copyfileobj(reader, handle)
        os.replace(temporary, target)
    except OSError:
        temporary.unlink(missing_ok=True)
        raise
