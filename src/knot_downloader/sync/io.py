from __future__ import annotations

import logging
from pathlib import Path

from knot_downloader.errors import DirectoryCreationError, WriteError

logger = logging.getLogger(__name__)


def read_text_or_empty(path: Path) -> str:
    """
    Read the current mirrored content, treating a missing or unreadable file as empty.

    Bytes are decoded directly so line endings are compared exactly as stored.
    """
    try:
        return path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        return ""
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Treating unreadable file as empty. path=%s error=%s", path, e)
        return ""


def ensure_parent_dir(path: Path) -> None:
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(f"Failed to create directories for {str(path)!r}") from e


def atomic_write_text(path: Path, text: str) -> None:
    """Write text via a sibling temp file and rename, so readers never see a partial file."""
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_bytes(text.encode("utf-8"))
        tmp_path.replace(path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise WriteError(f"Failed to write file to {str(path)!r}") from e
