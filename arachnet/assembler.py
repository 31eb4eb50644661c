"""Project assembly: turn a virtual file tree into deliverables.

``serialize`` packs a tree into a ZIP archive, ``flatten`` produces the
``path -> content`` map used for previews and ``write_tree`` materializes a
tree on disk.  Archives are deterministic: entries are sorted by path and
carry a fixed timestamp, so equal trees give byte-identical archives.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Optional, Union

from .scaffolder.tree import Directory, split_path

logger = logging.getLogger(__name__)

# Earliest timestamp the ZIP format can represent.
_FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
_FILE_MODE = 0o644


class AssemblyError(RuntimeError):
    """Raised when a tree cannot be serialized or written out."""


def _as_bytes(content: Union[str, bytes]) -> bytes:
    return content if isinstance(content, bytes) else content.encode("utf-8")


def _as_text(content: Union[str, bytes]) -> str:
    return content.decode("utf-8") if isinstance(content, bytes) else content


def _root_prefix(root_dir: Optional[str]) -> str:
    if not root_dir:
        return ""
    try:
        parts = split_path(root_dir)
    except ValueError as exc:
        raise AssemblyError(f"Invalid archive root folder: {root_dir!r}") from exc
    return "/".join(parts) + "/" if parts else ""


def serialize(tree: Directory, root_dir: Optional[str] = None) -> bytes:
    """Pack *tree* into a ZIP archive.

    Args:
        tree: The project tree.
        root_dir: Optional folder every entry is nested under, e.g. the
            project name.

    Returns:
        The archive bytes.

    Raises:
        AssemblyError: If *root_dir* contains ``.`` or ``..`` segments, or
            the archive cannot be written.
    """
    prefix = _root_prefix(root_dir)
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path, entry in sorted(tree.files(), key=lambda item: item[0]):
                info = zipfile.ZipInfo(prefix + path, date_time=_FIXED_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = _FILE_MODE << 16
                archive.writestr(info, _as_bytes(entry.content))
    except (OSError, ValueError, zipfile.BadZipFile) as exc:
        raise AssemblyError(f"Failed to build archive: {exc}") from exc

    data = buffer.getvalue()
    logger.debug("Serialized %d file(s) into %d bytes", len(tree), len(data))
    return data


def flatten(tree: Directory) -> dict[str, str]:
    """Return ``{relative_path: content}`` for every file, sorted by path.

    Binary content is decoded as UTF-8.
    """
    return {
        path: _as_text(entry.content)
        for path, entry in sorted(tree.files(), key=lambda item: item[0])
    }


def write_tree(tree: Directory, output_dir: str | Path) -> list[Path]:
    """Write every file of *tree* below *output_dir*.

    Existing files at the same paths are overwritten.

    Returns:
        The written paths, sorted.

    Raises:
        AssemblyError: If a file cannot be written.
    """
    root = Path(output_dir)
    written: list[Path] = []
    for path, entry in sorted(tree.files(), key=lambda item: item[0]):
        target = root / path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(_as_bytes(entry.content))
        except OSError as exc:
            raise AssemblyError(f"Failed to write {target}: {exc}") from exc
        written.append(target)
    logger.debug("Wrote %d file(s) under %s", len(written), root)
    return written
