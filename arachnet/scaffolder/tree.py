"""In-memory file tree produced by the target emitters.

Emitters never touch the disk.  They add files to a ``FileTree`` which the
assembler later serializes into an archive, flattens for preview, or writes
out to a directory.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class File:
    """A file entry holding text or binary content."""

    name: str
    content: Union[str, bytes] = ""

    @property
    def is_dir(self) -> bool:
        return False


@dataclass
class Directory:
    """A directory entry.  Children are kept in insertion order."""

    name: str = ""
    entries: dict[str, Union["Directory", File]] = field(default_factory=dict)

    @property
    def is_dir(self) -> bool:
        return True

    # -- Building ----------------------------------------------------------

    def folder(self, path: str) -> "Directory":
        """Return the sub-directory at *path*, creating missing levels."""
        current = self
        for part in split_path(path):
            entry = current.entries.get(part)
            if entry is None:
                entry = Directory(part)
                current.entries[part] = entry
            elif not entry.is_dir:
                raise ValueError(f"Cannot create directory over file: {path!r}")
            current = entry
        return current

    def add_file(self, path: str, content: Union[str, bytes]) -> File:
        """Write *content* at *path*, replacing any file already there.

        Intermediate directories are created as needed.
        """
        parts = split_path(path)
        if not parts:
            raise ValueError("File path must not be empty")
        parent = self.folder("/".join(parts[:-1])) if len(parts) > 1 else self
        existing = parent.entries.get(parts[-1])
        if existing is not None and existing.is_dir:
            raise ValueError(f"Cannot overwrite directory with file: {path!r}")
        entry = File(parts[-1], content)
        parent.entries[parts[-1]] = entry
        return entry

    # -- Queries -----------------------------------------------------------

    def get(self, path: str) -> Optional[Union["Directory", File]]:
        """Return the entry at *path*, or ``None`` when absent."""
        current: Union[Directory, File] = self
        for part in split_path(path):
            if not current.is_dir:
                return None
            nxt = current.entries.get(part)
            if nxt is None:
                return None
            current = nxt
        return current

    def read(self, path: str) -> Union[str, bytes]:
        """Return the content of the file at *path*.

        Raises:
            KeyError: If *path* is missing or names a directory.
        """
        entry = self.get(path)
        if entry is None or entry.is_dir:
            raise KeyError(path)
        return entry.content

    def walk(self, prefix: str = "") -> Iterator[tuple[str, Union["Directory", File]]]:
        """Yield ``(relative_path, entry)`` for every descendant, depth first."""
        for name, entry in self.entries.items():
            path = f"{prefix}{name}"
            yield path, entry
            if entry.is_dir:
                yield from entry.walk(f"{path}/")

    def files(self) -> Iterator[tuple[str, File]]:
        """Yield ``(relative_path, file)`` for every non-directory entry."""
        for path, entry in self.walk():
            if not entry.is_dir:
                yield path, entry

    def __contains__(self, path: str) -> bool:
        return self.get(path) is not None

    def __len__(self) -> int:
        return sum(1 for _ in self.files())


class FileTree(Directory):
    """Root of a virtual project tree."""

    def __init__(self) -> None:
        super().__init__(name="")


def split_path(path: str) -> list[str]:
    """Split a relative ``/`` or ``\\`` separated path into its segments.

    Empty segments are dropped.

    Raises:
        ValueError: If a segment is ``.`` or ``..``.
    """
    parts = [p for p in path.replace("\\", "/").split("/") if p]
    for part in parts:
        if part in (".", ".."):
            raise ValueError(f"Relative path segments are not allowed: {path!r}")
    return parts
