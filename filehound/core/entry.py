"""
filesystem entry abstraction used by the walker and by every filter.

stat data is read lazily on first access and cached on the entry, so a walk
that only filters by name never touches anything beyond the directory listing.
"""
import os
import stat
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class FileEntry:
    """One filesystem path seen during a walk.

    `path` keeps the form the walk produced (the root as given, joined with the
    child names), which is also the form reported to callers.
    """

    path: str
    known_is_directory: Optional[bool] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_path(cls, path: str) -> "FileEntry":
        return cls(path=path)

    @classmethod
    def from_dir_entry(cls, dir_entry: os.DirEntry, follow_symlinks: bool = True) -> "FileEntry":
        # scandir already knows the type on most platforms; keep it to avoid a stat per child.
        try:
            is_dir = dir_entry.is_dir(follow_symlinks=follow_symlinks)
        except OSError:
            is_dir = False
        return cls(path=dir_entry.path, known_is_directory=is_dir)

    @property
    def name(self) -> str:
        return os.path.basename(self.path) or self.path

    @property
    def extension(self) -> str:
        return os.path.splitext(self.name)[1][1:]

    @cached_property
    def absolute_path(self) -> str:
        return os.path.abspath(self.path)

    @cached_property
    def depth(self) -> int:
        return len(Path(self.path).parts)

    @property
    def is_hidden(self) -> bool:
        name = self.name
        return name.startswith(".") and name not in (".", "..")

    @cached_property
    def is_directory(self) -> bool:
        if self.known_is_directory is not None:
            return self.known_is_directory
        return os.path.isdir(self.path)

    @cached_property
    def _stat(self) -> os.stat_result:
        try:
            return os.stat(self.path)
        except FileNotFoundError:
            # dangling symlink: report the link itself.
            return os.lstat(self.path)

    @property
    def is_socket(self) -> bool:
        return stat.S_ISSOCK(self._stat.st_mode)

    @property
    def size(self) -> int:
        return self._stat.st_size

    @property
    def modified(self) -> float:
        return self._stat.st_mtime

    @property
    def accessed(self) -> float:
        return self._stat.st_atime

    @property
    def changed(self) -> float:
        return self._stat.st_ctime

    def __str__(self) -> str:
        return self.path


def list_directory(directory: FileEntry, follow_symlinks: bool = True) -> List[FileEntry]:
    # lists the immediate children of a directory, sorted by name. raises OSError on failure.
    with os.scandir(directory.path) as it:
        children = sorted(it, key=lambda dir_entry: dir_entry.name)
    return [FileEntry.from_dir_entry(child, follow_symlinks) for child in children]
