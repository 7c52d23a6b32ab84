# filehound/core/discovery/walker.py
"""
Recursive traversal of one search root.

The traversal itself is a generator (`Walker._search`) that yields every
directory it wants listed and receives the listing back, or has the listing
error thrown into it. `walk_sync` and `walk` only differ in how they perform
that listing, so pruning, predicate evaluation and result ordering live in one
place for both.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Callable, Generator, List, Optional

import structlog

from filehound.config.settings import SearchConfig
from filehound.core.discovery.pruning import should_prune
from filehound.core.entry import FileEntry, list_directory
from filehound.exceptions import RootUnreadableError, SubdirectoryUnreadableError

log = structlog.get_logger(__name__)

# yields a directory to list, is sent its children, returns the kept entries.
SearchGenerator = Generator[FileEntry, List[FileEntry], List[FileEntry]]
WarningCallback = Callable[[SubdirectoryUnreadableError], None]


@dataclass
class WalkState:
    # per-root state; never shared between roots.
    root: FileEntry
    tracked_directories: List[FileEntry] = field(default_factory=list)


class Walker:
    def __init__(self, config: SearchConfig, on_warning: Optional[WarningCallback] = None):
        self.config = config
        self.matcher = config.matcher
        self._on_warning = on_warning
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")

    def _list(self, directory: FileEntry) -> List[FileEntry]:
        return list_directory(directory, self.config.follow_symlinks)

    async def _list_async(self, directory: FileEntry) -> List[FileEntry]:
        return await asyncio.to_thread(list_directory, directory, self.config.follow_symlinks)

    def walk_sync(self, root_path: str) -> List[FileEntry]:
        # walks one root, listing directories inline.
        state = WalkState(root=FileEntry.from_path(root_path))
        search = self._search(state.root, state.root, state)
        self.log.debug("root_walk_started", root=root_path, mode="sync")
        try:
            directory = next(search)
            while True:
                try:
                    children = self._list(directory)
                except OSError as e:
                    directory = search.throw(e)
                else:
                    directory = search.send(children)
        except StopIteration as done:
            return self._finish(state, done.value)

    async def walk(self, root_path: str) -> List[FileEntry]:
        # walks one root; each listing runs in a worker thread and is the only suspension point.
        state = WalkState(root=FileEntry.from_path(root_path))
        search = self._search(state.root, state.root, state)
        self.log.debug("root_walk_started", root=root_path, mode="async")
        try:
            directory = next(search)
            while True:
                try:
                    children = await self._list_async(directory)
                except OSError as e:
                    directory = search.throw(e)
                else:
                    directory = search.send(children)
        except StopIteration as done:
            return self._finish(state, done.value)

    def _finish(self, state: WalkState, files: List[FileEntry]) -> List[FileEntry]:
        # directories-only mode swaps the evaluated population, not the traversal.
        if self.config.directories_only:
            matches = [d for d in state.tracked_directories if self.matcher(d)]
        else:
            matches = files
        self.log.debug("root_walk_finished", root=state.root.path, matches=len(matches))
        return matches

    def _search(self, root: FileEntry, current: FileEntry, state: WalkState) -> SearchGenerator:
        if should_prune(root, current, self.config):
            self.log.debug("directory_pruned", path=current.path)
            return []

        try:
            children = yield current
        except OSError as e:
            if current is root:
                raise RootUnreadableError(root.path, f"cannot list search root ({e.strerror or e})") from e
            self._warn(SubdirectoryUnreadableError(current.path, f"cannot list directory ({e.strerror or e})"))
            return []

        results: List[FileEntry] = []
        for child in children:
            if child.is_directory:
                if self.config.directories_only and not should_prune(root, child, self.config):
                    state.tracked_directories.append(child)
                results.extend((yield from self._search(root, child, state)))
            elif not self.config.directories_only and self.matcher(child):
                results.append(child)
        return results

    def _warn(self, warning: SubdirectoryUnreadableError):
        self.log.warning("subdirectory_unreadable", path=warning.path, error=str(warning))
        if self._on_warning is not None:
            self._on_warning(warning)
