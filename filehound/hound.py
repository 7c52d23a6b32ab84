# filehound/hound.py
"""
Fluent search builder.

Each configuration method mutates the hound and returns it, so calls chain:

    files = FileHound.create().paths("/tmp").ext("json").depth(1).find_sync()

`find()` and `find_sync()` snapshot the current filters and options into an
immutable SearchConfig at call time; filters added afterwards only affect
later searches.
"""
import asyncio
from typing import Any, Awaitable, Callable, List, Optional

import structlog

from filehound.config.settings import SearchConfig, SearchOptions
from filehound.core.discovery.path_resolution import normalize_search_paths
from filehound.core.events import SearchEvents
from filehound.core.filters import (
    FilterKind,
    PredicateSet,
    date_filter,
    discard_filter,
    extension_filter,
    glob_filter,
    hidden_file_filter,
    size_filter,
    socket_filter,
)
from filehound.core.search import SearchOrchestrator, SearchOutcome
from filehound.logging_setup import configure_library_defaults
from filehound.util import flatten_args

log = structlog.get_logger(__name__)


class FileHound:
    def __init__(self):
        configure_library_defaults()
        self.predicates = PredicateSet()
        self.events = SearchEvents()
        self._search_paths: List[str] = []
        self._max_depth: Optional[int] = None
        self._ignore_hidden_directories = False
        self._directories_only = False
        self._follow_symlinks = True

    @classmethod
    def create(cls) -> "FileHound":
        return cls()

    @staticmethod
    async def any(*hounds: Any) -> List[str]:
        """Run several hounds (or pending find() results) and concatenate their matches in argument order."""
        pending = [h.find() if isinstance(h, FileHound) else h for h in flatten_args(hounds)]
        results = await asyncio.gather(*pending)
        return [path for matches in results for path in matches]

    @classmethod
    def from_options(cls, options: SearchOptions) -> "FileHound":
        # builds a hound from user-level options (cli flags, config profiles).
        hound = cls()
        if options.paths:
            hound.paths(options.paths)
        if options.extensions:
            hound.ext(options.extensions)
        for pattern in options.globs:
            hound.glob(pattern)
        if options.discard_patterns:
            hound.discard(options.discard_patterns)
        if options.size is not None:
            hound.size(options.size)
        if options.empty:
            hound.is_empty()
        if options.modified is not None:
            hound.modified(options.modified)
        if options.accessed is not None:
            hound.accessed(options.accessed)
        if options.changed is not None:
            hound.changed(options.changed)
        if options.socket:
            hound.socket()
        if options.ignore_hidden_files:
            hound.ignore_hidden_files()
        if options.ignore_hidden_directories:
            hound.ignore_hidden_directories()
        if options.directories_only:
            hound.directory()
        if options.max_depth is not None:
            hound.depth(options.max_depth)
        hound.follow_symlinks(options.follow_symlinks)
        if options.negate:
            hound.not_()
        return hound

    # search paths

    def paths(self, *paths: Any) -> "FileHound":
        self._search_paths = normalize_search_paths(*paths)
        return self

    def path(self, path: Any) -> "FileHound":
        return self.paths(path)

    def get_search_paths(self) -> List[str]:
        return list(self._search_paths) if self._search_paths else normalize_search_paths()

    # filters

    def add_filter(self, predicate: Callable) -> "FileHound":
        self.predicates.add(predicate)
        return self

    def ext(self, *extensions: Any) -> "FileHound":
        return self.add_filter(extension_filter(*extensions))

    def size(self, size_expression: Any) -> "FileHound":
        return self.add_filter(size_filter(size_expression))

    def is_empty(self) -> "FileHound":
        return self.size(0)

    def glob(self, glob_pattern: str) -> "FileHound":
        return self.add_filter(glob_filter(glob_pattern))

    def match(self, glob_pattern: str) -> "FileHound":
        return self.glob(glob_pattern)

    def discard(self, *patterns: Any) -> "FileHound":
        for pattern in flatten_args(patterns):
            self.add_filter(discard_filter(pattern))
        return self

    def modified(self, date_expression: str) -> "FileHound":
        return self.add_filter(date_filter(FilterKind.MODIFIED, date_expression))

    def accessed(self, date_expression: str) -> "FileHound":
        return self.add_filter(date_filter(FilterKind.ACCESSED, date_expression))

    def changed(self, date_expression: str) -> "FileHound":
        return self.add_filter(date_filter(FilterKind.CHANGED, date_expression))

    def ignore_hidden_files(self) -> "FileHound":
        return self.add_filter(hidden_file_filter())

    def socket(self) -> "FileHound":
        return self.add_filter(socket_filter())

    def not_(self) -> "FileHound":
        self.predicates.negate()
        return self

    negate = not_

    # traversal options

    def ignore_hidden_directories(self) -> "FileHound":
        self._ignore_hidden_directories = True
        return self

    def directory(self) -> "FileHound":
        self._directories_only = True
        return self

    def depth(self, max_depth: int) -> "FileHound":
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ValueError(f"depth must be a non-negative integer, got {max_depth!r}")
        self._max_depth = max_depth
        return self

    def follow_symlinks(self, enabled: bool = True) -> "FileHound":
        # symlinked directories are descended by default; pass False to report them as plain entries.
        self._follow_symlinks = enabled
        return self

    # events

    def on(self, event: str, listener: Callable[..., Any]) -> "FileHound":
        self.events.on(event, listener)
        return self

    # execution

    def build_config(self) -> SearchConfig:
        return SearchConfig(
            matcher=self.predicates.finalize(),
            paths=tuple(self.get_search_paths()),
            max_depth=self._max_depth,
            ignore_hidden_directories=self._ignore_hidden_directories,
            directories_only=self._directories_only,
            follow_symlinks=self._follow_symlinks,
        )

    def _orchestrator(self) -> SearchOrchestrator:
        config = self.build_config()
        log.debug(
            "search_config_built",
            paths=list(config.paths),
            filters=[f.kind.value for f in config.matcher.filters],
            negate=config.matcher.negate_all,
            max_depth=config.max_depth,
            directories_only=config.directories_only,
        )
        return SearchOrchestrator(config, self.events)

    def find(self) -> Awaitable[List[str]]:
        # returns an awaitable; the search config is fixed now, not when awaited.
        return self._orchestrator().find()

    def find_outcome(self) -> Awaitable[SearchOutcome]:
        return self._orchestrator().find_outcome()

    def find_sync(self) -> List[str]:
        return self._orchestrator().find_sync()

    def find_outcome_sync(self) -> SearchOutcome:
        return self._orchestrator().find_outcome_sync()
