# filehound/core/search.py
"""
Runs one walk per search root and turns the per-root results into a single
ordered result plus match/warning/error/end notifications.
"""
import asyncio
from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from filehound.config.settings import SearchConfig
from filehound.core.discovery.walker import Walker
from filehound.core.entry import FileEntry
from filehound.core.events import END, ERROR, MATCH, WARNING, SearchEvents
from filehound.exceptions import SubdirectoryUnreadableError
from filehound.logging_setup import configure_library_defaults

log = structlog.get_logger(__name__)


@dataclass
class SearchOutcome:
    matches: List[str] = field(default_factory=list)
    error: Optional[Exception] = None
    warnings: List[SubdirectoryUnreadableError] = field(default_factory=list)
    # set once error/end are being reported; later warnings belong to no one.
    settled: bool = field(default=False, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def flatten_results(per_root: List[List[FileEntry]]) -> List[str]:
    # concatenates by root index, never by completion order.
    return [entry.path for entries in per_root for entry in entries]


class SearchOrchestrator:
    def __init__(self, config: SearchConfig, events: Optional[SearchEvents] = None):
        configure_library_defaults()
        self.config = config
        self.events = events or SearchEvents()
        self.log = structlog.get_logger(f"{__name__}.{self.__class__.__name__}")

    def _new_walker(self, outcome: SearchOutcome) -> Walker:
        def on_warning(warning: SubdirectoryUnreadableError):
            if outcome.settled:
                # a sibling walk outlived a failed search; it is not cancelled, only muted.
                self.log.debug("late_warning_dropped", path=warning.path)
                return
            outcome.warnings.append(warning)
            self.events.emit(WARNING, warning)
        return Walker(self.config, on_warning=on_warning)

    def _emit_matches(self, outcome: SearchOutcome):
        for path in outcome.matches:
            self.events.emit(MATCH, path)

    async def find_outcome(self) -> SearchOutcome:
        # concurrent walk of every root. never raises; "end" is always the last event.
        outcome = SearchOutcome()
        walker = self._new_walker(outcome)
        self.log.info("search_started", roots=len(self.config.paths), mode="async")
        try:
            per_root = await asyncio.gather(*(walker.walk(path) for path in self.config.paths))
            outcome.matches = flatten_results(per_root)
            self._emit_matches(outcome)
            self.log.info("search_finished", matches=len(outcome.matches), warnings=len(outcome.warnings))
        except Exception as e:
            outcome.settled = True
            outcome.matches = []
            outcome.error = e
            self.log.error("search_failed", error_type=type(e).__name__, error=str(e))
            self.events.emit(ERROR, e)
        finally:
            outcome.settled = True
            self.events.emit(END)
        return outcome

    async def find(self) -> List[str]:
        outcome = await self.find_outcome()
        outcome.raise_for_error()
        return outcome.matches

    def find_outcome_sync(self) -> SearchOutcome:
        # sequential walk in root order. errors are stored, not emitted.
        outcome = SearchOutcome()
        walker = self._new_walker(outcome)
        self.log.info("search_started", roots=len(self.config.paths), mode="sync")
        try:
            per_root = [walker.walk_sync(path) for path in self.config.paths]
            outcome.matches = flatten_results(per_root)
            self._emit_matches(outcome)
            self.log.info("search_finished", matches=len(outcome.matches), warnings=len(outcome.warnings))
        except Exception as e:
            outcome.settled = True
            outcome.matches = []
            outcome.error = e
            self.log.error("search_failed", error_type=type(e).__name__, error=str(e))
        finally:
            outcome.settled = True
            self.events.emit(END)
        return outcome

    def find_sync(self) -> List[str]:
        outcome = self.find_outcome_sync()
        outcome.raise_for_error()
        return outcome.matches
