"""filehound: composable recursive file discovery."""

from filehound.core.entry import FileEntry
from filehound.core.filters import Filter, FilterKind, Matcher, PredicateSet
from filehound.core.search import SearchOrchestrator, SearchOutcome
from filehound.config.settings import SearchConfig, SearchOptions
from filehound.exceptions import (
    FileHoundError,
    ConfigError,
    DiscoveryError,
    RootUnreadableError,
    SubdirectoryUnreadableError,
    InvalidExpressionError,
    OutputError,
)
from filehound.hound import FileHound

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "FileHound",
    "FileEntry",
    "Filter",
    "FilterKind",
    "Matcher",
    "PredicateSet",
    "SearchConfig",
    "SearchOptions",
    "SearchOrchestrator",
    "SearchOutcome",
    "FileHoundError",
    "ConfigError",
    "DiscoveryError",
    "RootUnreadableError",
    "SubdirectoryUnreadableError",
    "InvalidExpressionError",
    "OutputError",
]
