from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple
import structlog

if TYPE_CHECKING:
    from filehound.core.filters import Matcher

log = structlog.get_logger(__name__)

@dataclass(frozen=True)
class SearchConfig:
    # immutable per-search snapshot. built once when find()/find_sync() is called.
    matcher: "Matcher"
    paths: Tuple[str, ...] = ()
    max_depth: Optional[int] = None
    ignore_hidden_directories: bool = False
    directories_only: bool = False
    follow_symlinks: bool = True

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")

@dataclass
class SearchOptions:
    # holds all user-level options for a single cli run, before they become a FileHound.
    paths: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=list)
    globs: List[str] = field(default_factory=list)
    discard_patterns: List[str] = field(default_factory=list)
    size: Optional[str] = None
    modified: Optional[str] = None
    accessed: Optional[str] = None
    changed: Optional[str] = None
    empty: bool = False
    socket: bool = False
    ignore_hidden_files: bool = False
    ignore_hidden_directories: bool = False
    directories_only: bool = False
    negate: bool = False
    max_depth: Optional[int] = None
    follow_symlinks: bool = True
    sync: bool = False
    null_separated: bool = False
    summary: bool = False
    output_file: Optional[Path] = None
    save_profile_name: Optional[str] = None
