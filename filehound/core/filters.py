"""
Filter model: built-in filter kinds, the mutable PredicateSet that a search
request accumulates, and the immutable Matcher snapshot a search evaluates.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Tuple, Union

import structlog

from filehound.core.discovery.pattern_matching import glob_matcher, regex_matcher
from filehound.core.entry import FileEntry
from filehound.core.expressions import age_in_seconds, parse_date_expression, parse_size_expression
from filehound.util import clean_extension, flatten_args

log = structlog.get_logger(__name__)

Predicate = Callable[[FileEntry], bool]


class FilterKind(Enum):
    EXTENSION = "extension"
    SIZE = "size"
    MODIFIED = "modified"
    ACCESSED = "accessed"
    CHANGED = "changed"
    GLOB = "glob"
    DISCARD = "discard"
    HIDDEN = "hidden"
    SOCKET = "socket"
    CUSTOM = "custom"

    @classmethod
    def date_kinds(cls) -> Tuple["FilterKind", ...]:
        return (cls.MODIFIED, cls.ACCESSED, cls.CHANGED)


@dataclass(frozen=True)
class Filter:
    """A single predicate tagged with its kind and the argument it was built from."""

    kind: FilterKind
    argument: Any
    predicate: Predicate

    def __call__(self, entry: FileEntry) -> bool:
        return bool(self.predicate(entry))


def extension_filter(*extensions: Any) -> Filter:
    cleaned = tuple(clean_extension(str(ext)) for ext in flatten_args(extensions))
    return Filter(FilterKind.EXTENSION, cleaned, lambda entry: entry.extension in cleaned)


def size_filter(expression: Union[str, int]) -> Filter:
    comparison = parse_size_expression(expression)
    return Filter(FilterKind.SIZE, expression, lambda entry: comparison(entry.size))


def date_filter(kind: FilterKind, expression: str) -> Filter:
    # kind selects which timestamp is compared: modified, accessed or changed.
    if kind not in FilterKind.date_kinds():
        raise ValueError(f"{kind} is not a date filter kind")
    comparison = parse_date_expression(expression)
    attribute = kind.value
    return Filter(kind, expression, lambda entry: comparison(age_in_seconds(getattr(entry, attribute))))


def glob_filter(glob_pattern: str) -> Filter:
    matches_name = glob_matcher(glob_pattern)
    return Filter(FilterKind.GLOB, glob_pattern, lambda entry: matches_name(entry.name))


def discard_filter(pattern: str) -> Filter:
    # excludes entries whose path contains a match for the regex.
    matches_path = regex_matcher(pattern)
    return Filter(FilterKind.DISCARD, pattern, lambda entry: not matches_path(entry.path))


def hidden_file_filter() -> Filter:
    return Filter(FilterKind.HIDDEN, None, lambda entry: not entry.is_hidden)


def socket_filter() -> Filter:
    return Filter(FilterKind.SOCKET, None, lambda entry: entry.is_socket)


def custom_filter(predicate: Predicate) -> Filter:
    if not callable(predicate):
        raise TypeError(f"custom filter must be callable, got {type(predicate).__name__}")
    return Filter(FilterKind.CUSTOM, predicate, predicate)


@dataclass(frozen=True)
class Matcher:
    """Immutable snapshot of a PredicateSet, safe to share between concurrent walks."""

    filters: Tuple[Filter, ...] = ()
    negate_all: bool = False

    def __call__(self, entry: FileEntry) -> bool:
        return all(f(entry) for f in self.filters) != self.negate_all


class PredicateSet:
    # ordered conjunction of filters with an optional whole-set negation.
    def __init__(self):
        self._filters: List[Filter] = []
        self.negate_all = False

    @property
    def filters(self) -> Tuple[Filter, ...]:
        return tuple(self._filters)

    def add(self, item: Union[Filter, Predicate]) -> "PredicateSet":
        new_filter = item if isinstance(item, Filter) else custom_filter(item)
        self._filters.append(new_filter)
        log.debug("filter_added", kind=new_filter.kind.value, total=len(self._filters))
        return self

    def negate(self) -> "PredicateSet":
        self.negate_all = True
        return self

    def evaluate(self, entry: FileEntry) -> bool:
        return all(f(entry) for f in self._filters) != self.negate_all

    def finalize(self) -> Matcher:
        return Matcher(filters=tuple(self._filters), negate_all=self.negate_all)

    def __len__(self) -> int:
        return len(self._filters)
