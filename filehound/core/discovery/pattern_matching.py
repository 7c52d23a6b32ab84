# filehound/core/discovery/pattern_matching.py
import re
from typing import Callable
import pathspec
import structlog

from filehound.exceptions import InvalidExpressionError

log = structlog.get_logger(__name__)

def compile_glob(glob_pattern: str) -> pathspec.PathSpec:
    # compiles a single glob pattern into a pathspec object for name matching.
    if not glob_pattern:
        raise InvalidExpressionError("glob pattern must not be empty")
    # gitignore syntax would read these as a negation or a comment and match nothing.
    if glob_pattern[0] in "!#":
        raise InvalidExpressionError(
            f"glob pattern {glob_pattern!r} must not start with {glob_pattern[0]!r}; use not_() to negate"
        )
    try:
        return pathspec.PathSpec.from_lines("gitignore", [glob_pattern])
    except Exception as e:
        raise InvalidExpressionError(f"error compiling glob pattern {glob_pattern!r}: {e}") from e

def glob_matcher(glob_pattern: str) -> Callable[[str], bool]:
    # returns a predicate over a file name for the given glob.
    spec = compile_glob(glob_pattern)
    log.debug("glob_compiled", pattern=glob_pattern)
    return spec.match_file

def compile_regex(pattern: str) -> re.Pattern:
    # compiles a user-supplied regular expression, failing fast on bad syntax.
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidExpressionError(f"invalid regular expression {pattern!r}: {e}") from e

def regex_matcher(pattern: str) -> Callable[[str], bool]:
    # returns a predicate that searches the regex anywhere in a path string.
    compiled = compile_regex(pattern)
    return lambda value: compiled.search(value) is not None
