import os
from typing import Any, List
import structlog

from filehound.util import flatten_args

log = structlog.get_logger(__name__)

def normalize_search_paths(*paths: Any) -> List[str]:
    # flattens, normalizes and de-duplicates root paths, keeping first-occurrence order.
    # symlinks are left unresolved. no paths means the current working directory.
    raw_paths = [os.fspath(p) for p in flatten_args(paths)]
    if not raw_paths:
        raw_paths = [os.getcwd()]
        log.debug("search_paths_defaulted_to_cwd", cwd=raw_paths[0])

    normalized: List[str] = []
    seen = set()
    for raw_path in raw_paths:
        norm_path = os.path.normpath(raw_path)
        if norm_path in seen:
            continue
        seen.add(norm_path)
        normalized.append(norm_path)

    log.debug("search_paths_normalized", count=len(normalized), dropped=len(raw_paths) - len(normalized))
    return normalized
