# filehound/core/discovery/__init__.py
"""
Path discovery for filehound.

This package handles normalizing search roots, deciding which directories to
prune, matching names against globs, and walking each root.
"""
from .path_resolution import normalize_search_paths
from .pruning import should_prune
from .walker import Walker

__all__ = ["normalize_search_paths", "should_prune", "Walker"]
