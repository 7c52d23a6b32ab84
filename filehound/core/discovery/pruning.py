from filehound.config.settings import SearchConfig
from filehound.core.entry import FileEntry

def relative_depth(root: FileEntry, directory: FileEntry) -> int:
    return directory.depth - root.depth

def exceeds_max_depth(root: FileEntry, directory: FileEntry, config: SearchConfig) -> bool:
    # the root itself sits at depth 0 and is never cut by the depth rule.
    if config.max_depth is None:
        return False
    return relative_depth(root, directory) > config.max_depth

def should_prune(root: FileEntry, directory: FileEntry, config: SearchConfig) -> bool:
    """Decide whether the walk must not descend into `directory`.

    A pruned directory is never listed, so none of its contents are evaluated,
    whether or not directories-only mode would have wanted it.
    """
    return exceeds_max_depth(root, directory, config) or (
        config.ignore_hidden_directories and directory.is_hidden
    )
