class FileHoundError(Exception):
    # base exception for all filehound errors.
    pass

class ConfigError(FileHoundError):
    # errors related to configuration files and profiles.
    pass

class DiscoveryError(FileHoundError):
    # errors raised while walking a directory tree.
    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path

class RootUnreadableError(DiscoveryError):
    # a declared search root does not exist or cannot be listed.
    def __init__(self, path: str, reason: str = "search root is unreadable"):
        super().__init__(path, reason)

class SubdirectoryUnreadableError(DiscoveryError):
    # a directory below a search root could not be listed. reported, never raised by a search.
    def __init__(self, path: str, reason: str = "directory is unreadable"):
        super().__init__(path, reason)

class InvalidExpressionError(FileHoundError, ValueError):
    # a malformed size/date expression, glob or regex handed to a filter.
    pass

class OutputError(FileHoundError):
    # errors during output operations.
    pass
