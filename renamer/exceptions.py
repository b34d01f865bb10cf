"""Exceptions raised before any file is touched."""


class RenameFilesError(Exception):
    """Base class for fatal rename-files errors."""


class PatternError(RenameFilesError):
    """The search regex does not compile."""

    def __init__(self, pattern, error):
        self.pattern = pattern
        self.error = error
        super().__init__(f"Invalid regex '{pattern}': {error}")


class RootPathError(RenameFilesError):
    """The search root is missing or is not a directory."""

    def __init__(self, root_path):
        self.root_path = root_path
        super().__init__(f"Not a directory: {root_path}")
