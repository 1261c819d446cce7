"""Exceptions raised while synchronizing the dialog places list."""


class PlaceSyncError(Exception):
    """Base class for all places synchronization errors."""


class NotConfigured(PlaceSyncError):
    """Shortcut base path or depth has not been set up yet."""


class InvalidSetup(PlaceSyncError):
    """Setup input failed validation; nothing was persisted."""


class InvalidPath(PlaceSyncError):
    """A target directory could not be resolved or created."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class StoreCorruption(PlaceSyncError):
    """A store value could not be read the way its key implies."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class StoreWriteFailure(PlaceSyncError):
    """A single set or delete against the store failed."""

    def __init__(self, message: str, key: str, operation: str) -> None:
        super().__init__(message)
        self.key = key
        self.operation = operation
