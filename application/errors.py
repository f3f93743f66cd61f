"""Error taxonomy surfaced by the command layer."""


class AppError(Exception):
    """Base class for failures reported to the user as a status message."""


class StorageError(AppError):
    """Any failure raised by a Storage implementation."""


class StorageEngineError(StorageError):
    """The underlying engine (filesystem, YAML codec) failed."""


class NotFoundError(StorageError):
    def __init__(self, kind: str, ident: str):
        super().__init__(f"{kind} not found: {ident}")
        self.kind = kind
        self.ident = ident


class ConversionError(StorageError):
    """A stored record could not be converted into a domain object."""


class MigrationError(StorageError):
    """Stored data uses a schema version this build cannot read."""


class InboxProtectedError(StorageError):
    def __init__(self) -> None:
        super().__init__("The Inbox project cannot be deleted")


__all__ = [
    "AppError",
    "StorageError",
    "StorageEngineError",
    "NotFoundError",
    "ConversionError",
    "MigrationError",
    "InboxProtectedError",
]
