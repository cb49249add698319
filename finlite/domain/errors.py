"""Exceptions shared by the domain and store layers."""


class InvalidInputError(ValueError):
    """Raised when user-supplied data cannot be parsed or violates a field rule."""


class RecordNotFoundError(LookupError):
    """Raised when a record or stored file cannot be located by id."""


class StorageError(RuntimeError):
    """Raised when the storage backend fails (disk full, corruption, locking)."""
