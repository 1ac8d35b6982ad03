class StorageError(Exception):
    """Base class for persistence failures recorded by the course store."""


class LoadFailure(StorageError):
    """Reading or decoding the persisted course list failed."""


class SaveFailure(StorageError):
    """Writing the course list to the key-value store failed."""
