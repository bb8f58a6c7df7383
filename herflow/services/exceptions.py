"""
Service-level exceptions.

This module contains exceptions that can be raised by the store, the
storage layer and the backup codec.
"""

class HerflowError(Exception):
    """Base exception for all HerFlow errors."""
    pass

class StoreError(HerflowError):
    """Base exception for domain store errors."""
    pass

class PeriodIndexError(StoreError, IndexError):
    """Raised when a period index is outside the stored collection."""
    pass

class InvalidInputError(StoreError, ValueError):
    """Raised when an edit would leave the store holding invalid data."""
    pass

class StorageError(HerflowError):
    """Raised when the local storage file cannot be read or written."""
    pass

class BackupFormatError(HerflowError, ValueError):
    """Raised when a backup document is malformed."""
    pass
