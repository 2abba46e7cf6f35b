"""Finance domain exceptions shared by every module."""


class FinanceError(Exception):
    """Base class for finance domain errors."""


class ValidationError(FinanceError, ValueError):
    """Raised when input is malformed or violates a domain rule."""


class NotFoundError(FinanceError):
    """Raised when a referenced record does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(FinanceError):
    """Raised when an operation would orphan dependent records."""


class StorageUnavailableError(FinanceError):
    """Raised when the backing store cannot be reached."""


class LedgerConsistencyError(FinanceError):
    """Raised when a wallet effect would be reverted more or less than once."""


class CacheError(FinanceError):
    """Raised by cache backends; never escapes the cache wrapper."""
