"""Exception classes for the transactions API."""


class TransactionsError(Exception):
    """Base exception for the transactions API."""
    pass


class InvalidMonthError(TransactionsError):
    """Month query parameter missing or outside 1-12."""

    def __init__(self, message: str = "Valid month is required"):
        super().__init__(message)


class SeedSourceError(TransactionsError):
    """Seed data could not be fetched or did not validate."""
    pass
