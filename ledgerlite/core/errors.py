# ledgerlite/core/errors.py


class LedgerLiteError(Exception):
    """Base class for errors raised by ledgerlite."""


class ValidationError(LedgerLiteError, ValueError):
    """A transaction or argument failed validation."""


class TransactionNotFoundError(LedgerLiteError, LookupError):
    """No stored transaction has the requested id."""


class CorruptDataError(LedgerLiteError):
    """A persisted transactions document could not be parsed."""


class ConfigError(LedgerLiteError):
    """The configuration is malformed or names an unknown module."""
