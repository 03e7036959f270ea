"""Exceptions raised by the combination service."""


class CombinationServiceError(Exception):
    """Base class for combination service failures."""


class CombinationValidationError(CombinationServiceError):
    """The request breaks a business rule; fix the request before retrying."""


class PersistenceError(CombinationServiceError):
    """Storing the results failed and was rolled back; the request may be retried."""
