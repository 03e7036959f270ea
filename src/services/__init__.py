from .combination_service import CombinationService
from .errors import CombinationServiceError, CombinationValidationError, PersistenceError

__all__ = [
    "CombinationService",
    "CombinationServiceError",
    "CombinationValidationError",
    "PersistenceError",
]
