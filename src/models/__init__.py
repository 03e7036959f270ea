from .generator import (
    CountResponse,
    GenerateRequest,
    GenerateResponse,
    GenerationResult,
)

__all__ = [
    "GenerateRequest",
    "GenerateResponse",
    "CountResponse",
    "GenerationResult",
]
