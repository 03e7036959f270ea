from .generator import router as generator_router

__all__ = ["generator_router"]
