from .mysql import CombinationStore

__all__ = ["CombinationStore"]
