from .utils import violation_of

__all__ = ["violation_of"]
