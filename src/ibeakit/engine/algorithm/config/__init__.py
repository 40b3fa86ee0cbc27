"""Algorithm configuration objects."""

from .ibea import IBEAConfig

__all__ = ["IBEAConfig"]
