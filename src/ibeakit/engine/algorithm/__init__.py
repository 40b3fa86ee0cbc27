"""Evolutionary algorithms."""

from .config import IBEAConfig
from .ibea import IBEA

__all__ = ["IBEA", "IBEAConfig"]
