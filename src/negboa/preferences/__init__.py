"""
Utility functions.
"""
from __future__ import annotations

from .linear import *

__all__ = linear.__all__
