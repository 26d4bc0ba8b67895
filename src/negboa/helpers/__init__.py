"""
Helper modules
"""
from __future__ import annotations

from .strings import *
from .logging import *
from .timing import *

__all__ = strings.__all__ + logging.__all__ + timing.__all__
