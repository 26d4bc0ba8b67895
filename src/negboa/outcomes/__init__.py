"""
Issues, bids and outcome spaces.
"""
from __future__ import annotations

from .issues import *
from .bids import *
from .outcome_space import *
from .sorted_space import *

__all__ = (
    issues.__all__ + bids.__all__ + outcome_space.__all__ + sorted_space.__all__
)
