"""
BOA components: opponent models, offering policies, bid selectors and acceptance policies.
"""
from __future__ import annotations

from .base import *
from .models import *
from .selectors import *
from .offering import *
from .acceptance import *

__all__ = (
    base.__all__
    + models.__all__
    + selectors.__all__
    + offering.__all__
    + acceptance.__all__
)
