# -*- coding: utf-8 -*-
"""Decision core of a bilateral BOA negotiation agent: opponent modeling, concession, bid selection and acceptance."""
from __future__ import annotations

__author__ = """negboa developers"""
__version__ = "0.1.0"

from .config import *
from .common import *
from .outcomes import *
from .preferences import *
from .session import *
from .components import *
from .agent import *

__all__ = (
    config.__all__
    + common.__all__
    + outcomes.__all__
    + preferences.__all__
    + session.__all__
    + components.__all__
    + agent.__all__
)
