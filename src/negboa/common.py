"""
Common data-structures used by all BOA components.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Any

from attrs import define

__all__ = ["ResponseType", "BOAParameter"]


class ResponseType(IntEnum):
    """Possible responses to an opponent offer."""

    ACCEPT_OFFER = 0
    REJECT_OFFER = 1


@define(frozen=True)
class BOAParameter:
    """
    Describes a tunable of a BOA component.

    Args:
        name: The name used in parameter mappings passed to `init`.
        default: The value used when the parameter is not given.
        description: A human readable explanation of the effect of the parameter.
        attr: The attribute of the component storing the value (defaults to `name`).
    """

    name: str
    default: Any
    description: str = ""
    attr: str | None = None

    @property
    def attribute(self) -> str:
        return self.attr if self.attr else self.name
