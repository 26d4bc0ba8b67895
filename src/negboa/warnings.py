"""Module for warnings functionality."""

from __future__ import annotations

import warnings

__all__ = [
    "warn",
    "NegboaWarning",
    "NegboaUnexpectedValueWarning",
    "NegboaParameterWarning",
    "NegboaUnknownParameterWarning",
    "NegboaTimeWarning",
]


class NegboaWarning(UserWarning):
    """Base of all warnings issued by negboa."""

    ...


def warn(message, category=NegboaWarning, stacklevel=2, source=None):
    """Issues a warning to the user. Defaults to `NegboaWarning` and stacklevel of 2."""
    return warnings.warn(message, category, stacklevel, source)


class NegboaUnexpectedValueWarning(NegboaWarning):
    """An observed bid references an issue or a value the model does not know."""

    ...


class NegboaParameterWarning(NegboaWarning):
    """A tunable was set to an inconsistent value and was reset to its default."""

    ...


class NegboaUnknownParameterWarning(NegboaWarning):
    """A parameter was passed to a component that does not declare it."""

    ...


class NegboaTimeWarning(NegboaWarning):
    """The negotiation time was moved backwards."""

    ...
