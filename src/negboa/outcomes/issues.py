from __future__ import annotations

from typing import Any, Iterable

from attrs import define, field

from negboa.helpers.strings import unique_name

__all__ = ["Issue", "make_issue"]


def _as_values(values) -> tuple:
    if isinstance(values, int):
        return tuple(range(values))
    return tuple(values)


@define(frozen=True)
class Issue:
    """
    A negotiable dimension with a finite set of discrete values.

    Args:
        values: The possible values of the issue (in order).
        name: Name of the issue.
    """

    values: tuple = field(converter=_as_values)
    name: str = field(factory=lambda: unique_name("i", add_time=False, rand_digits=6))

    def __attrs_post_init__(self):
        if len(self.values) == 0:
            raise ValueError(f"Issue {self.name} has no values")
        if len(set(self.values)) != len(self.values):
            raise ValueError(f"Issue {self.name} has repeated values: {self.values}")

    @property
    def cardinality(self) -> int:
        return len(self.values)

    def is_valid(self, v: Any) -> bool:
        """Checks that `v` is one of the values of this issue."""
        try:
            return v in self.values
        except TypeError:
            return False

    def index(self, v: Any) -> int:
        return self.values.index(v)

    def __iter__(self):
        return iter(self.values)

    def __len__(self):
        return len(self.values)


def make_issue(values: int | Iterable[Any], name: str | None = None) -> Issue:
    """
    Creates an issue.

    Args:
        values: Either an integer `n` (values 0 .. n-1) or an iterable of values.
        name: Name of the issue. If not given, a random name will be generated.

    Examples:
        >>> make_issue(3, "price").values
        (0, 1, 2)
        >>> make_issue(["a", "b"]).cardinality
        2
    """
    if name is None:
        return Issue(values)
    return Issue(values, name)
