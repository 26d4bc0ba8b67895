from __future__ import annotations

import datetime
import random
import string

__all__ = ["unique_name"]

_NAME_CHARS = string.digits + string.ascii_letters


def unique_name(base, add_time=True, rand_digits=8, sep="/") -> str:
    """Return a unique name made of `base`, a time-stamp and random characters.

    Args:
        base: Base of the name (converted to a string).
        add_time: Append the current time (down to microseconds).
        rand_digits: Number of random alphanumeric characters to append.
        sep: Separator between the base and the generated part.

    Examples:

        >>> len(unique_name('')) == 8 + 1 + 6 + 6 + 8
        True
        >>> unique_name('issue', add_time=False, rand_digits=0)
        'issue'
    """
    generated = datetime.datetime.now().strftime("%Y%m%dH%H%M%S%f") if add_time else ""
    if rand_digits > 0:
        generated += "".join(random.choices(_NAME_CHARS, k=rand_digits))
    base = str(base)
    if not generated or not base:
        return base + generated
    return f"{base}{sep}{generated}"
