from __future__ import annotations

from typing import Optional, TypeVar

T = TypeVar("T")

DEFAULT_MEMORY_SIZE = 1024
DEFAULT_TIMEOUT = 6
DEFAULT_RUNTIME = "nodejs4.3"


def resolve_setting(*layers: Optional[T], default: T) -> T:
    """Return the first layer that is set, most specific first.

    ``resolve_setting(function.timeout, provider.timeout, default=DEFAULT_TIMEOUT)``
    """

    for value in layers:
        if value is not None:
            return value
    return default
