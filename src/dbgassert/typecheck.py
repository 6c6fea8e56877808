from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, cast

from beartype import beartype
from typing_extensions import TypeVar

from .config import typecheck_enabled

_CallableT = TypeVar("_CallableT", bound=Callable[..., Any])


def typechecked(fn: _CallableT, /) -> _CallableT:
    """
    Decorator to typecheck a function's arguments and return value with
    `beartype`, but only while `config.typecheck_enabled()` is true.

    The beartype wrapper is built once; the enabled flag is consulted on
    every call so that `config.typecheck_override` takes effect immediately.

    Args:
        fn: Function to typecheck.
    Returns:
        The wrapped function.
    """
    checked = beartype(fn)

    @functools.wraps(fn)
    def wrapped(*args: Any, **kwargs: Any) -> Any:
        __tracebackhide__ = True

        if typecheck_enabled():
            return checked(*args, **kwargs)
        return fn(*args, **kwargs)

    return cast(_CallableT, wrapped)
