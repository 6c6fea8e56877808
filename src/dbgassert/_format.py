from __future__ import annotations

import builtins
import json
from collections.abc import Mapping
from typing import Any, get_origin


def sprintf(format: str, args: tuple[Any, ...]) -> str:
    """Render a printf-style template.

    A template without arguments is returned as-is, so literal ``%`` signs
    need no escaping. A single non-empty mapping argument is used for
    ``%(name)s`` style keys, the same way `logging` treats record args.
    """
    if not args:
        return format

    values: Any = args
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values = args[0]

    try:
        return format % values
    except (TypeError, ValueError, KeyError):
        # Raw template plus args.
        return f"{format} {args!r}"


def quote(s: str) -> str:
    """Double-quote ``s``, escaping quotes, backslashes and control characters."""
    return json.dumps(s, ensure_ascii=False)


def type_name(hint: Any) -> str:
    """Human-readable name of a class or typing hint."""
    if hint is None or hint is type(None):
        return "None"

    if get_origin(hint) is None and isinstance(hint, type):
        if hint.__module__ == builtins.__name__:
            return hint.__qualname__
        return f"{hint.__module__}.{hint.__qualname__}"

    return repr(hint)


def value_type_name(value: object) -> str:
    return type_name(type(value))
