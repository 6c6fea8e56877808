from __future__ import annotations

from abc import ABCMeta
from typing import Any, NoReturn, get_origin, overload

from beartype.door import is_bearable
from typing_extensions import TypeVar

from ._format import quote, sprintf, type_name, value_type_name
from .errors import fail
from .typecheck import typechecked

T = TypeVar("T")


@typechecked
def assert_(cond: bool, msg: str) -> None:
    """Raise `AssertionFailure` with ``msg`` if ``cond`` is false.

    Examples:
        assert_(foo == "bar", 'foo is not "bar"')
        # [ASSERT FAILED]: foo is not "bar"
    """
    __tracebackhide__ = True

    if cond:
        return

    fail(msg)


@typechecked
def assert_f(cond: bool, format: str, *args: Any) -> None:
    """Like `assert_`, but the message is a printf-style template.

    Examples:
        assert_f(foo == bar, "%r is not %r", foo, bar)
    """
    __tracebackhide__ = True

    if cond:
        return

    fail(sprintf(format, args))


@typechecked
def assert_ok(ok: bool, format: str, *args: Any) -> None:
    """Raise if ``ok`` is false. The message describes the call that produced it.

    Examples:
        ok = my_function(foo, "bar")
        assert_ok(ok, "my_function(%s, %r)", foo, "bar")
        # [ASSERT FAILED]: my_function(foo, 'bar') = false
    """
    __tracebackhide__ = True

    if ok:
        return

    fail(sprintf(format, args) + " = false")


@typechecked
def assert_not_ok(ok: bool, format: str, *args: Any) -> None:
    """Raise if ``ok`` is true; the counterpart of `assert_ok`."""
    __tracebackhide__ = True

    if not ok:
        return

    fail(sprintf(format, args) + " = true")


@typechecked
def assert_err(err: BaseException | None, format: str, *args: Any) -> None:
    """Raise if ``err`` is not None, appending the error's text to the message.

    Examples:
        err = validate(foo)
        assert_err(err, "validate(%s)", foo)
        # [ASSERT FAILED]: validate(foo) = <str(err)>
    """
    __tracebackhide__ = True

    if err is None:
        return

    fail(sprintf(format, args) + " = " + str(err))


@typechecked
def assert_not_nil(value: object, name: str) -> None:
    __tracebackhide__ = True

    if value is not None:
        return

    fail(quote(name) + " must not be nil")


@typechecked
def assert_deref(elem: T | None, is_param: bool, name: str) -> T:
    """Return ``elem`` unchanged, raising if it is None.

    Args:
        elem: the value to check.
        is_param: whether ``name`` refers to a function parameter or a local
            variable; only affects the message.
        name: the name of the value.
    """
    __tracebackhide__ = True

    if elem is not None:
        return elem

    kind = "parameter" if is_param else "variable"
    fail(f"{kind} ({name}) expected to not be nil")


def _matches(elem: object, expected: Any) -> bool:
    # Concrete classes need an exact type match; abstract interfaces and
    # typing hints accept anything that satisfies them.
    if expected is object or expected is Any:
        return True

    if (
        get_origin(expected) is None
        and isinstance(expected, type)
        and not isinstance(expected, ABCMeta)
    ):
        return type(elem) is expected

    return is_bearable(elem, expected)


def _type_mismatch(target: str, expected: Any, actual: str) -> str:
    return (
        f"expected {quote(target)} to be of type {type_name(expected)}, "
        f"got {actual} instead"
    )


@typechecked
def assert_type_of(
    elem: object,
    expected: Any,
    target: str,
    allow_nil: bool = False,
) -> None:
    """Raise if ``elem`` is not of the ``expected`` type.

    Args:
        elem: the value to check.
        expected: the expected class or typing hint.
        target: the name of the value, used in the message.
        allow_nil: whether None is accepted regardless of ``expected``.
    """
    __tracebackhide__ = True

    if elem is None:
        if not allow_nil:
            fail(_type_mismatch(target, expected, "None"))
        return

    if not _matches(elem, expected):
        fail(_type_mismatch(target, expected, value_type_name(elem)))


@overload
def assert_conv(elem: object, expected: type[T], target: str) -> T: ...


@overload
def assert_conv(elem: object, expected: Any, target: str) -> Any: ...


@typechecked
def assert_conv(elem: object, expected: Any, target: str) -> Any:
    """Return ``elem`` narrowed to ``expected``, raising if it is None or
    of another type.
    """
    __tracebackhide__ = True

    if elem is None:
        fail(_type_mismatch(target, expected, "None"))

    if not _matches(elem, expected):
        fail(_type_mismatch(target, expected, value_type_name(elem)))

    return elem


@typechecked
def todo() -> NoReturn:
    """Placeholder for a case that has not been handled yet. Always raises."""
    __tracebackhide__ = True

    fail("TODO: Handle this case")
