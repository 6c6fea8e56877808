from __future__ import annotations

from typing import Final, NoReturn

ASSERT_TAG: Final = "[ASSERT FAILED]: "


class AssertionFailure(AssertionError):
    """Raised when a debug assertion does not hold.

    The message always starts with ``ASSERT_TAG`` so that failures can be
    told apart from ordinary errors in logs and test output.
    """

    def __init__(self, description: str):
        if not description.startswith(ASSERT_TAG):
            description = ASSERT_TAG + description
        super().__init__(description)

    @property
    def message(self) -> str:
        """The full, tagged failure message."""
        return self.args[0]

    def __str__(self) -> str:
        return self.message


def fail(description: str) -> NoReturn:
    """Raise an `AssertionFailure` for the given description."""
    __tracebackhide__ = True

    raise AssertionFailure(description)
