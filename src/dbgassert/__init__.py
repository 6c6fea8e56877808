from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from . import config as config
from ._assert import assert_ as assert_
from ._assert import assert_conv as assert_conv
from ._assert import assert_deref as assert_deref
from ._assert import assert_err as assert_err
from ._assert import assert_f as assert_f
from ._assert import assert_not_nil as assert_not_nil
from ._assert import assert_not_ok as assert_not_ok
from ._assert import assert_ok as assert_ok
from ._assert import assert_type_of as assert_type_of
from ._assert import todo as todo
from .errors import ASSERT_TAG as ASSERT_TAG
from .errors import AssertionFailure as AssertionFailure
from .typecheck import typechecked as typechecked

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = "unknown"
