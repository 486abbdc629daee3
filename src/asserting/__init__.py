from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from . import cond as cond
from . import config as config
from ._conditions import Equals as Equals
from ._conditions import EqualsSlice as EqualsSlice
from ._conditions import Matches as Matches
from ._conditions import NotEquals as NotEquals
from ._conditions import PanicMatches as PanicMatches
from ._conditions import Panics as Panics
from ._deferred import DeferredError as DeferredError
from ._deferred import capture as capture
from ._deferred import capture_fatal as capture_fatal
from ._deferred import value_error as value_error
from ._deferred import value_error_fatal as value_error_fatal
from ._equality import eq as eq
from ._equality import equals_nil as equals_nil
from ._format import format_value as format_value
from ._nil import NilKind as NilKind
from ._nil import TypedNil as TypedNil
from ._nil import nil_of as nil_of
from ._tb import TB as TB
from ._tb import RecordingReporter as RecordingReporter
from ._tb import Reporter as Reporter
from ._untyped import Kind as Kind
from ._untyped import Untyped as Untyped
from ._untyped import UntypedComplex as UntypedComplex
from ._untyped import UntypedFloat as UntypedFloat
from ._untyped import UntypedInt as UntypedInt
from ._untyped import UntypedString as UntypedString
from ._untyped import UntypedUint as UntypedUint
from .cond import Cond as Cond
from .cond import Condition as Condition
from .errors import AssertingError as AssertingError
from .errors import InvalidUsageError as InvalidUsageError
from .errors import Panic as Panic
from .errors import panic as panic

try:
    __version__ = version(__name__)
except PackageNotFoundError:
    __version__ = "unknown"
