from __future__ import annotations

from ._cond import Cond as Cond
from ._cond import Condition as Condition
from ._cond import fatal as fatal
from ._cond import message as message
from ._cond import new as new
