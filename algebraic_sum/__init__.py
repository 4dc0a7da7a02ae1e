from .sum import Sum, Sum2, Sum3, SumType
from .fallible import Fallible, Pending, deferred, pending
from .errable import Errable, PendingErrable, deferred_errable, pending_errable
from .errors import AmbiguousPayload, InvalidCast, InvalidState
from .version import __version__

__all__ = [
    "Sum", "Sum2", "Sum3", "SumType",
    "Fallible", "Pending", "deferred", "pending",
    "Errable", "PendingErrable", "deferred_errable", "pending_errable",
    "AmbiguousPayload", "InvalidCast", "InvalidState",
    "__version__",
]
