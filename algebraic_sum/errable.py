"""`Errable` is the same engine as `Fallible` under a different vocabulary:
`on_success`/`on_error` to chain, `reduce` to collapse, and the `Sum2`
accessors (`try_get_t1`, `as_t2`, ...) where slot 1 is the value and slot 2
the error.
"""

from __future__ import annotations
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar

from .fallible import Fallible, Pending, deferred
from .sum import Sum2
from .utility import identity


class Errable[V, E](Fallible[V, E]):
    __slots__ = ()

    _constructor_names: ClassVar[tuple[str, str]] = ("from_value", "from_error")

    @classmethod
    def from_value(cls, value: V) -> Errable[V, E]:
        return cls.wrap_value(value)

    @classmethod
    def from_error(cls, error: E) -> Errable[V, E]:
        return cls.wrap_error(error)

    def on_success(self, transform: Callable[[V], Any]) -> Errable | PendingErrable:
        """Alias of `then`."""
        return self.then(transform)

    def reduce[R](
        self,
        on_success: Callable[[V], R] = identity,
        on_error: Callable[[E], R] = identity,
    ) -> R:
        """Eliminator, see `unwrap`. Note that `reduce(f)` applies `f` to a
        success; write `reduce(on_error=f)` for an error-only handler."""
        return self.unwrap(on_success, on_error)

    collapse = reduce

    def use(self, on_success: Callable[[V], object], on_error: Callable[[E], object]) -> None:
        self._sum.use(on_success, on_error)

    def map[U, F](
        self, on_success: Callable[[V], U], on_error: Callable[[E], F]
    ) -> Errable[U, F]:
        return type(self)._from_sum(self._sum.map(on_success, on_error))

    def map_t1[U](self, mapper: Callable[[V], U]) -> Errable[U, E]:
        return type(self)._from_sum(self._sum.map_t1(mapper))

    def map_t2[F](self, mapper: Callable[[E], F]) -> Errable[V, F]:
        return type(self)._from_sum(self._sum.map_t2(mapper))

    def as_t1(self) -> V:
        return self._sum.as_t1()

    def as_t2(self) -> E:
        return self._sum.as_t2()

    def try_get_t1(self) -> tuple[bool, V | None]:
        return self._sum.try_get_t1()

    def try_get_t2(self) -> tuple[bool, E | None]:
        return self._sum.try_get_t2()

    def to_sum(self) -> Sum2[V, E]:
        return self._sum


class PendingErrable[V, E](Pending[V, E]):
    kind = Errable

    def on_success(self, transform: Callable[[V], Any]) -> PendingErrable:
        return self.then(transform)

    async def reduce[R](
        self,
        on_success: Callable[[V], R | Awaitable[R]] = identity,
        on_error: Callable[[E], R | Awaitable[R]] = identity,
    ) -> R:
        return await self.unwrap(on_success, on_error)

    collapse = reduce


Errable.pending_type = PendingErrable


def from_value(value: Any) -> Errable:
    return Errable.from_value(value)


def from_error(error: Any) -> Errable:
    return Errable.from_error(error)


def deferred_errable(coroutine):
    """`deferred` for coroutine functions returning an `Errable`."""
    return deferred(coroutine, PendingErrable)


def pending_errable[V, E](source: Awaitable[Errable[V, E]]) -> PendingErrable[V, E]:
    return PendingErrable.from_awaitable(source)


__all__ = [
    "Errable", "PendingErrable", "from_value", "from_error", "pending_errable",
    "deferred_errable",
]
