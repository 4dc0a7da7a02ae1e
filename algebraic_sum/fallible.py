"""Represents the result from an operation that can fail: either a successful
value or an erroneous one.

A `Fallible` hides the `Sum2` it is built on; everything goes through the
combinators below. Each combinator takes a transform that may

- return a plain value, which gets wrapped;
- return a `Fallible`, which is used as-is (no double wrapping);
- be asynchronous, in which case a `Pending` comes back.

`Pending` offers the same combinators, so chains read the same whether or not
some step awaits something:

```python
view = await (
    validator.validate_as_fallible_async(model)
    .then(process_async)
    .do(audit)
    .then(controller.view)
    .do_with_error(copy_errors_to_model_state)
    .on_error(lambda _: controller.view())
    .unwrap()
)
```

Every `Fallible` is itself awaitable (resolving to itself), so awaiting the
result of a chain is always safe.
"""

from __future__ import annotations
from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any, ClassVar, Self
import asyncio
import functools
import inspect

from .logging import logger
from .sum import Sum2
from .utility import identity


log = logger("fallible")

VALUE = 1
ERROR = 2


def is_async(fn: Callable[..., Any]) -> bool:
    """True for functions declared `async def` (also through `functools.partial`
    and bound methods). Those always produce a `Pending`, on either branch."""
    return inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(
        getattr(fn, "__call__", None)
    )


def is_pending(x: Any) -> bool:
    return inspect.isawaitable(x) and not isinstance(x, Fallible)


async def _ready[T](x: T) -> T:
    return x


class Fallible[V, E]:
    __slots__ = ("_sum",)

    pending_type: ClassVar[type[Pending]]
    _constructor_names: ClassVar[tuple[str, str]] = ("wrap_value", "wrap_error")

    def __init__(self, *args, **kwargs):
        raise TypeError(
            f"use {type(self).__name__}.{self._constructor_names[0]}() or "
            f"{type(self).__name__}.{self._constructor_names[1]}()"
        )

    @classmethod
    def _from_sum(cls, inner: Sum2[V, E]) -> Self:
        self = object.__new__(cls)
        object.__setattr__(self, "_sum", inner)
        return self

    @classmethod
    def wrap_value(cls, value: V) -> Self:
        return cls._from_sum(Sum2.t1(value))

    @classmethod
    def wrap_error(cls, error: E) -> Self:
        return cls._from_sum(Sum2.t2(error))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, Fallible):
            return NotImplemented
        return self._sum == other._sum

    def __hash__(self):
        return hash(self._sum)

    def __repr__(self):
        name = self._constructor_names[self._sum.which - 1]
        return f"{type(self).__name__}.{name}({self._sum.value!r})"

    def __await__(self) -> Generator[Any, None, Self]:
        return _ready(self).__await__()

    def _coerce(self, other: Fallible) -> Self:
        if isinstance(other, type(self)):
            return other
        return type(self)._from_sum(other._sum)

    def _settle(self, result: Any, slot: int) -> Self:
        if isinstance(result, Fallible):
            return self._coerce(result)
        return type(self)._from_sum(Sum2(slot, result))

    async def _settle_later(self, result: Awaitable[Any], slot: int) -> Self:
        return self._settle(await result, slot)

    def _step(self, slot: int, transform: Callable[[Any], Any]) -> Self | Awaitable[Self]:
        ok, payload = self._sum.try_get_at(slot)
        if not ok:
            return self
        result = transform(payload)
        if is_pending(result):
            return self._settle_later(result, slot)
        return self._settle(result, slot)

    def _tap(self, slot: int, action: Callable[[Any], Any]) -> Self | Awaitable[Self]:
        ok, payload = self._sum.try_get_at(slot)
        if not ok:
            return self
        result = action(payload)
        if is_pending(result):
            return _after(result, self)
        return self

    def then[U](
        self, transform: Callable[[V], Any]
    ) -> Fallible[U, E] | Pending[U, E]:
        """If this object contains a successful value, runs `transform` on it.
        A plain return value becomes the new successful value; a returned
        `Fallible` is passed on as-is. Otherwise the error is passed on and
        `transform` is not called."""
        return bind(self, lambda f: f._step(VALUE, transform), is_async(transform))

    def on_error[F](
        self, transform: Callable[[E], Any]
    ) -> Fallible[V, F] | Pending[V, F]:
        """Mirror of `then` for the erroneous value."""
        return bind(self, lambda f: f._step(ERROR, transform), is_async(transform))

    def do(self, action: Callable[[V], Any]) -> Self | Pending[V, E]:
        """Run `action` on a successful value, for its side effect only. The
        receiver itself is returned (inside a `Pending` for async actions)."""
        return bind(self, lambda f: f._tap(VALUE, action), is_async(action))

    def do_with_error(self, action: Callable[[E], Any]) -> Self | Pending[V, E]:
        """`do` for the erroneous value."""
        return bind(self, lambda f: f._tap(ERROR, action), is_async(action))

    def unwrap[T](
        self,
        when_value: Callable[[V], T] = identity,
        when_error: Callable[[E], T] = identity,
    ) -> T:
        """Collapse both branches into one result. A mapper left out means that
        branch is returned as-is, so `unwrap()` collapses a `Fallible[T, T]`.

        A single positional mapper is `when_value`. To handle only the error,
        name it: `unwrap(when_error=fallback)`.
        """
        return self._sum.reduce(when_value, when_error)

    def is_value(self) -> bool:
        return self._sum.which == VALUE

    def is_error(self) -> bool:
        return self._sum.which == ERROR

    def try_unwrap_value(self) -> tuple[bool, V | None]:
        return self._sum.try_get_t1()

    def try_unwrap_error(self) -> tuple[bool, E | None]:
        return self._sum.try_get_t2()


async def _after[T](awaitable: Awaitable[Any], result: T) -> T:
    await awaitable
    return result


def bind(
    receiver: Fallible | Pending,
    step: Callable[[Fallible], Fallible | Awaitable[Fallible]],
    defer: bool = False,
) -> Any:
    """Apply `step` to the resolved receiver.

    The receiver is awaited first if it is pending, then `step` dispatches on
    the resolved branch; if what it returns is awaitable, that is awaited too.
    Nothing runs concurrently. The result stays a plain `Fallible` only when
    neither side needed awaiting and `defer` is not set.
    """
    if isinstance(receiver, Fallible):
        out = step(receiver)
        if is_pending(out) or defer:
            return receiver.pending_type(out)
        return out

    async def run():
        resolved = await receiver
        out = step(resolved)
        if is_pending(out):
            out = await out
        return out

    return type(receiver)(run())


class Pending[V, E]:
    """An awaitable `Fallible`. The wrapped awaitable is awaited at most once;
    later awaits return the same result (or raise the same exception).

    The source is one-shot, so that includes cancellation: when the awaiter
    that is running the source gets cancelled, every later await raises
    `CancelledError` as well. Put the `Pending` in a task
    (`asyncio.ensure_future(p)`) and shield that when consumers time out
    independently.
    """

    kind: ClassVar[type[Fallible]] = Fallible

    def __init__(self, source: Awaitable[Fallible[V, E]]):
        self._source = source
        self._result: Fallible[V, E] | None = None
        self._failure: BaseException | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_awaitable(cls, source: Awaitable[Fallible[V, E]]) -> Self:
        """Lift an awaitable (coroutine, task, future) of a `Fallible` into a chain."""
        if isinstance(source, cls):
            return source
        return cls(source)

    def __repr__(self):
        if self._failure is not None:
            state = "failed"
        elif self._result is not None:
            state = "resolved"
        else:
            state = "unresolved"
        return f"<{type(self).__name__} {state}>"

    def __await__(self) -> Generator[Any, None, Fallible[V, E]]:
        return self._resolve().__await__()

    async def _resolve(self) -> Fallible[V, E]:
        async with self._lock:
            if self._failure is not None:
                raise self._failure
            if self._result is None:
                try:
                    result = await self._source
                except BaseException as e:
                    self._failure = e
                    raise
                if not isinstance(result, Fallible):
                    self._failure = TypeError(
                        f"{type(self).__name__} should resolve to a {self.kind.__name__}, "
                        f"got {type(result).__name__}"
                    )
                    raise self._failure
                self._result = (
                    result if isinstance(result, self.kind) else self.kind._from_sum(result._sum)
                )
                log.debug("`%s` resolved to %r", type(self).__name__, self._result)
        return self._result

    def then(self, transform: Callable[[V], Any]) -> Pending:
        return bind(self, lambda f: f._step(VALUE, transform))

    def on_error(self, transform: Callable[[E], Any]) -> Pending:
        return bind(self, lambda f: f._step(ERROR, transform))

    def do(self, action: Callable[[V], Any]) -> Self:
        return bind(self, lambda f: f._tap(VALUE, action))

    def do_with_error(self, action: Callable[[E], Any]) -> Self:
        return bind(self, lambda f: f._tap(ERROR, action))

    async def unwrap[T](
        self,
        when_value: Callable[[V], T | Awaitable[T]] = identity,
        when_error: Callable[[E], T | Awaitable[T]] = identity,
    ) -> T:
        result = (await self).unwrap(when_value, when_error)
        if inspect.isawaitable(result):
            return await result
        return result


Fallible.pending_type = Pending


def pending[V, E](source: Awaitable[Fallible[V, E]]) -> Pending[V, E]:
    return Pending.from_awaitable(source)


def deferred[**P, V, E](
    coroutine: Callable[P, Coroutine[Any, Any, Fallible[V, E]]],
    pending_type: type[Pending] = Pending,
) -> Callable[P, Pending[V, E]]:
    """Transform a coroutine function returning a `Fallible` into a function
    returning a `Pending`, so that a chain can start right from its call:

    ```python
    @deferred
    async def fetch(key: str) -> Fallible[Record, Error]: ...

    await fetch("a").then(render).unwrap()
    ```

    The wrapper still counts as asynchronous for `is_async`, so passing it to
    `then` and friends always gives a `Pending`.
    """
    @functools.wraps(coroutine)
    def run(*args: P.args, **kwargs: P.kwargs) -> Pending[V, E]:
        return pending_type(coroutine(*args, **kwargs))

    return inspect.markcoroutinefunction(run)
