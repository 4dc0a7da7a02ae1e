"""Tagged unions over a fixed number of payload types.

A `Sum` carries exactly one payload together with the (1-based) number of the
slot it occupies. Handlers are always passed positionally, one per slot, in
slot order:

```python
x: Sum3[str, int, Error] = Sum3.t2(14)
x.reduce(
    lambda s: f"We've got a STRING: {s}",
    lambda i: f"We've got an INT: {i}",
    lambda err: f"Error ({err.code}): {err.message}",
)
```
"""

from __future__ import annotations
from collections.abc import Callable
from typing import Any, ClassVar, Self

from .errors import AmbiguousPayload, InvalidCast, InvalidState
from .utility import identity, matches


class Sum[*Ts]:
    """Exactly one payload, stored in one of `arity` numbered slots.

    Instances are immutable: every transformation returns a new `Sum`.
    """

    __slots__ = ("_which", "_value", "_arity")
    __match_args__ = ("which", "value")

    ARITY: ClassVar[int | None] = None

    def __init__(self, which: int, value: Any, arity: int | None = None):
        if arity is None:
            arity = self.ARITY
        if arity is None:
            raise TypeError(f"{type(self).__name__} needs an explicit arity")
        if self.ARITY is not None and arity != self.ARITY:
            raise ValueError(f"{type(self).__name__} has {self.ARITY} slots, not {arity}")
        if isinstance(which, bool) or not isinstance(which, int) or not 1 <= which <= arity:
            raise ValueError(f"slot number should be in 1..{arity}, got {which!r}")
        object.__setattr__(self, "_which", which)
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_arity", arity)

    @classmethod
    def at(cls, which: int, value: Any) -> Self:
        return cls(which, value)

    @staticmethod
    def of_arity(arity: int) -> type[Sum]:
        """The most specific `Sum` class for the given number of slots."""
        return _FIXED_ARITY.get(arity, Sum)

    @property
    def which(self) -> int:
        return self._which

    @property
    def value(self) -> Any:
        return self._value

    @property
    def arity(self) -> int:
        return self._arity

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if not isinstance(other, Sum):
            return NotImplemented
        return (self._arity, self._which, self._value) == (other._arity, other._which, other._value)

    def __hash__(self):
        return hash((self._arity, self._which, self._value))

    def __repr__(self):
        if self.ARITY is None:
            return f"Sum({self._which}, {self._value!r}, arity={self._arity})"
        return f"{type(self).__name__}.t{self._which}({self._value!r})"

    def _select[H](self, handlers: tuple[H, ...], method: str) -> H:
        if len(handlers) != self._arity:
            raise TypeError(
                f"{method}() takes one handler per slot ({self._arity}), got {len(handlers)}"
            )
        if not 1 <= self._which <= self._arity:
            raise InvalidState(self._which, self._arity)
        return handlers[self._which - 1]

    def _check_slot(self, which: int):
        if not 1 <= which <= self._arity:
            raise IndexError(f"slot number should be in 1..{self._arity}, got {which}")

    def _make(self, which: int, value: Any) -> Self:
        return type(self)(which, value, self._arity)

    def use(self, *actions: Callable[[Any], object]) -> None:
        """Call the action matching the occupied slot, for its side effect."""
        self._select(actions, "use")(self._value)

    def reduce[R](self, *mappers: Callable[[Any], R]) -> R:
        """Collapse into a single value. Executes the mapper matching the
        occupied slot and returns its result. Without mappers the payload
        is returned as-is, which is only sensible when all slots share a type.
        """
        if not mappers:
            return self._select((identity,) * self._arity, "reduce")(self._value)
        return self._select(mappers, "reduce")(self._value)

    collapse = reduce

    def map(self, *mappers: Callable[[Any], Any]) -> Self:
        """Map into a new sum of the same shape, allowing to change the type
        of every slot. Only the mapper of the occupied slot is called."""
        return self._make(self._which, self._select(mappers, "map")(self._value))

    def map_at(self, which: int, mapper: Callable[[Any], Any]) -> Self:
        self._check_slot(which)
        mappers = [identity] * self._arity
        mappers[which - 1] = mapper
        return self.map(*mappers)

    def as_at(self, which: int) -> Any:
        self._check_slot(which)
        if self._which != which:
            raise InvalidCast(which, self._which)
        return self._value

    def try_get_at(self, which: int) -> tuple[bool, Any]:
        self._check_slot(which)
        if self._which == which:
            return True, self._value
        return False, None


class Sum2[T1, T2](Sum[T1, T2]):
    __slots__ = ()
    ARITY = 2

    @classmethod
    def t1(cls, value: T1) -> Sum2[T1, T2]:
        return cls(1, value)

    @classmethod
    def t2(cls, value: T2) -> Sum2[T1, T2]:
        return cls(2, value)

    def map_t1[U](self, mapper: Callable[[T1], U]) -> Sum2[U, T2]:
        return self.map_at(1, mapper)

    def map_t2[U](self, mapper: Callable[[T2], U]) -> Sum2[T1, U]:
        return self.map_at(2, mapper)

    def as_t1(self) -> T1:
        """The payload of slot 1, or raises `InvalidCast`."""
        return self.as_at(1)

    def as_t2(self) -> T2:
        return self.as_at(2)

    def try_get_t1(self) -> tuple[bool, T1 | None]:
        return self.try_get_at(1)

    def try_get_t2(self) -> tuple[bool, T2 | None]:
        return self.try_get_at(2)


class Sum3[T1, T2, T3](Sum[T1, T2, T3]):
    __slots__ = ()
    ARITY = 3

    @classmethod
    def t1(cls, value: T1) -> Sum3[T1, T2, T3]:
        return cls(1, value)

    @classmethod
    def t2(cls, value: T2) -> Sum3[T1, T2, T3]:
        return cls(2, value)

    @classmethod
    def t3(cls, value: T3) -> Sum3[T1, T2, T3]:
        return cls(3, value)

    def map_t1[U](self, mapper: Callable[[T1], U]) -> Sum3[U, T2, T3]:
        return self.map_at(1, mapper)

    def map_t2[U](self, mapper: Callable[[T2], U]) -> Sum3[T1, U, T3]:
        return self.map_at(2, mapper)

    def map_t3[U](self, mapper: Callable[[T3], U]) -> Sum3[T1, T2, U]:
        return self.map_at(3, mapper)

    def as_t1(self) -> T1:
        return self.as_at(1)

    def as_t2(self) -> T2:
        return self.as_at(2)

    def as_t3(self) -> T3:
        return self.as_at(3)

    def try_get_t1(self) -> tuple[bool, T1 | None]:
        return self.try_get_at(1)

    def try_get_t2(self) -> tuple[bool, T2 | None]:
        return self.try_get_at(2)

    def try_get_t3(self) -> tuple[bool, T3 | None]:
        return self.try_get_at(3)


_FIXED_ARITY: dict[int, type[Sum]] = {2: Sum2, 3: Sum3}


class SumType:
    """Builds sums from bare payloads by looking at their runtime type.

    ```python
    IntOrText = SumType(int, str)
    IntOrText(14)      # Sum2.t1(14)
    IntOrText("hi")    # Sum2.t2('hi')
    ```

    When a payload fits more than one slot (as it always does for
    `SumType(int, int)`) an `AmbiguousPayload` is raised; use `at()` then.
    """

    __slots__ = ("types",)

    def __init__(self, *types: Any):
        if len(types) < 2:
            raise TypeError("a sum needs at least two slots")
        self.types = types

    def __repr__(self):
        names = ", ".join(getattr(t, "__name__", repr(t)) for t in self.types)
        return f"SumType({names})"

    @property
    def arity(self) -> int:
        return len(self.types)

    def at(self, which: int, value: Any) -> Sum:
        return Sum.of_arity(self.arity)(which, value, self.arity)

    def slots_for(self, value: Any) -> list[int]:
        return [k for k, t in enumerate(self.types, start=1) if matches(t, value)]

    def __call__(self, value: Any) -> Sum:
        match self.slots_for(value):
            case [which]:
                return self.at(which, value)
            case []:
                raise TypeError(f"Value {value!r} fits none of the slots of {self!r}")
            case slots:
                raise AmbiguousPayload(value, slots)
