import pytest
from hypothesis import given
from hypothesis.strategies import booleans, builds, integers, text

from algebraic_sum import Fallible, Pending
from algebraic_sum.demo import Error


fallibles = builds(
    lambda b, v, e: Fallible.wrap_value(v) if b else Fallible.wrap_error(Error(e, "x")),
    booleans(), text(), integers(),
)


class Spy:
    def __init__(self, result=None):
        self.calls = []
        self.result = result

    def __call__(self, x):
        self.calls.append(x)
        return self.result


@given(fallibles)
def test_one_branch(f):
    has_value, value = f.try_unwrap_value()
    has_error, error = f.try_unwrap_error()
    assert has_value != has_error
    assert f.is_value() == has_value and f.is_error() == has_error
    assert (value is None) or has_value
    assert (error is None) or has_error


def test_constructor_is_private():
    with pytest.raises(TypeError):
        Fallible(3)  # type: ignore


def test_then_wraps_plain_result():
    assert Fallible.wrap_value(2).then(lambda x: x * 10) == Fallible.wrap_value(20)


def test_then_flattens_wrapped_result():
    def half(x: int) -> Fallible[int, str]:
        if x % 2:
            return Fallible.wrap_error("odd")
        return Fallible.wrap_value(x // 2)

    assert Fallible.wrap_value(4).then(half) == half(4)
    assert Fallible.wrap_value(3).then(half) == Fallible.wrap_error("odd")


def test_then_skips_errors():
    spy = Spy(0)
    error = Error(7, "too short")
    f = Fallible.wrap_error(error)
    result = f.then(spy)
    assert spy.calls == []
    assert result.unwrap(when_value=str) is error


def test_on_error_skips_values():
    spy = Spy("handled")
    result = Fallible.wrap_value(3).on_error(spy)
    assert spy.calls == []
    assert result == Fallible.wrap_value(3)


def test_on_error_maps_and_flattens():
    assert Fallible.wrap_error(4).on_error(str) == Fallible.wrap_error("4")
    assert Fallible.wrap_error(4).on_error(lambda e: Fallible.wrap_value(-e)) == Fallible.wrap_value(-4)


def test_do_returns_receiver():
    spy = Spy("ignored")
    f = Fallible.wrap_value(1)
    assert f.do(spy) is f
    assert f.do_with_error(spy) is f
    assert spy.calls == [1]

    g = Fallible.wrap_error("e")
    assert g.do(spy) is g
    assert g.do_with_error(spy) is g
    assert spy.calls == [1, "e"]


def test_unwrap():
    v = Fallible.wrap_value(3)
    e = Fallible.wrap_error("bad")
    assert v.unwrap(lambda x: x + 1, len) == 4
    assert e.unwrap(lambda x: x + 1, len) == 3
    assert v.unwrap(when_error=len) == 3
    assert e.unwrap(when_error=len) == 3
    assert v.unwrap(when_value=str) == "3"
    assert e.unwrap(when_value=str) == "bad"


@given(fallibles)
def test_unwrap_same_type(f):
    same = f.on_error(lambda e: e.message).then(lambda v: v)
    assert same.unwrap() == same.unwrap(when_value=lambda v: v, when_error=lambda e: e)


def test_immutable():
    f = Fallible.wrap_value(1)
    with pytest.raises(AttributeError):
        f._sum = None  # type: ignore


def test_repr_and_eq():
    assert repr(Fallible.wrap_value(1)) == "Fallible.wrap_value(1)"
    assert repr(Fallible.wrap_error("x")) == "Fallible.wrap_error('x')"
    assert Fallible.wrap_value(1) != Fallible.wrap_error(1)
    assert len({Fallible.wrap_value(1), Fallible.wrap_value(1)}) == 1


@pytest.mark.asyncio
async def test_async_transform_always_pending():
    async def fetch(x):
        return x + 1

    chains = [
        Fallible.wrap_value(1).then(fetch),
        Fallible.wrap_error(1).then(fetch),
        Fallible.wrap_value(1).on_error(fetch),
        Fallible.wrap_value(1).do_with_error(fetch),
    ]
    assert all(isinstance(c, Pending) for c in chains)
    assert [await c for c in chains] == [
        Fallible.wrap_value(2),
        Fallible.wrap_error(1),
        Fallible.wrap_value(1),
        Fallible.wrap_value(1),
    ]


@pytest.mark.asyncio
async def test_fallible_is_awaitable():
    f = Fallible.wrap_value(1)
    assert (await f) is f
