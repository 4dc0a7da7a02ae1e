import pytest

from algebraic_sum.demo import (
    ErrableController,
    FallibleController,
    InputModel,
    OutputModel,
    TOO_SHORT,
    Validator,
    ViewAction,
)


def test_validator():
    assert Validator().validate(InputModel("hi")).errors == [TOO_SHORT]
    assert TOO_SHORT.code == 7 and TOO_SHORT.message == "too short"
    assert Validator().validate(InputModel("hello!")).is_valid
    assert Validator().validate_into_errable(InputModel("hi")).try_get_t2() == (True, [TOO_SHORT])
    assert Validator().validate_as_fallible(InputModel("hello")).is_value()


class SpyingErrableController(ErrableController):
    def __init__(self):
        super().__init__()
        self.processed: list[str] = []

    def some_processing(self, model):
        self.processed.append(model.some_data)
        return super().some_processing(model)


@pytest.mark.parametrize(
    "action", ["action", "action_with_reduce", "action_classic"]
)
def test_errable_short_input(action):
    controller = SpyingErrableController()
    view = getattr(controller, action)(InputModel("hi"))
    assert view == ViewAction("Index", None)
    assert controller.model_state_errors == ["too short"]
    assert controller.processed == []


@pytest.mark.parametrize(
    "action", ["action", "action_with_reduce", "action_classic"]
)
def test_errable_long_input(action):
    controller = SpyingErrableController()
    view = getattr(controller, action)(InputModel("hello!"))
    assert view == ViewAction("Index", OutputModel("!olleh"))
    assert controller.model_state_errors == []
    assert controller.processed == ["hello!"]


@pytest.mark.asyncio
async def test_errable_async():
    controller = ErrableController()
    assert await controller.action_async(InputModel("hello!")) == ViewAction(
        "Index", OutputModel("!olleh")
    )
    assert await controller.action_async(InputModel("hi")) == ViewAction("Index")
    assert controller.model_state_errors == ["too short"]


def test_fallible_action():
    controller = FallibleController()
    assert controller.action(InputModel("hello!")) == ViewAction("Index", OutputModel("hello!"))
    assert controller.audited == ["hello!"]
    assert controller.model_state_errors == []

    assert controller.action(InputModel("hi")) == ViewAction("Index")
    assert controller.audited == ["hello!"]
    assert controller.model_state_errors == ["too short"]


@pytest.mark.asyncio
async def test_fallible_action_async():
    controller = FallibleController()
    short, long = InputModel("hi"), InputModel("hello!")
    assert await controller.action_async(long) == controller.action(long)
    assert await controller.action_async(short) == ViewAction("Index")
    assert controller.audited == ["hello!", "hello!"]
    assert controller.model_state_errors == ["too short"]
