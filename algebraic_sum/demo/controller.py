"""A simplified web controller showing the same action written a few ways:
with `Errable`, with `Fallible`, synchronous and asynchronous, and the
classic imperative version for comparison."""

from __future__ import annotations
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..errable import Errable, deferred_errable
from ..fallible import Fallible
from ..logging import logger
from .models import Error, ErrorList, InputModel, OutputModel, ViewAction
from .validator import Validator


log = logger("demo")


@dataclass
class Controller:
    view_name: str = "Index"
    validator: Validator = field(default_factory=Validator)
    model_state_errors: list[str] = field(default_factory=list)

    def view(self, model: Any = None) -> ViewAction:
        return ViewAction(self.view_name, model)

    def copy_errors_to_model_state(self, errors: list[Error]):
        self.model_state_errors = [e.message for e in errors]

    def copy_errors_and_return(
        self, render: Callable[[], ViewAction]
    ) -> Callable[[list[Error]], ViewAction]:
        def handler(errors: list[Error]) -> ViewAction:
            self.copy_errors_to_model_state(errors)
            return render()

        return handler


@dataclass
class ErrableController(Controller):
    def some_processing(self, model: InputModel) -> Errable[OutputModel, list[Error]]:
        return Errable.from_value(OutputModel(model.some_data[::-1]))

    @deferred_errable
    async def some_processing_async(
        self, model: InputModel
    ) -> Errable[OutputModel, list[Error]]:
        return self.some_processing(model)

    def action(self, model: InputModel) -> ViewAction:
        return (
            self.validator.validate_into_errable(model)
            .on_success(self.some_processing)
            .on_success(self.view)
            .on_error(self.copy_errors_and_return(self.view))
            .reduce()
        )

    def action_with_reduce(self, model: InputModel) -> ViewAction:
        return (
            self.validator.validate_into_errable(model)
            .on_success(self.some_processing)
            .reduce(
                on_success=self.view,
                on_error=self.copy_errors_and_return(self.view),
            )
        )

    async def action_async(self, model: InputModel) -> ViewAction:
        return await (
            self.validator.validate_into_errable(model)
            .on_success(self.some_processing_async)
            .on_success(self.view)
            .reduce(on_error=self.copy_errors_and_return(self.view))
        )

    def action_classic(self, model: InputModel) -> ViewAction:
        validation = self.validator.validate(model)
        if not validation.is_valid:
            self.copy_errors_to_model_state(validation.errors)
            return self.view()
        result = self.some_processing(model)
        failed, errors = result.try_get_t2()
        if failed:
            self.copy_errors_to_model_state(errors or [])
            return self.view()
        return self.view(result.as_t1())


@dataclass
class FallibleController(Controller):
    audited: list[str] = field(default_factory=list)

    def some_processing(self, model: InputModel) -> Fallible[OutputModel, ErrorList]:
        return Fallible.wrap_value(OutputModel(model.some_data))

    async def some_processing_async(
        self, model: InputModel
    ) -> Fallible[OutputModel, ErrorList]:
        return self.some_processing(model)

    def audit(self, model: OutputModel):
        log.info("auditing: `%s`", model.summary)
        self.audited.append(model.summary)

    def append_errors_to_model_state(self, errors: ErrorList):
        self.model_state_errors.extend(e.message for e in errors)

    def action(self, model: InputModel) -> ViewAction:
        return (
            self.validator.validate_as_fallible(model)
            .then(self.some_processing)
            .do(self.audit)
            .then(self.view)
            .do_with_error(self.append_errors_to_model_state)
            .on_error(lambda _: self.view())
            .unwrap()
        )

    async def action_async(self, model: InputModel) -> ViewAction:
        return await (
            self.validator.validate_as_fallible_async(model)
            .then(self.some_processing_async)
            .do(self.audit)
            .then(self.view)
            .do_with_error(self.append_errors_to_model_state)
            .on_error(lambda _: self.view())
            .unwrap()
        )
