from dataclasses import dataclass

from ..errable import Errable
from ..fallible import Fallible, deferred
from .models import Error, ErrorList, InputModel, ValidationResult


TOO_SHORT = Error(7, "too short")


@dataclass
class Validator:
    min_length: int = 5

    def validate(self, model: InputModel) -> ValidationResult:
        if len(model.some_data) < self.min_length:
            return ValidationResult(is_valid=False, errors=[TOO_SHORT])
        return ValidationResult(is_valid=True)

    def validate_into_errable(self, model: InputModel) -> Errable[InputModel, list[Error]]:
        result = self.validate(model)
        if result.is_valid:
            return Errable.from_value(model)
        return Errable.from_error(result.errors)

    def validate_as_fallible(self, model: InputModel) -> Fallible[InputModel, ErrorList]:
        result = self.validate(model)
        if result.is_valid:
            return Fallible.wrap_value(model)
        return Fallible.wrap_error(ErrorList(result.errors))

    @deferred
    async def validate_as_fallible_async(
        self, model: InputModel
    ) -> Fallible[InputModel, ErrorList]:
        return self.validate_as_fallible(model)
