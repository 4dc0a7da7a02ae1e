from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Error:
    code: int
    message: str

    def __str__(self):
        return f"Error ({self.code}): {self.message}"


class ErrorList(list[Error]):
    pass


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[Error] = field(default_factory=list)


@dataclass(frozen=True)
class InputModel:
    some_data: str


@dataclass(frozen=True)
class OutputModel:
    summary: str


@dataclass(frozen=True)
class ViewAction:
    view_name: str
    view_model: Any = None
