from .models import Error, ErrorList, InputModel, OutputModel, ValidationResult, ViewAction
from .validator import Validator, TOO_SHORT
from .controller import Controller, ErrableController, FallibleController

__all__ = [
    "Error", "ErrorList", "InputModel", "OutputModel", "ValidationResult", "ViewAction",
    "Validator", "TOO_SHORT", "Controller", "ErrableController", "FallibleController",
]
