from dataclasses import dataclass
from typing import Any


class InvalidState(AssertionError):
    """A sum value carries a discriminant outside of its slot range. This only
    happens when an instance was corrupted; it is never a domain failure."""

    def __init__(self, which: Any, arity: int):
        super().__init__(
            f"Invalid internal state. The value of 'which' is {which} "
            f"which was unexpected for a sum of {arity} slots"
        )
        self.which = which
        self.arity = arity


@dataclass
class InvalidCast(TypeError):
    requested: int
    which: int

    def __post_init__(self):
        TypeError.__init__(self, str(self))

    def __str__(self):
        return f"This sum contains a T{self.which}, not a T{self.requested}"


@dataclass
class AmbiguousPayload(TypeError):
    value: Any
    slots: list[int]

    def __post_init__(self):
        TypeError.__init__(self, str(self))

    def __str__(self):
        slots = ", ".join(f"T{k}" for k in self.slots)
        return (
            f"Value {self.value!r} matches more than one slot ({slots}); "
            f"construct the sum explicitly"
        )


class UserError(Exception):
    def __str__(self):
        return "Unknown user error."


@dataclass
class HelpfulUserError(UserError):
    msg: str

    def __str__(self):
        return self.msg


@dataclass
class ConfigError(UserError):
    path: str
    msg: str

    def __str__(self):
        return f"Config `{self.path}`: {self.msg}"


@dataclass
class InputError(UserError):
    expected: str
    got: Any

    def __str__(self):
        return f"Expected {self.expected}, got: {self.got}"
