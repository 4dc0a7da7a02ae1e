from __future__ import annotations
from pathlib import Path
from typing import Any, Optional, Type, TypeVar, Union, cast
import json
import tomllib
import types
import typing

from .errors import HelpfulUserError, InputError


T = TypeVar("T")


def identity(x: T) -> T:
    return x


def isgeneric(annot) -> bool:
    return bool(typing.get_origin(annot)) and hasattr(annot, "__args__")


def is_union_type(annot) -> bool:
    return isgeneric(annot) and typing.get_origin(annot) in (Union, types.UnionType)


def matches(annot: Any, value: Any) -> bool:
    """Check whether `value` could inhabit the type `annot` at runtime.

    Parameterised generics are matched on their origin only: `list[int]`
    accepts any list. `Optional[T]` and unions accept a value matching any of
    their members, `Any` and `object` accept everything. Anything that is not
    a class (a `TypeVar`, a string forward reference) is never matched.
    """
    if annot is Any or annot is object:
        return True
    if annot is None or annot is types.NoneType:
        return value is None
    if is_union_type(annot):
        return any(matches(a, value) for a in typing.get_args(annot))
    if isgeneric(annot):
        origin = typing.get_origin(annot)
        if origin is typing.Literal:
            return value in typing.get_args(annot)
        return isinstance(origin, type) and isinstance(value, origin)
    if isinstance(annot, type):
        # bool is an int subclass, but `True` is not meant to fill an `int` slot
        if annot is int and isinstance(value, bool):
            return False
        return isinstance(value, annot)
    return False


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def convert(dtype: Type[T], value: Any) -> T:
    """Convert a raw config value to `dtype`. Strings are parsed, other values
    are accepted when they already have the right type."""
    try:
        return cast(T, _convert(dtype, value))
    except (TypeError, ValueError) as e:
        raise InputError(getattr(dtype, "__name__", str(dtype)), value) from e


def _convert(dtype: Any, value: Any) -> Any:
    if dtype is Any:
        return value
    if dtype is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS:
            return True
        if isinstance(value, str) and value.strip().lower() in _FALSE_STRINGS:
            return False
        raise ValueError(f"not a boolean: {value!r}")
    if matches(dtype, value):
        return value
    if isinstance(value, str) and isinstance(dtype, type):
        return dtype(value.strip())
    if dtype is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    raise TypeError(f"cannot convert {type(value).__name__} to {dtype}")


def read_from_file(path: Path, section: Optional[str] = None) -> Any:
    """Read data from given `path` in given `section`. The path should refer to
    a TOML or JSON file. The `section` string may contain periods to indicate
    deeper nesting.

    Example:

    ```python
    read_from_file(Path("./pyproject.toml"), "tool.algebraic-sum.FeatureFlags")
    ```
    """
    if not path.exists():
        raise HelpfulUserError(f"File not found: {path}")
    with open(path, "rb") as f:
        if path.suffix == ".toml":
            data: Any = tomllib.load(f)
        elif path.suffix == ".json":
            data = json.load(f)
        else:
            raise HelpfulUserError(f"Unrecognized file format: {path}")

    try:
        if section is not None:
            for s in section.split("."):
                data = data[s]
    except (KeyError, TypeError) as e:
        raise HelpfulUserError(
            f"Data file `{path}` should contain section `{section}`."
        ) from e

    return data
