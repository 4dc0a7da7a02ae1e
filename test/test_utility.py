from pathlib import Path
from typing import Any, Literal, Optional

import pytest

from algebraic_sum.errors import HelpfulUserError, InputError
from algebraic_sum.utility import convert, matches, read_from_file


def test_matches():
    assert matches(int, 3)
    assert not matches(int, True)
    assert matches(bool, True)
    assert matches(Optional[Path], None)
    assert matches(Optional[Path], Path("hello.txt"))
    assert not matches(Optional[Path], "hello.txt")
    assert matches(list[str], [1, 2])
    assert matches(Literal["a", "b"], "b")
    assert not matches(Literal["a", "b"], "c")
    assert matches(Any, object())
    assert not matches("Path", Path("x"))


def test_convert():
    assert convert(int, "12") == 12
    assert convert(bool, "True") is True
    assert convert(bool, " off ") is False
    assert convert(float, 3) == 3.0
    assert convert(str, "x") == "x"
    assert isinstance(convert(Path, "hello.txt"), Path)

    with pytest.raises(InputError):
        convert(int, "twelve")
    with pytest.raises(InputError):
        convert(bool, "maybe")
    with pytest.raises(InputError):
        convert(str, 5)


def test_read_from_file(tmp_path: Path):
    toml = tmp_path / "flags.toml"
    toml.write_text('[a.b]\nc = 1\n')
    assert read_from_file(toml) == {"a": {"b": {"c": 1}}}
    assert read_from_file(toml, "a.b") == {"c": 1}

    js = tmp_path / "flags.json"
    js.write_text('{"a": {"c": 2}}')
    assert read_from_file(js, "a") == {"c": 2}

    with pytest.raises(HelpfulUserError):
        read_from_file(toml, "a.x")
    with pytest.raises(HelpfulUserError):
        read_from_file(tmp_path / "missing.toml")

    other = tmp_path / "flags.ini"
    other.write_text("")
    with pytest.raises(HelpfulUserError):
        read_from_file(other)
