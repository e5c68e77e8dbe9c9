"""Tests for draftrel.core.result module."""

from __future__ import annotations

import pytest

from draftrel.core.result import Err, Ok, Result


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


def test_ok_carries_value() -> None:
    assert Ok(42).value == 42
    assert repr(Ok("x")) == "Ok('x')"


def test_err_carries_error() -> None:
    assert Err("boom").error == "boom"
    assert repr(Err("x")) == "Err('x')"


def test_equality_is_by_variant_and_payload() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)


def test_pattern_matching() -> None:
    match _half(3):
        case Ok(value):
            pytest.fail(f"unexpected value {value}")
        case Err(error):
            assert error == "3 is odd"

    match _half(8):
        case Ok(value):
            assert value == 4
        case Err(error):
            pytest.fail(error)


def test_frozen() -> None:
    result = Ok(1)
    with pytest.raises(AttributeError):
        result.value = 2  # type: ignore[misc]
