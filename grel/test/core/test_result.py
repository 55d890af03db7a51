from __future__ import annotations

import pytest

from grel.core.result import Err, Ok, Result


def _halve(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


def test_ok() -> None:
    result = _halve(4)
    assert result.is_ok()
    assert not result.is_err()
    assert result.unwrap() == 2
    assert result.map(lambda v: v + 1) == Ok(3)
    assert repr(result) == "Ok(2)"


def test_err() -> None:
    result = _halve(3)
    assert result.is_err()
    assert result.map(lambda v: v + 1) == Err("3 is odd")
    assert repr(result) == "Err('3 is odd')"
    with pytest.raises(ValueError, match="3 is odd"):
        result.unwrap()


def test_pattern_matching() -> None:
    match _halve(10):
        case Ok(value):
            assert value == 5
        case Err():
            pytest.fail("expected Ok")
