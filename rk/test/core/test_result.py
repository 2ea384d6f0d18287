"""Tests for rk.core.result module."""

import pytest

from rk.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    def test_unwrap(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(42).unwrap_or(0) == 42

    def test_map(self) -> None:
        assert Ok(21).map(lambda x: x * 2) == Ok(42)

    def test_map_err_is_noop(self) -> None:
        assert Ok(42).map_err(lambda e: f"error: {e}") == Ok(42)

    def test_frozen(self) -> None:
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 0  # type: ignore[misc]

    def test_equality(self) -> None:
        assert Ok(42) == Ok(42)
        assert Ok(42) != Ok(0)
        assert Ok(42) != Err(42)


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="called unwrap on Err"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        result: Result[int, str] = Err("boom")
        assert result.unwrap_or(7) == 7

    def test_map_is_noop(self) -> None:
        result: Result[int, str] = Err("boom")
        assert result.map(lambda x: x * 2) == Err("boom")

    def test_map_err(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")

    def test_repr(self) -> None:
        assert repr(Err("boom")) == "Err('boom')"


class TestTypeGuards:
    def test_is_ok(self) -> None:
        assert is_ok(Ok(1)) is True
        assert is_ok(Err(1)) is False

    def test_is_err(self) -> None:
        assert is_err(Err(1)) is True
        assert is_err(Ok(1)) is False

    def test_pattern_matching(self) -> None:
        def describe(result: Result[int, str]) -> str:
            match result:
                case Ok(value):
                    return f"ok {value}"
                case Err(error):
                    return f"err {error}"

        assert describe(Ok(1)) == "ok 1"
        assert describe(Err("x")) == "err x"
