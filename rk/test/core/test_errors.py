from __future__ import annotations

from rk.core.errors import ErrorCode


def test_exit_codes_are_stable() -> None:
    assert int(ErrorCode.OK) == 0
    assert int(ErrorCode.USER_ERROR) == 1
    assert int(ErrorCode.ENV_ERROR) == 2
    assert int(ErrorCode.STORAGE_ERROR) == 3
    assert int(ErrorCode.CONFLICT) == 4
    assert int(ErrorCode.IO_ERROR) == 5


def test_str_and_flags() -> None:
    assert str(ErrorCode.STORAGE_ERROR) == "storage error"
    assert ErrorCode.OK.is_success
    assert ErrorCode.CONFLICT.is_error
