"""Tests for relgate.core.errors module."""

from relgate.core.errors import ErrorCode


def test_exit_codes_are_stable() -> None:
    assert int(ErrorCode.OK) == 0
    assert int(ErrorCode.RELEASE_FAILED) == 1
