"""Process exit codes.

A run either succeeds or stops at the first check that does not hold, so
there are only two codes. Printing the usage summary counts as success.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    RELEASE_FAILED = 1  # any gate check, build step or config load
