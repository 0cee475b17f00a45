"""Error codes and the runtime exception type"""

__all__ = ["ErrorCode", "MewlixError"]

import enum


class ErrorCode(enum.Enum):
    """Closed set of failure kinds raised by the runtime.

    The value of each member is the numeric id exposed to Mewlix programs
    through `std.error` and caught error boxes.
    """

    TypeMismatch = 0
    InvalidOp = 1
    DivideByZero = 2
    BadConversion = 3
    InvalidImport = 4
    CriticalError = 5
    ExternalError = 6
    CatOnComputer = 7

    @property
    def id(self):
        """(int) Numeric identifier of the code."""
        return self.value

    def make_message(self, message):
        return f"[{self.name}] {message}"


class MewlixError(Exception):
    """Failure raised by any runtime operation.

    Args:
        code: (ErrorCode) Kind of failure
        message: (str) Human readable description

    Attributes:
        code: (ErrorCode) Kind of failure
        message: (str) Description without the code prefix
    """

    def __init__(self, code, message):
        if not isinstance(code, ErrorCode):
            raise TypeError(f"MewlixError requires an ErrorCode, got {type(code).__name__}")
        self.code = code
        self.message = message
        super().__init__(code.make_message(message))
