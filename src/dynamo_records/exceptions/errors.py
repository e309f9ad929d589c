from __future__ import annotations

from typing import Dict


class HandlerError(Exception):
    """Base exception for dynamo_records.

    Carries a stable machine-readable ``code`` next to the human message so the
    host can hand it back to the caller as-is.
    """

    code = "HANDLER_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


class NoKeyConditionError(HandlerError):
    code = "NO_KEY_CONDITION"

    def __init__(self, message: str = "Please provide at least a primary key or an index field to be able to query"):
        super().__init__(message)


class NoSdkConfigError(HandlerError):
    code = "NO_SDK_CONFIG"

    def __init__(self, message: str = "No aws sdk config found in handler context"):
        super().__init__(message)


class AmbiguousFilterAttributeError(HandlerError):
    code = "AMBIGUOUS_FILTER_ATTRIBUTE"


class InvalidInputError(HandlerError):
    code = "INVALID_INPUT"


class InvalidContextError(HandlerError):
    code = "INVALID_CONTEXT"
