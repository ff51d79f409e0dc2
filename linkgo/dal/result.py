"""
Result Normalization

Every facade operation returns a Result: either data or a NormalizedError,
never both, and never a raised exception.
"""

import logging
import re
from typing import Any, Awaitable, Optional, Sequence, Tuple

from postgrest.exceptions import APIError
from pydantic import BaseModel, Field, model_validator
from supabase_auth.errors import AuthError, AuthRetryableError

logger = logging.getLogger(__name__)

# Error codes produced locally
AUTH_REQUIRED = "AUTH_REQUIRED"
BAD_REQUEST = "BAD_REQUEST"
AUTH_ERROR = "AUTH_ERROR"
NOT_FOUND = "NOT_FOUND"
UNKNOWN = "UNKNOWN"

# Relabel tables: (pattern, replacement message). These match upstream
# Postgres/trigger wording and break silently if that wording changes.
TIME_CONFLICT_RULES: Sequence[Tuple[re.Pattern, str]] = (
    (re.compile(r"overlap|conflict|time", re.IGNORECASE), "time conflict"),
)
STATUS_TRANSITION_RULES: Sequence[Tuple[re.Pattern, str]] = (
    (re.compile(r"transition|invalid|not[\s_-]?allowed", re.IGNORECASE), "invalid status transition"),
)


class NormalizedError(BaseModel):
    """Failure shape shared by every operation"""
    code: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class Result(BaseModel):
    """Uniform {data, error} return value"""
    data: Optional[Any] = None
    error: Optional[NormalizedError] = None

    @model_validator(mode="after")
    def _not_both(self):
        if self.error is not None and self.data is not None:
            raise ValueError("Result cannot carry both data and error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any = None) -> "Result":
        return cls(data=data)

    @classmethod
    def failure(cls, error: NormalizedError) -> "Result":
        return cls(error=error)

    @classmethod
    def fail(cls, code: str, message: str) -> "Result":
        return cls(error=NormalizedError(code=code, message=message))


def _message_of(failure: Any) -> str:
    message = getattr(failure, "message", None)
    if not message:
        message = str(failure)
    return message or type(failure).__name__ or "Unknown error"


def to_error(failure: Any) -> NormalizedError:
    """
    Map any failure value into a NormalizedError.

    Handles PostgREST APIError, Supabase AuthError, dict payloads with
    code/message keys, and arbitrary exceptions.
    """
    if isinstance(failure, NormalizedError):
        return failure

    if isinstance(failure, AuthRetryableError):
        # Connection failures and timeouts inside the auth client
        return NormalizedError(code=UNKNOWN, message=_message_of(failure))

    if isinstance(failure, AuthError):
        return NormalizedError(code=AUTH_ERROR, message=_message_of(failure))

    if isinstance(failure, APIError):
        return NormalizedError(
            code=failure.code or UNKNOWN,
            message=_message_of(failure),
        )

    if isinstance(failure, dict):
        code = failure.get("code") or UNKNOWN
        message = failure.get("message") or str(failure)
        return NormalizedError(code=str(code), message=str(message))

    return NormalizedError(code=UNKNOWN, message=_message_of(failure))


def _payload_error(payload: Any) -> Any:
    """Return the error carried by a {data, error} style payload, if any"""
    if isinstance(payload, dict) and "error" in payload and set(payload) <= {"data", "error"}:
        return payload["error"]
    if isinstance(payload, Result):
        return payload.error
    return None


def _payload_data(payload: Any) -> Any:
    if isinstance(payload, dict) and "error" in payload and set(payload) <= {"data", "error"}:
        return payload.get("data")
    if isinstance(payload, Result):
        return payload.data
    return payload


async def normalize(call: Awaitable[Any]) -> Result:
    """
    Await a remote call and wrap its outcome in a Result.

    Args:
        call: Awaitable resolving to a payload or raising

    Returns:
        Result with data on success, NormalizedError otherwise
    """
    try:
        payload = await call
    except (APIError, AuthError) as e:
        error = to_error(e)
        logger.warning(f"Remote call failed [{error.code}]: {error.message}")
        return Result.failure(error)
    except Exception as e:
        logger.error(f"Unexpected error in remote call: {e!r}")
        return Result.failure(to_error(e))

    failure = _payload_error(payload)
    if failure is not None:
        error = to_error(failure)
        logger.warning(f"Remote call returned error [{error.code}]: {error.message}")
        return Result.failure(error)

    return Result.success(_payload_data(payload))


def relabel(result: Result, rules: Sequence[Tuple[re.Pattern, str]]) -> Result:
    """Rewrite the message of a failed result for known patterns; code is kept"""
    if result.error is None:
        return result

    for pattern, replacement in rules:
        if pattern.search(result.error.message):
            return Result.fail(result.error.code, replacement)

    return result
