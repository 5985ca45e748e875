from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from errchain.errors import (
    ErrorType,
    cause,
    get_error_context,
    get_type,
    is_fail_fast,
)


class ConfiguredBaseModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ErrorInfo(ConfiguredBaseModel):
    """Serializable snapshot of an error chain."""

    error_type: ErrorType = ErrorType.NO_TYPE
    message: str
    context: dict[str, str] = Field(default_factory=dict)
    fail_fast: bool = False
    cause: str | None = None


def describe(err: BaseException) -> ErrorInfo:
    root = cause(err)
    return ErrorInfo(
        error_type=get_type(err),
        message=str(err),
        context=get_error_context(err) or {},
        fail_fast=is_fail_fast(err),
        cause=repr(root) if root is not None and root is not err else None,
    )
