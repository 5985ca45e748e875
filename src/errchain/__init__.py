from errchain.chain import find, matches, unwrap, walk
from errchain.errors import (
    ErrorType,
    StructuredError,
    add_context,
    add_error_context,
    cause,
    detail,
    format_trace,
    get_context,
    get_context_value,
    get_error_context,
    get_error_context_value,
    get_type,
    is_fail_fast,
    key,
    new,
    newf,
    pointer,
    with_cause,
    with_detail,
    with_fail_fast,
    with_key,
    with_key_and_detail,
    with_pointer,
    wrap,
    wrapf,
)
from errchain.traced import TracedError

__all__ = [
    "ErrorType",
    "StructuredError",
    "TracedError",
    "add_context",
    "add_error_context",
    "cause",
    "detail",
    "find",
    "format_trace",
    "get_context",
    "get_context_value",
    "get_error_context",
    "get_error_context_value",
    "get_type",
    "is_fail_fast",
    "key",
    "matches",
    "new",
    "newf",
    "pointer",
    "unwrap",
    "walk",
    "with_cause",
    "with_detail",
    "with_fail_fast",
    "with_key",
    "with_key_and_detail",
    "with_pointer",
    "wrap",
    "wrapf",
]
