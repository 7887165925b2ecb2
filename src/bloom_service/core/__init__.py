"""Core utilities for the Bloom filter service."""

from .errors import (
    AppError,
    BitMissingError,
    ErrorCode,
    InvalidFilterParamsError,
    ScriptExecutionError,
    UnexpectedScriptResultError,
)

__all__ = [
    "AppError",
    "BitMissingError",
    "ErrorCode",
    "InvalidFilterParamsError",
    "ScriptExecutionError",
    "UnexpectedScriptResultError",
]
