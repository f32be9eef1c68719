#!/usr/bin/env python3
"""Error kinds reported while importing and cleaning routes."""

from enum import Enum


class ErrorKind(Enum):
    """Enumeration for route error kinds."""

    INVALID_RECORD_SHAPE = "wrong number of fields"
    INVALID_RECORD_VALUE = "invalid field value"
    SOURCE_UNAVAILABLE = "source unavailable"
    SAME_TIMESTAMP = "same timestamp"
    INVALID_COLLECTION_STATE = "invalid collection state"

    def __str__(self) -> str:
        return self.value


class RouteError(Exception):
    """Raised when a route cannot be imported or cleaned."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"[{self.kind}] {self.message}"
