# hostel/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class RemoteError(Exception):
    """
    The single error type of every backend call.
    Network failures, validation errors and permission errors all end up here;
    `message` is what the user gets to see.
    """

    def __init__(self, message: str, code: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def __repr__(self) -> str:
        return f"RemoteError({self.message!r}, code={self.code!r}, status={self.status!r})"


@dataclass
class Result(Generic[T]):
    data: Optional[T] = None
    error: Optional[RemoteError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Optional[T] = None) -> "Result[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: RemoteError) -> "Result[T]":
        return cls(error=error)
