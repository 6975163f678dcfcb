"""
Tagged results returned by the service layer.

Expected failures (bad input, unknown id, duplicate title) are values, not
exceptions. The router hands a ``Failure`` to ``errors.failure_response``,
which reads the HTTP status from the failure itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class FailureKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


# Lookups by unknown id answer 400, not 404.
STATUS_BY_KIND = {
    FailureKind.VALIDATION: 400,
    FailureKind.NOT_FOUND: 400,
    FailureKind.CONFLICT: 409,
}


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str
    cause: Optional[str] = None

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


Outcome = Union[Success[T], Failure]
